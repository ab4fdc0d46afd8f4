# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from yatta.core.state import AppState
from yatta.tasks.task_manager import TaskManager

from .fakes import FlakyTaskStore, RecordingNotifier


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="yatta-test",
        log_level="DEBUG",
        data_dir=tmp_path,
        tasks_path=tmp_path / "todos.json",
        scan_interval_seconds=0.01,
        notify_cooldown_hours=24.0,
        notify_queue_size=8,
        notifier="log",
        console_enabled=False,
    )


@pytest.fixture()
def store(settings: SimpleNamespace) -> FlakyTaskStore:
    return FlakyTaskStore(settings.tasks_path)


@pytest.fixture()
def manager(store: FlakyTaskStore) -> TaskManager:
    """Real manager over a real JSON file in tmp_path."""
    return TaskManager(store)


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture()
def state(settings: SimpleNamespace, manager: TaskManager, notifier: RecordingNotifier) -> AppState:
    return AppState(settings=settings, manager=manager, notifier=notifier)
