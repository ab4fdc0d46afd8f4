# src/yatta/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the task store, task manager and notifier into AppState,
- starts the due-task scanner + notification dispatcher in a background thread.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import threading
from dataclasses import dataclass
from datetime import timedelta

from ..config import get_settings
from ..core.ports import Notifier
from ..core.state import AppState
from ..notifiers.console_notifier import ConsoleNotifier
from ..notifiers.log_notifier import LogNotifier
from ..tasks.task_manager import TaskManager
from ..tasks.task_models import Task
from ..tasks.task_scheduler import run_notification_dispatcher
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_path.parent.mkdir(parents=True, exist_ok=True)


def build_notifier(settings) -> Notifier:
    name = str(getattr(settings, "notifier", "console")).lower()
    if name == "log":
        return LogNotifier()
    return ConsoleNotifier()


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().

    Raises StorageError when the existing task file cannot be loaded.
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    cooldown = timedelta(hours=float(getattr(settings, "notify_cooldown_hours", 24.0)))
    manager = TaskManager(TaskStore(settings.tasks_path), cooldown=cooldown)

    return AppState(
        settings=settings,
        manager=manager,
        notifier=build_notifier(settings),
    )


@dataclass
class ScannerBackgroundRunner:
    thread: threading.Thread
    loop: asyncio.AbstractEventLoop
    stop_event: asyncio.Event

    def stop(self) -> None:
        try:
            self.loop.call_soon_threadsafe(self.stop_event.set)
        except RuntimeError:
            logger.debug("Failed to signal scanner stop (loop closed).", exc_info=True)

    def join(self, timeout: float | None = None) -> None:
        self.thread.join(timeout=timeout)


async def _run_scanner(state: AppState, stop_event: asyncio.Event) -> None:
    settings = state.settings
    outbound: asyncio.Queue[Task] = asyncio.Queue(
        maxsize=int(getattr(settings, "notify_queue_size", 256))
    )

    dispatcher = asyncio.create_task(run_notification_dispatcher(outbound, state.notifier))
    try:
        await state.manager.run(
            outbound,
            interval_seconds=float(getattr(settings, "scan_interval_seconds", 1.0)),
            stop_event=stop_event,
        )
    finally:
        dispatcher.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await dispatcher


def start_scanner_in_background(state: AppState) -> ScannerBackgroundRunner | None:
    """
    Start the due-task scanner in a background thread with its own event loop
    (the console REPL blocks on input() in the main thread).
    """
    ready = threading.Event()
    holder: dict[str, object] = {}

    def runner() -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        stop_event = asyncio.Event()

        holder["loop"] = loop
        holder["stop_event"] = stop_event
        ready.set()

        try:
            loop.run_until_complete(_run_scanner(state, stop_event))
        except Exception:
            logger.exception("Scanner thread crashed.")
        finally:
            loop.close()

    t = threading.Thread(target=runner, name="yatta-scanner", daemon=True)
    t.start()

    ready.wait(timeout=5.0)
    loop = holder.get("loop")
    stop_event = holder.get("stop_event")

    if not isinstance(loop, asyncio.AbstractEventLoop) or not isinstance(stop_event, asyncio.Event):
        logger.error("Scanner thread did not initialize properly.")
        return None

    logger.info("Scanner background thread started.")
    return ScannerBackgroundRunner(thread=t, loop=loop, stop_event=stop_event)
