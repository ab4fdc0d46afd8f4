# src/yatta/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The task manager and the scanner depend on Protocols instead of concrete
implementations, so storage and notification delivery stay swappable and
easy to fake in tests.
"""

from collections.abc import Iterable, Mapping
from typing import Any, Awaitable, Protocol

from ..tasks.task_models import Task


class TaskStorage(Protocol):
    """Whole-collection persistence: load everything, save everything."""

    def load(self) -> list[Task]: ...
    def save(self, tasks: Iterable[Task]) -> None: ...


class TaskRepo(Protocol):
    """
    What front ends (console commands, an HTTP layer) are allowed to call.
    Update/delete with an unknown id are no-ops, not errors.
    """

    def create(self, task: Task) -> Task: ...
    def read(self) -> list[Task]: ...
    def update(self, changes: Task | Mapping[str, Any]) -> Task | None: ...
    def delete(self, target: Task | Mapping[str, Any] | str) -> bool: ...


class Notifier(Protocol):
    """
    Delivery side of the due-task stream.

    Formatting and transport belong to the notifier. Failures are the
    notifier's concern: they never roll back the task's notified_at.
    """

    def notify(self, task: Task) -> Awaitable[None]: ...
