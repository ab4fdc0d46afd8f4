# src/yatta/tasks/task_scheduler.py

from __future__ import annotations

"""
Due-task scanning and notification dispatch.

Two small loops connected by a bounded asyncio.Queue:
- the scanner ticks every interval, asks the manager for newly-due tasks and
  pushes them onto the queue without ever waiting on it,
- the dispatcher drains the queue and hands each task to the notifier.

Delivery failures are logged and dropped: notified_at was already advanced,
so a task gets at most one notification attempt per cooldown window.

To stop either loop, cancel its coroutine/task (or set the scanner's stop_event).
"""

import asyncio
import contextlib
import logging
from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING, Protocol

from ..core.ports import Notifier
from .task_models import Task

if TYPE_CHECKING:
    from .task_manager import DueEmitter

logger = logging.getLogger(__name__)

DEFAULT_SCAN_INTERVAL_SECONDS = 1.0
DEFAULT_QUEUE_SIZE = 256


class DueTaskSource(Protocol):
    def check_due_tasks(self, emit: DueEmitter, *, now: datetime | None = None) -> list[Task]: ...


def queue_emitter(outbound: asyncio.Queue[Task]) -> Callable[[Task], bool]:
    """
    Non-blocking handoff onto `outbound`.

    Returns False when the queue is full so the caller keeps the task for the next tick.
    Must be called from the thread running the queue's event loop.
    """

    def emit(task: Task) -> bool:
        try:
            outbound.put_nowait(task)
        except asyncio.QueueFull:
            logger.warning(
                "Notification queue full (%d), deferring task id=%s", outbound.qsize(), task.id
            )
            return False
        return True

    return emit


def format_notification(task: Task) -> str:
    due = task.due_instant
    if due is None:
        return f"{task.name or task.id} is due"
    return f"{task.name or task.id} is due ({due:%Y-%m-%d %H:%M:%S})"


async def run_due_task_scanner(
        source: DueTaskSource,
        emit: Callable[[Task], bool],
        *,
        interval_seconds: float = DEFAULT_SCAN_INTERVAL_SECONDS,
        stop_event: asyncio.Event | None = None,
) -> None:
    """
    Fixed-period polling loop: Idle -> Scanning -> Idle, until stopped.

    A failing tick (e.g. the task file cannot be written) is logged and the
    loop keeps going; the manager retries persisting on the next tick.
    """
    sleep_s = max(0.01, float(interval_seconds))
    logger.info("Due-task scanner started (interval=%.2fs).", sleep_s)

    while stop_event is None or not stop_event.is_set():
        try:
            source.check_due_tasks(emit)
        except Exception:
            logger.exception("Due-task scan failed")

        if stop_event is None:
            await asyncio.sleep(sleep_s)
        else:
            with contextlib.suppress(asyncio.TimeoutError):
                await asyncio.wait_for(stop_event.wait(), timeout=sleep_s)

    logger.info("Due-task scanner stopped.")


async def run_notification_dispatcher(outbound: asyncio.Queue[Task], notifier: Notifier) -> None:
    """Forward every due task from `outbound` to `notifier`, forever."""
    while True:
        task = await outbound.get()
        try:
            await notifier.notify(task)
            logger.debug("Notified task id=%s", task.id)
        except Exception:
            logger.exception("Notifier failed task_id=%s", task.id)
        finally:
            outbound.task_done()
