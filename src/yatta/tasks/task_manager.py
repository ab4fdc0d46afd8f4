# src/yatta/tasks/task_manager.py

from __future__ import annotations

import asyncio
import logging
import threading
import uuid
from collections.abc import Callable, Mapping
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Any

from ..core.ports import TaskStorage
from ..errors import GenerationError, ValidationError
from .due_time import normalize_due
from .task_models import NEVER_NOTIFIED, Task
from .task_scheduler import DEFAULT_SCAN_INTERVAL_SECONDS, queue_emitter, run_due_task_scanner

logger = logging.getLogger(__name__)

DEFAULT_COOLDOWN = timedelta(hours=24)

# Fields a caller may change through update(); everything else is owned by the manager.
UPDATABLE_FIELDS = ("name", "done", "due_date", "due_clock")

DueEmitter = Callable[[Task], bool]

MAX_ID_ATTEMPTS = 5


def new_task_id() -> str:
    try:
        return str(uuid.uuid4())
    except (OSError, NotImplementedError) as exc:
        raise GenerationError("generating task id failed") from exc


def is_notification_due(task: Task, now: datetime, cooldown: timedelta = DEFAULT_COOLDOWN) -> bool:
    """
    A task is notified when all of these hold:
    - it has a due instant at or before `now`
    - it is not done
    - the last notification is older than `cooldown` (never-notified always is)
    """
    due = task.due_instant
    if due is None or task.done:
        return False
    return due <= now and now - task.notified_at > cooldown


class TaskManager:
    """
    Owns the task collection and the single lock guarding it.

    Every public operation (create/read/update/delete and each scan tick)
    holds the lock for its whole critical section, persistence included.
    A mutation only becomes visible in memory after the store accepted the
    new snapshot; a failed save leaves the collection as it was.
    """

    def __init__(
        self,
        store: TaskStorage,
        *,
        cooldown: timedelta = DEFAULT_COOLDOWN,
        clock: Callable[[], datetime] = datetime.now,
        id_factory: Callable[[], str] = new_task_id,
    ) -> None:
        self._store = store
        self._cooldown = cooldown
        self._clock = clock
        self._id_factory = id_factory
        self._lock = threading.Lock()

        self._tasks: list[Task] = store.load()
        # Set when a scan tick advanced notified_at but could not persist it.
        self._dirty = False

        logger.info("TaskManager ready tasks=%d", len(self._tasks))

    # ---- low-level helpers ----

    def _commit(self, new_tasks: list[Task]) -> None:
        self._store.save(new_tasks)
        self._tasks = new_tasks
        self._dirty = False

    def _next_id(self) -> str:
        existing = {t.id for t in self._tasks}
        for _ in range(MAX_ID_ATTEMPTS):
            task_id = self._id_factory()
            if task_id and task_id not in existing:
                return task_id
            logger.warning("Generated task id %r collides, regenerating.", task_id)
        raise GenerationError(
            f"no unique task id after {MAX_ID_ATTEMPTS} attempts", {"attempts": MAX_ID_ATTEMPTS}
        )

    @staticmethod
    def _merge(current: Task, changes: Task | Mapping[str, Any]) -> Task:
        """
        Sparse patch:
        - Task input: only non-empty fields override (done only when True)
        - mapping input: every updatable key present overrides, None clears a due field
        """
        if isinstance(changes, Task):
            return replace(
                current,
                name=changes.name or current.name,
                done=changes.done or current.done,
                due_date=changes.due_date or current.due_date,
                due_clock=changes.due_clock or current.due_clock,
            )

        patch: dict[str, Any] = {}
        for key in UPDATABLE_FIELDS:
            if key not in changes:
                continue
            value = changes[key]
            if key == "name" and not isinstance(value, str):
                raise ValidationError("name must be a string", {"field": "name"})
            if key == "done" and not isinstance(value, bool):
                raise ValidationError("done must be a boolean", {"field": "done"})
            if key in ("due_date", "due_clock") and value is not None and not isinstance(value, str):
                raise ValidationError(f"{key} must be a string or null", {"field": key})
            patch[key] = value
        return replace(current, **patch)

    @staticmethod
    def _target_id(target: Task | Mapping[str, Any] | str) -> str:
        if isinstance(target, Task):
            return target.id
        if isinstance(target, Mapping):
            return str(target.get("id") or "")
        return str(target or "")

    # ---- public API ----

    def now(self) -> datetime:
        """Current time as the scanner sees it."""
        return self._clock()

    def create(self, task: Task) -> Task:
        """Assign a fresh id, normalize the due fields, append and persist."""
        with self._lock:
            created = normalize_due(
                replace(task, id=self._next_id(), notified_at=NEVER_NOTIFIED)
            )
            self._commit([*self._tasks, created])

        logger.info("Task created id=%s name=%r due=%s", created.id, created.name, created.due_instant)
        return replace(created)

    def read(self) -> list[Task]:
        """Snapshot of the collection in creation order."""
        with self._lock:
            return [replace(t) for t in self._tasks]

    def update(self, changes: Task | Mapping[str, Any]) -> Task | None:
        """
        Merge `changes` over the task with the same id and re-normalize its due fields.

        Returns the updated task, or None when no task has that id (no-op).
        """
        task_id = self._target_id(changes)

        with self._lock:
            new_tasks: list[Task] = []
            updated: Task | None = None
            for task in self._tasks:
                if updated is None and task.id == task_id:
                    task = normalize_due(self._merge(task, changes))
                    updated = task
                new_tasks.append(task)

            if updated is None:
                logger.debug("Update ignored, no task with id=%s", task_id)
                return None

            self._commit(new_tasks)

        logger.info("Task updated id=%s done=%s due=%s", updated.id, updated.done, updated.due_instant)
        return replace(updated)

    def delete(self, target: Task | Mapping[str, Any] | str) -> bool:
        """Remove the task with the given id. Returns False when there was none (no-op)."""
        task_id = self._target_id(target)

        with self._lock:
            for idx, task in enumerate(self._tasks):
                if task.id == task_id:
                    break
            else:
                logger.debug("Delete ignored, no task with id=%s", task_id)
                return False

            self._commit(self._tasks[:idx] + self._tasks[idx + 1:])

        logger.info("Task deleted id=%s", task_id)
        return True

    # ---- scanning ----

    def check_due_tasks(self, emit: DueEmitter, *, now: datetime | None = None) -> list[Task]:
        """
        One scan tick.

        Every task that is due for a notification is handed to `emit`; when the
        handoff is accepted its notified_at is set to `now`. A refused handoff
        leaves the task untouched so the next tick retries it.

        The collection is persisted once at the end of the tick if anything changed.
        On a save failure the advances stay in memory (no re-notify storm) and
        are persisted again on the next tick; the StorageError is raised.
        """
        with self._lock:
            now = now or self._clock()
            emitted: list[Task] = []
            new_tasks: list[Task] = []

            for task in self._tasks:
                if is_notification_due(task, now, self._cooldown) and emit(replace(task)):
                    task = replace(task, notified_at=now)
                    emitted.append(task)
                new_tasks.append(task)

            if not emitted and not self._dirty:
                return []

            self._tasks = new_tasks
            self._dirty = True
            self._commit(new_tasks)

        if emitted:
            logger.info("Scan emitted %d due task(s)", len(emitted))
        return [replace(t) for t in emitted]

    async def run(
        self,
        outbound: asyncio.Queue[Task],
        *,
        interval_seconds: float = DEFAULT_SCAN_INTERVAL_SECONDS,
        stop_event: asyncio.Event | None = None,
    ) -> None:
        """
        Scan for due tasks every `interval_seconds`, pushing them onto `outbound`.

        Runs until cancelled or until `stop_event` is set. `outbound` should be
        bounded: when it is full, due tasks are kept for the next tick instead of
        blocking the lock holder.
        """
        await run_due_task_scanner(
            self,
            queue_emitter(outbound),
            interval_seconds=interval_seconds,
            stop_event=stop_event,
        )
