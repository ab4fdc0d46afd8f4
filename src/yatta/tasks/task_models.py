# src/yatta/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time
from typing import Any

# Zero value of notified_at: "never notified". Always older than any cooldown window.
NEVER_NOTIFIED = datetime.min


@dataclass(slots=True)
class Task:
    """
    A single trackable item.

    Raw due fields (due_date / due_clock) are what the caller supplied.
    Derived fields (due_date_time / due_clock_time) are recomputed by the
    normalizer on every create/update and must never be set by callers.
    """

    id: str = ""
    name: str = ""
    done: bool = False

    due_date: str | None = None
    due_clock: str | None = None

    due_date_time: datetime | None = None
    due_clock_time: time | None = None

    notified_at: datetime = NEVER_NOTIFIED

    @property
    def due_instant(self) -> datetime | None:
        return self.due_date_time

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "done": self.done,
            "due_date": self.due_date,
            "due_date_time": _iso_or_none(self.due_date_time),
            "due_clock": self.due_clock,
            "due_clock_time": _iso_or_none(self.due_clock_time),
            "notified_at": self.notified_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Task:
        """
        Rebuild a Task from its JSON-equivalent record.

        Raises ValueError/TypeError on a malformed record; the store turns
        those into StorageError.
        """
        if not isinstance(data, dict):
            raise TypeError(f"task record must be an object, got {type(data).__name__}")

        task_id = data.get("id")
        if not isinstance(task_id, str) or not task_id:
            raise ValueError("task record has no id")

        raw_notified = data.get("notified_at")
        notified_at = _naive_datetime(raw_notified) if raw_notified else NEVER_NOTIFIED

        raw_date_time = data.get("due_date_time")
        raw_clock_time = data.get("due_clock_time")

        return cls(
            id=task_id,
            name=str(data.get("name") or ""),
            done=bool(data.get("done", False)),
            due_date=data.get("due_date") or None,
            due_clock=data.get("due_clock") or None,
            due_date_time=_naive_datetime(raw_date_time) if raw_date_time else None,
            due_clock_time=time.fromisoformat(raw_clock_time) if raw_clock_time else None,
            notified_at=notified_at,
        )


def _naive_datetime(raw: str) -> datetime:
    # Everything is compared against naive local wall-clock time.
    value = datetime.fromisoformat(raw)
    if value.tzinfo is not None:
        raise ValueError(f"timestamp must not carry a UTC offset: {raw!r}")
    return value


def _iso_or_none(value: datetime | time | None) -> str | None:
    return value.isoformat() if value is not None else None
