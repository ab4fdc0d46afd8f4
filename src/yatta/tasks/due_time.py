# src/yatta/tasks/due_time.py

"""
Due date/clock normalization.

Turns the raw, possibly partial, due fields of a task into a concrete due instant:
- no date and no clock -> no due instant
- date only            -> date at midnight
- clock only           -> today's date at that clock
- date and clock       -> both combined

Malformed input raises ValidationError before anything is mutated.
"""

from __future__ import annotations

import re
from dataclasses import replace
from datetime import date, datetime, time

from ..errors import ValidationError
from .task_models import Task

DATE_FORMAT = "%Y-%m-%d"
CLOCK_FORMAT = "%H:%M:%S"
MIDNIGHT = time(0, 0, 0)

# strptime alone accepts "2024-3-1" and "9:5:0"; the raw forms must be zero-padded.
_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_CLOCK_RE = re.compile(r"^\d{2}:\d{2}:\d{2}$")


def parse_due_date(raw: str) -> date:
    if not isinstance(raw, str) or not _DATE_RE.match(raw):
        raise ValidationError(
            f"due_date must be YYYY-MM-DD, got {raw!r}", {"field": "due_date", "value": raw}
        )
    try:
        return datetime.strptime(raw, DATE_FORMAT).date()
    except ValueError as exc:
        raise ValidationError(
            f"due_date is not a calendar date: {raw!r}", {"field": "due_date", "value": raw}
        ) from exc


def parse_due_clock(raw: str) -> time:
    if not isinstance(raw, str) or not _CLOCK_RE.match(raw):
        raise ValidationError(
            f"due_clock must be HH:MM:SS, got {raw!r}", {"field": "due_clock", "value": raw}
        )
    try:
        return datetime.strptime(raw, CLOCK_FORMAT).time()
    except ValueError as exc:
        raise ValidationError(
            f"due_clock is not a valid 24-hour time: {raw!r}",
            {"field": "due_clock", "value": raw},
        ) from exc


def normalize_due(task: Task, *, today: date | None = None) -> Task:
    """
    Return a copy of `task` with due_date_time / due_clock_time recomputed
    from its raw due_date / due_clock. The input is never modified.
    """
    raw_date = task.due_date or None
    raw_clock = task.due_clock or None

    if raw_date is None and raw_clock is None:
        return replace(
            task, due_date=None, due_clock=None, due_date_time=None, due_clock_time=None
        )

    clock = parse_due_clock(raw_clock) if raw_clock is not None else None

    if raw_date is None:
        day = today or date.today()
        raw_date = day.strftime(DATE_FORMAT)
    else:
        day = parse_due_date(raw_date)

    return replace(
        task,
        due_date=raw_date,
        due_clock=raw_clock,
        due_date_time=datetime.combine(day, clock or MIDNIGHT),
        due_clock_time=clock,
    )
