# src/yatta/errors.py

"""Error kinds raised by the task manager and its store."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


class TaskError(RuntimeError):
    """Base error carrying a short machine code and optional details."""

    code = "TASK_ERROR"

    def __init__(self, message: str, details: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = dict(details or {})

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message, "details": self.details}


class ValidationError(TaskError, ValueError):
    """Malformed due date/clock input. Nothing was applied."""

    code = "VALIDATION_ERROR"


class StorageError(TaskError):
    """The task file could not be read, written, encoded or decoded."""

    code = "STORAGE_ERROR"


class GenerationError(TaskError):
    """A task identifier could not be generated."""

    code = "GENERATION_ERROR"
