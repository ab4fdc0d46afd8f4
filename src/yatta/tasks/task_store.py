# src/yatta/tasks/task_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from collections.abc import Iterable
from pathlib import Path

from ..errors import StorageError
from .due_time import normalize_due
from .task_models import Task

logger = logging.getLogger(__name__)


class TaskStore:
    """
    JSON file task store.

    The whole ordered collection is rewritten on every save:
    - encode to a sibling temp file
    - os.replace() it over the real path

    A crash mid-save therefore leaves either the old or the new snapshot on disk.
    An absent or empty file loads as an empty collection (first run).
    """

    def __init__(self, path: str | Path = "todos.json") -> None:
        self._path = Path(path)
        logger.info("TaskStore ready path=%s", self._path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> list[Task]:
        try:
            raw = self._path.read_text("utf-8")
        except FileNotFoundError:
            logger.info("Task file %s not found, starting empty.", self._path)
            return []
        except OSError as exc:
            raise StorageError(
                f"reading task file failed: {self._path}", {"path": str(self._path)}
            ) from exc
        except UnicodeDecodeError as exc:
            raise StorageError(
                f"task file is not valid UTF-8: {self._path}", {"path": str(self._path)}
            ) from exc

        if not raw.strip():
            return []

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise StorageError(
                f"decoding task file failed: {self._path}", {"path": str(self._path)}
            ) from exc

        if not isinstance(data, list):
            raise StorageError(
                f"task file must contain a JSON array: {self._path}", {"path": str(self._path)}
            )

        # Derived due fields are recomputed from the raw ones, never trusted from disk.
        try:
            tasks = [normalize_due(Task.from_dict(item)) for item in data]
        except (TypeError, ValueError) as exc:
            raise StorageError(
                f"decoding task record failed: {exc}", {"path": str(self._path)}
            ) from exc

        logger.debug("Loaded %d tasks from %s", len(tasks), self._path)
        return tasks

    def save(self, tasks: Iterable[Task]) -> None:
        records = [t.to_dict() for t in tasks]
        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(records, ensure_ascii=False, indent=2) + "\n", "utf-8")
            os.replace(tmp, self._path)
        except (OSError, TypeError, ValueError) as exc:
            with contextlib.suppress(OSError):
                tmp.unlink()
            raise StorageError(
                f"writing task file failed: {self._path}", {"path": str(self._path)}
            ) from exc

        logger.debug("Saved %d tasks to %s", len(records), self._path)
