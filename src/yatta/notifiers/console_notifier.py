# src/yatta/notifiers/console_notifier.py

from __future__ import annotations

import sys
from datetime import datetime
from typing import TextIO

from ..tasks.task_models import Task
from ..tasks.task_scheduler import format_notification


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


class ConsoleNotifier:
    """Print due tasks next to the console REPL."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    async def notify(self, task: Task) -> None:
        stream = self._stream or sys.stdout
        print(f"\n[{_ts_local()}] [DUE] {format_notification(task)}", file=stream, flush=True)
