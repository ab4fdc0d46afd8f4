# src/yatta/notifiers/log_notifier.py

from __future__ import annotations

import logging

from ..tasks.task_models import Task
from ..tasks.task_scheduler import format_notification

logger = logging.getLogger(__name__)


class LogNotifier:
    """Headless notifier: due tasks end up in the log (console + file)."""

    async def notify(self, task: Task) -> None:
        logger.info("[DUE] %s id=%s", format_notification(task), task.id)
