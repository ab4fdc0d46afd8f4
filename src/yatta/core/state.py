# src/yatta/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..tasks.task_manager import TaskManager
from .ports import Notifier


@dataclass
class AppState:
    # Settings are stored on the state so commands can show them (/status).
    settings: object

    manager: TaskManager
    notifier: Notifier
