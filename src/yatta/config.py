# src/yatta/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- No secrets required at import time.
- Components take settings injected; get_settings() is only the default.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "YATTA"

NOTIFIER_CHOICES = ("console", "log")

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    tasks_path: Path

    # ---- Scanner / notifications ----
    scan_interval_seconds: float
    notify_cooldown_hours: float
    notify_queue_size: int
    notifier: str

    # ---- Front end ----
    console_enabled: bool

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "yatta").strip() or "yatta"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/yatta"))
        tasks_path = _env_path(_k("TASKS_PATH"), data_dir / "todos.json")

        scan_interval_seconds = _env_float(_k("SCAN_INTERVAL_SECONDS"), 1.0)
        if scan_interval_seconds <= 0:
            scan_interval_seconds = 1.0

        notify_cooldown_hours = _env_float(_k("NOTIFY_COOLDOWN_HOURS"), 24.0)
        if notify_cooldown_hours < 0:
            notify_cooldown_hours = 24.0

        notify_queue_size = _env_int(_k("NOTIFY_QUEUE_SIZE"), 256)
        if notify_queue_size <= 0:
            notify_queue_size = 256

        notifier = _env(_k("NOTIFIER"), "console").strip().lower()
        if notifier not in NOTIFIER_CHOICES:
            notifier = "console"

        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            tasks_path=tasks_path,
            scan_interval_seconds=scan_interval_seconds,
            notify_cooldown_hours=notify_cooldown_hours,
            notify_queue_size=notify_queue_size,
            notifier=notifier,
            console_enabled=console_enabled,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
