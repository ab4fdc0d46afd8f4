# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "YATTA_APP_NAME": "App display name (default: yatta).",
    "YATTA_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Paths (gitignored)
    "YATTA_DATA_DIR": "Local data directory, also holds yatta.log (default: .local/yatta).",
    "YATTA_TASKS_PATH": "Task file, a JSON array of tasks (default: <data_dir>/todos.json).",
    # Scanner / notifications
    "YATTA_SCAN_INTERVAL_SECONDS": "How often due tasks are checked (default: 1.0).",
    "YATTA_NOTIFY_COOLDOWN_HOURS": "Minimum time between two notifications of one task (default: 24).",
    "YATTA_NOTIFY_QUEUE_SIZE": "Max pending notifications before the scanner defers (default: 256).",
    "YATTA_NOTIFIER": "Where due tasks are announced: console | log (default: console).",
    # Front end
    "YATTA_CONSOLE_ENABLED": "Run the interactive console (true/false, default: true).",
}
