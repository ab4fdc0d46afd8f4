# src/yatta/cli/commands.py

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from typing import Any

from ..core.state import AppState
from ..errors import TaskError
from ..tasks.task_manager import UPDATABLE_FIELDS
from ..tasks.task_models import Task

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)

# Loose shapes only: the normalizer does the real validation.
_DATE_TOKEN = re.compile(r"^\d{4}-\S+$")
_CLOCK_TOKEN = re.compile(r"^\d{1,2}:\S+$")

_TRUE = {"1", "true", "yes", "y", "on"}
_FALSE = {"0", "false", "no", "n", "off"}
_NULL = {"", "none", "null", "-"}


class CommandRegistry:
    """Simple slash-command registry used by connectors (/help, /add, /list, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            return handler(state, args)
        except TaskError as e:
            logger.info("/%s failed: %s", name, e.message)
            return f"Error ({e.code}): {e.message}"

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _fmt_due(task: Task) -> str:
    due = task.due_instant
    return f"{due:%Y-%m-%d %H:%M:%S}" if due is not None else "-"


def _fmt_task(task: Task) -> str:
    mark = "x" if task.done else " "
    return f"[{mark}] {task.id[:8]}  {task.name}  (due: {_fmt_due(task)})"


def _resolve_id(state: AppState, prefix: str) -> str | None:
    """Accept a full id or any unambiguous prefix of one (as printed by /list)."""
    matches = [t.id for t in state.manager.read() if t.id.startswith(prefix)]
    if prefix in matches:
        return prefix
    if len(matches) == 1:
        return matches[0]
    return None


def _parse_assignments(args: list[str]) -> dict[str, Any]:
    """
    key=value pairs -> update payload. A bare word after a name=... pair
    extends the name, so "/set abc name=buy more milk" works.
    """
    payload: dict[str, Any] = {}
    last_key: str | None = None
    for arg in args:
        if "=" not in arg:
            if last_key == "name":
                payload["name"] = f"{payload['name']} {arg}"
                continue
            raise ValueError(f"expected key=value, got {arg!r}")

        key, value = arg.split("=", 1)
        key = key.strip().lower()
        if key not in UPDATABLE_FIELDS:
            raise ValueError(f"unknown field {key!r} (allowed: {', '.join(UPDATABLE_FIELDS)})")

        if key == "done":
            lowered = value.strip().lower()
            if lowered not in _TRUE | _FALSE:
                raise ValueError(f"done must be true/false, got {value!r}")
            payload[key] = lowered in _TRUE
        elif key in ("due_date", "due_clock"):
            payload[key] = None if value.strip().lower() in _NULL else value.strip()
        else:
            payload[key] = value
        last_key = key
    return payload


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_add(state: AppState, args: list[str]) -> str:
    """
    /add <name...> [YYYY-MM-DD] [HH:MM:SS]
    """
    if not args:
        return "Usage: /add <name> [YYYY-MM-DD] [HH:MM:SS]"

    words = list(args)
    due_date: str | None = None
    due_clock: str | None = None
    while len(words) > 1:
        tail = words[-1]
        if due_clock is None and _CLOCK_TOKEN.match(tail):
            due_clock = words.pop()
        elif due_date is None and _DATE_TOKEN.match(tail):
            due_date = words.pop()
        else:
            break

    task = state.manager.create(
        Task(name=" ".join(words), due_date=due_date, due_clock=due_clock)
    )
    return f"Created {_fmt_task(task)}"


def cmd_list(state: AppState, args: list[str]) -> str:
    tasks = state.manager.read()
    if args and args[0].lower() == "open":
        tasks = [t for t in tasks if not t.done]
    if not tasks:
        return "No tasks."
    lines = [f"Tasks ({len(tasks)}):"]
    for i, t in enumerate(tasks, start=1):
        lines.append(f"{i}. {_fmt_task(t)}")
    return "\n".join(lines)


def cmd_set(state: AppState, args: list[str]) -> str:
    """
    /set <id> key=value ...
    keys: name, done, due_date, due_clock (due_* accept "none" to clear)
    """
    if len(args) < 2:
        return "Usage: /set <id> name=... done=true|false due_date=YYYY-MM-DD due_clock=HH:MM:SS"

    task_id = _resolve_id(state, args[0])
    if task_id is None:
        return f"No single task matches id {args[0]!r}."

    try:
        payload = _parse_assignments(args[1:])
    except ValueError as e:
        return f"Usage error: {e}"

    payload["id"] = task_id
    updated = state.manager.update(payload)
    if updated is None:
        return f"Task {args[0]} no longer exists."
    return f"Updated {_fmt_task(updated)}"


def _set_done(state: AppState, args: list[str], done: bool) -> str:
    if not args:
        return f"Usage: /{'done' if done else 'undone'} <id>"
    task_id = _resolve_id(state, args[0])
    if task_id is None:
        return f"No single task matches id {args[0]!r}."
    updated = state.manager.update({"id": task_id, "done": done})
    if updated is None:
        return f"Task {args[0]} no longer exists."
    return f"Updated {_fmt_task(updated)}"


def cmd_done(state: AppState, args: list[str]) -> str:
    return _set_done(state, args, True)


def cmd_undone(state: AppState, args: list[str]) -> str:
    return _set_done(state, args, False)


def cmd_del(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /del <id>"
    task_id = _resolve_id(state, args[0])
    if task_id is None:
        return f"No single task matches id {args[0]!r}."
    if state.manager.delete(task_id):
        return f"Deleted {task_id[:8]}."
    return f"Task {args[0]} no longer exists."


def cmd_status(state: AppState, args: list[str]) -> str:
    tasks = state.manager.read()
    now = state.manager.now()
    open_tasks = [t for t in tasks if not t.done]
    overdue = [t for t in open_tasks if t.due_instant is not None and t.due_instant <= now]
    settings = state.settings
    return (
        "Status:\n"
        f"  Tasks: {len(tasks)} ({len(open_tasks)} open, {len(overdue)} overdue)\n"
        f"  Task file: {getattr(settings, 'tasks_path', '?')}\n"
        f"  Scan interval: {getattr(settings, 'scan_interval_seconds', '?')}s\n"
        f"  Notifier: {getattr(settings, 'notifier', '?')}"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("add", cmd_add, help_text="Add a task: /add <name> [YYYY-MM-DD] [HH:MM:SS].")
registry.register("list", cmd_list, help_text="List tasks: /list | /list open.", aliases=["ls"])
registry.register(
    "set", cmd_set, help_text="Update a task: /set <id> name=... done=... due_date=... due_clock=..."
)
registry.register("done", cmd_done, help_text="Mark a task done: /done <id>.")
registry.register("undone", cmd_undone, help_text="Mark a task not done: /undone <id>.")
registry.register("del", cmd_del, help_text="Delete a task: /del <id>.", aliases=["rm"])
registry.register("status", cmd_status, help_text="Show task counts and settings.")
