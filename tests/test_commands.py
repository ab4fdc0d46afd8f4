# tests/test_commands.py

from __future__ import annotations

from datetime import datetime

from yatta.cli.commands import CommandRegistry, registry
from yatta.tasks.task_manager import TaskManager


def test_command_registry_routes_and_aliases(state) -> None:
    reg = CommandRegistry()
    called = {"a": 0}

    def handler(state, args):
        called["a"] += 1
        return f"a:{' '.join(args)}"

    reg.register("a", handler, "a", aliases=["alpha"])

    assert reg.handle(state, "/a x y") == "a:x y"
    assert reg.handle(state, "/ALPHA") == "a:"
    assert called["a"] == 2


def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")
    assert "Empty command" in (reg.handle(state, "/") or "")


def test_add_parses_trailing_date_and_clock(state) -> None:
    reply = registry.handle(state, "/add pay the rent 2024-03-01 09:30:00")

    assert reply is not None and reply.startswith("Created")
    (task,) = state.manager.read()
    assert task.name == "pay the rent"
    assert task.due_instant == datetime(2024, 3, 1, 9, 30, 0)


def test_add_reports_validation_errors(state) -> None:
    reply = registry.handle(state, "/add broken 2024-13-40")

    assert reply is not None and "VALIDATION_ERROR" in reply
    assert state.manager.read() == []


def test_list_done_undone_and_delete_by_prefix(state) -> None:
    registry.handle(state, "/add first")
    registry.handle(state, "/add second 2024-03-01")
    first, second = state.manager.read()

    listing = registry.handle(state, "/list") or ""
    assert "first" in listing and "second" in listing and "2024-03-01 00:00:00" in listing

    registry.handle(state, f"/done {first.id[:8]}")
    assert state.manager.read()[0].done is True
    assert "first" not in (registry.handle(state, "/list open") or "")

    registry.handle(state, f"/undone {first.id}")
    assert state.manager.read()[0].done is False

    assert (registry.handle(state, f"/del {second.id[:8]}") or "").startswith("Deleted")
    assert [t.id for t in state.manager.read()] == [first.id]


def test_set_updates_fields_and_clears_due(state) -> None:
    registry.handle(state, "/add chore 2024-03-01 10:00:00")
    (task,) = state.manager.read()

    registry.handle(state, f"/set {task.id} name=wash the car due_clock=12:15:00")
    (task,) = state.manager.read()
    assert task.name == "wash the car"
    assert task.due_instant == datetime(2024, 3, 1, 12, 15, 0)

    registry.handle(state, f"/set {task.id} due_date=none due_clock=none")
    (task,) = state.manager.read()
    assert task.due_instant is None


def test_set_rejects_unknown_fields(state) -> None:
    registry.handle(state, "/add chore")
    (task,) = state.manager.read()

    reply = registry.handle(state, f"/set {task.id} notified_at=2030-01-01")

    assert reply is not None and reply.startswith("Usage error")


def test_unknown_id_is_reported(state) -> None:
    assert "No single task" in (registry.handle(state, "/done deadbeef") or "")


def test_status_counts_tasks(state) -> None:
    registry.handle(state, "/add old 2024-03-01")
    registry.handle(state, "/add someday")

    reply = registry.handle(state, "/status") or ""

    assert "Tasks: 2 (2 open, 1 overdue)" in reply


def test_status_uses_the_manager_clock(state, store) -> None:
    state.manager = TaskManager(store, clock=lambda: datetime(2024, 3, 1, 12, 0, 0))
    registry.handle(state, "/add morning 2024-03-01 09:00:00")
    registry.handle(state, "/add tomorrow 2024-03-02")

    reply = registry.handle(state, "/status") or ""

    assert "Tasks: 2 (2 open, 1 overdue)" in reply
