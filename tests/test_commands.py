# tests/test_commands.py

from __future__ import annotations

from datetime import date

from todotxt.cli.commands import CommandRegistry, registry
from todotxt.core.state import AppState

from .fakes import FakeTaskRepo


def test_command_registry_routes_commands_and_aliases(state: AppState) -> None:
    reg = CommandRegistry()
    called: list[list[str]] = []

    def handler(state, args):
        called.append(args)
        return "ok"

    reg.register("a", handler, "a", aliases=["alpha"])

    assert reg.handle(state, "/a x y") == "ok"
    assert reg.handle(state, "/ALPHA") == "ok"
    assert called == [["x", "y"], []]
    assert "/a - a" in reg.build_help()


def test_command_registry_unknown_and_non_command(state: AppState) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")
    assert "Empty command" in (reg.handle(state, "/") or "")


def test_list_numbers_by_full_list_position(state: AppState) -> None:
    out = registry.handle(state, "/list foo") or ""
    lines = out.splitlines()

    assert len(lines) == 2
    assert lines[0].split()[0] == "1"
    assert lines[1].split()[0] == "2"


def test_list_hides_blank_lines_and_supports_negation(state: AppState) -> None:
    out = registry.handle(state, "/list -foo") or ""
    numbers = [line.split()[0] for line in out.splitlines()]
    assert numbers == ["3", "4", "5", "6", "8"]

    assert registry.handle(state, "/list nothing-matches-this") == "No tasks."


def test_add_marks_state_dirty(state: AppState) -> None:
    assert state.dirty is False

    out = registry.handle(state, "/add (A) call mom +family @phone") or ""

    assert out.startswith("Added #9")
    assert state.tasks[-1].priority == "A"
    assert state.dirty is True


def test_do_toggles_completion(state: AppState) -> None:
    out = registry.handle(state, "/do 4") or ""
    assert out.startswith("Completed")
    assert state.tasks[3].completed is True
    assert state.tasks[3].completed_date == date.today()
    assert state.dirty is True

    out = registry.handle(state, "/do 4") or ""
    assert out.startswith("Reopened")
    assert state.tasks[3].completed is False


def test_bad_task_numbers(state: AppState) -> None:
    assert registry.handle(state, "/do") == "Missing task number."
    assert registry.handle(state, "/do abc") == "Not a task number: abc"
    assert (registry.handle(state, "/do 99") or "").startswith("No task #99")
    assert state.dirty is False


def test_pri_sets_and_clears(state: AppState) -> None:
    registry.handle(state, "/pri 4 c")
    assert state.tasks[3].raw == "(C) buy milk @store"

    registry.handle(state, "/pri 4 -")
    assert state.tasks[3].raw == "buy milk @store"

    out = registry.handle(state, "/pri 4 ZZ") or ""
    assert "single letter" in out


def test_append(state: AppState) -> None:
    registry.handle(state, "/append 4 and bread +groceries")
    assert state.tasks[3].raw == "buy milk @store and bread +groceries"
    assert state.dirty is True


def test_rm(state: AppState) -> None:
    out = registry.handle(state, "/rm 4") or ""
    assert out == "Removed: buy milk @store"
    assert len(state.tasks) == 7
    assert state.dirty is True


def test_projects_and_contexts_are_distinct_and_sorted(state: AppState) -> None:
    assert registry.handle(state, "/projects") == "+health\n+home\n+work"
    assert registry.handle(state, "/contexts") == "@office\n@phone\n@store"


def test_save_writes_and_clears_dirty(state: AppState, repo: FakeTaskRepo) -> None:
    registry.handle(state, "/add new thing")
    out = registry.handle(state, "/save") or ""

    assert out.startswith("Saved 9 task(s)")
    assert repo.saves == 1
    assert repo.text.endswith("new thing\n")
    assert state.dirty is False


def test_help_lists_commands(state: AppState) -> None:
    out = registry.handle(state, "/help") or ""
    for name in ("/list", "/add", "/do", "/pri", "/append", "/rm", "/projects", "/contexts", "/save"):
        assert name in out
