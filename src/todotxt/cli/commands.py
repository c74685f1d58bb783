# src/todotxt/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..core.state import AppState
from ..errors import TaskFileWriteError
from ..tasks.task_list import TaskList
from ..tasks.task_models import Task

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

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

        return handler(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _task_at(state: AppState, arg: str | None) -> Task | str:
    """Resolve a 1-based task number; returns an error message on failure."""
    if arg is None:
        return "Missing task number."
    try:
        n = int(arg)
    except ValueError:
        return f"Not a task number: {arg}"
    if n < 1 or n > len(state.tasks):
        return f"No task #{n} (list has {len(state.tasks)})."
    return state.tasks[n - 1]


def _format_tasks(state: AppState, shown: TaskList) -> str:
    # Number by position in the full list so /do, /rm etc. can refer to it.
    wanted = {id(t) for t in shown}
    lines = [
        f"{i:>3} {task}"
        for i, task in enumerate(state.tasks, start=1)
        if id(task) in wanted and task.raw.strip()
    ]
    if not lines:
        return "No tasks."
    return "\n".join(lines)


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str]) -> str:
    """
    /list            -> all tasks
    /list foo -bar   -> tasks containing "foo" but not "bar"
    """
    shown = state.tasks
    for term in args:
        shown = shown.search(term)
    return _format_tasks(state, shown)


def cmd_add(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /add <task text>"
    task = Task(" ".join(args))
    state.tasks.add(task)
    return f"Added #{len(state.tasks)}: {task}"


def cmd_do(state: AppState, args: list[str]) -> str:
    found = _task_at(state, args[0] if args else None)
    if isinstance(found, str):
        return found
    found.toggle_completed()
    verb = "Completed" if found.completed else "Reopened"
    return f"{verb}: {found}"


def cmd_pri(state: AppState, args: list[str]) -> str:
    """
    /pri 3 A   -> set priority (A)
    /pri 3 -   -> clear priority
    """
    if len(args) < 2:
        return "Usage: /pri <n> <letter|->"
    found = _task_at(state, args[0])
    if isinstance(found, str):
        return found
    letter = None if args[1] == "-" else args[1]
    try:
        found.set_priority(letter)
    except ValueError as e:
        return str(e)
    return f"Updated: {found}"


def cmd_append(state: AppState, args: list[str]) -> str:
    if len(args) < 2:
        return "Usage: /append <n> <text>"
    found = _task_at(state, args[0])
    if isinstance(found, str):
        return found
    found.append(" ".join(args[1:]))
    return f"Updated: {found}"


def cmd_rm(state: AppState, args: list[str]) -> str:
    found = _task_at(state, args[0] if args else None)
    if isinstance(found, str):
        return found
    state.tasks.delete(found)
    return f"Removed: {found}"


def cmd_projects(state: AppState, args: list[str]) -> str:
    projects = sorted({p for task in state.tasks for p in task.projects})
    return "\n".join(projects) if projects else "No projects."


def cmd_contexts(state: AppState, args: list[str]) -> str:
    contexts = sorted({c for task in state.tasks for c in task.contexts})
    return "\n".join(contexts) if contexts else "No contexts."


def cmd_save(state: AppState, args: list[str]) -> str:
    try:
        state.save()
    except TaskFileWriteError as e:
        logger.error("Save failed: %s", e)
        return f"Save failed: {e}"
    return f"Saved {len(state.tasks)} task(s) to {state.store.path}"


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="List tasks: /list [term ...], -term excludes.", aliases=["ls"])
registry.register("add", cmd_add, help_text="Add a task: /add (A) call mom +family @phone.", aliases=["a"])
registry.register("do", cmd_do, help_text="Toggle completion: /do <n>.", aliases=["x"])
registry.register("pri", cmd_pri, help_text="Set or clear priority: /pri <n> <letter|->.")
registry.register("append", cmd_append, help_text="Append text to a task: /append <n> <text>.")
registry.register("rm", cmd_rm, help_text="Delete a task: /rm <n>.", aliases=["del"])
registry.register("projects", cmd_projects, help_text="List distinct +projects.")
registry.register("contexts", cmd_contexts, help_text="List distinct @contexts.")
registry.register("save", cmd_save, help_text="Write the list to the todo file now.")
