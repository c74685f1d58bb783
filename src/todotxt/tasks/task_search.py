# src/todotxt/tasks/task_search.py

from __future__ import annotations

from collections.abc import Iterable

from .task_models import Task

NEGATION_PREFIX = "-"


def matches(task: Task, term: str) -> bool:
    """
    Case-insensitive substring test against the task body.

    "-term" inverts the test. Projects and contexts live in the body, so
    "+proj" and "@ctx" work as terms too.
    """
    negate = term.startswith(NEGATION_PREFIX)
    if negate:
        term = term[len(NEGATION_PREFIX):]
    found = term.casefold() in task.body.casefold()
    return not found if negate else found


def filter_tasks(tasks: Iterable[Task], term: str) -> list[Task]:
    return [t for t in tasks if matches(t, term)]
