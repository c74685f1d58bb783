# src/todotxt/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the CLI layer.

The CLI depends on Protocols instead of concrete implementations, so the file
store can be swapped for an in-memory fake in tests.
"""

from pathlib import Path
from typing import Protocol

from ..tasks.task_list import TaskList


class TaskRepo(Protocol):
    """Where a TaskList comes from and goes back to."""

    @property
    def path(self) -> Path: ...

    def load(self) -> TaskList: ...
    def save(self, tasks: TaskList) -> None: ...
