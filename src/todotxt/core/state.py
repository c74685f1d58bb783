# src/todotxt/core/state.py

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from ..config import Settings
from ..tasks.task_list import TaskList
from ..tasks.task_models import Task
from .events import ChangeEvent, CollectionReset, TaskAdded, TaskRemoved, TaskReplaced
from .ports import TaskRepo

logger = logging.getLogger(__name__)


@dataclass
class AppState:
    settings: Settings
    store: TaskRepo
    tasks: TaskList = field(default_factory=TaskList)

    # Set by change notifications; cleared after a successful save.
    dirty: bool = False

    # Tasks whose channel carries our handler, at most once each (by identity).
    _watched: list[Task] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        self.tasks.changed.subscribe(self._on_list_changed)
        for task in self.tasks:
            self._watch(task)

    def _is_watched(self, task: Task) -> bool:
        return any(t is task for t in self._watched)

    def _watch(self, task: Task) -> None:
        if self._is_watched(task):
            return
        task.changed.subscribe(self._on_task_changed)
        self._watched.append(task)

    def _unwatch(self, task: Task) -> None:
        # The same object may sit in the list twice; keep watching while any copy remains.
        if any(t is task for t in self.tasks):
            return
        task.changed.unsubscribe(self._on_task_changed)
        self._watched = [t for t in self._watched if t is not task]

    def _on_list_changed(self, sender: Any, event: ChangeEvent) -> None:
        self.dirty = True
        if isinstance(event, TaskAdded):
            self._watch(event.task)
        elif isinstance(event, TaskRemoved):
            self._unwatch(event.task)
        elif isinstance(event, TaskReplaced):
            self._unwatch(event.old)
            self._watch(event.new)
        elif isinstance(event, CollectionReset):
            for task in self._watched:
                task.changed.unsubscribe(self._on_task_changed)
            self._watched = []
            for task in self.tasks:
                self._watch(task)

    def _on_task_changed(self, sender: Any, event: ChangeEvent) -> None:
        self.dirty = True

    def save(self) -> None:
        self.store.save(self.tasks)
        self.dirty = False
        logger.debug("State saved to %s", self.store.path)


def create_initial_state(settings: Settings, store: TaskRepo) -> AppState:
    """Load the todo list from `store` and wrap it in an AppState."""
    return AppState(settings=settings, store=store, tasks=store.load())
