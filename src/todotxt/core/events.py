# src/todotxt/core/events.py

from __future__ import annotations

"""
Change notification channel.

Tasks (field-level changes) and task lists (membership changes) each own an
EventChannel. Publishing is synchronous: every handler registered at publish
time is called in registration order before the mutating call returns.

Handlers must not mutate the publisher while being notified.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..tasks.task_models import Task

logger = logging.getLogger(__name__)


class TaskAspect(StrEnum):
    """Which part of a task a FieldChanged event is about."""

    BODY = "body"
    COMPLETED = "completed"
    PRIORITY = "priority"


@dataclass(frozen=True, slots=True)
class CollectionReset:
    """The whole list was replaced (bulk load)."""


@dataclass(frozen=True, slots=True)
class TaskAdded:
    task: Task
    index: int


@dataclass(frozen=True, slots=True)
class TaskRemoved:
    task: Task
    index: int


@dataclass(frozen=True, slots=True)
class TaskReplaced:
    old: Task
    new: Task
    index: int


@dataclass(frozen=True, slots=True)
class FieldChanged:
    task: Task
    aspect: TaskAspect


ChangeEvent = CollectionReset | TaskAdded | TaskRemoved | TaskReplaced | FieldChanged
ChangeHandler = Callable[[Any, ChangeEvent], None]


class EventChannel:
    """Ordered list of handlers called as handler(sender, event)."""

    __slots__ = ("_handlers",)

    def __init__(self) -> None:
        self._handlers: list[ChangeHandler] = []

    def subscribe(self, handler: ChangeHandler) -> ChangeHandler:
        self._handlers.append(handler)
        return handler

    def unsubscribe(self, handler: ChangeHandler) -> None:
        try:
            self._handlers.remove(handler)
        except ValueError:
            return

    def publish(self, sender: Any, event: ChangeEvent) -> None:
        # Snapshot: (un)subscribing from inside a handler only affects the next publish.
        handlers = list(self._handlers)
        if handlers:
            logger.debug("publish %s to %d handler(s)", type(event).__name__, len(handlers))
        for handler in handlers:
            handler(sender, event)

    def handler_count(self) -> int:
        return len(self._handlers)
