# src/todotxt/tasks/task_list.py

from __future__ import annotations

import codecs
import io
import logging
import os
import re
from collections.abc import Iterable, Iterator, Sequence
from typing import IO, Any, overload

from ..core.events import CollectionReset, EventChannel, TaskAdded, TaskRemoved, TaskReplaced
from .task_models import Task
from .task_search import filter_tasks

logger = logging.getLogger(__name__)

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")

TaskSource = str | bytes | bytearray | IO[str] | IO[bytes]


def split_lines(text: str) -> list[str]:
    """
    Split text into lines the way a line reader would.

    A trailing line break does not start another line; an empty text has no
    lines at all; every other line, blank or not, is kept.
    """
    if not text:
        return []
    lines = _LINE_BREAK_RE.split(text)
    if lines[-1] == "":
        lines.pop()
    return lines


def _read_source(source: Any) -> str:
    if isinstance(source, str):
        return source
    if isinstance(source, (bytes, bytearray)):
        return bytes(source).decode("utf-8-sig")

    read = getattr(source, "read", None)
    if read is None:
        raise TypeError(f"cannot load tasks from {type(source).__name__}")

    data = read()
    if isinstance(data, (bytes, bytearray)):
        return bytes(data).decode("utf-8-sig")
    if isinstance(data, str):
        return data.removeprefix("\ufeff")
    raise TypeError(f"stream returned {type(data).__name__}, expected str or bytes")


def _is_text_sink(destination: Any) -> bool:
    return isinstance(destination, (io.TextIOBase, codecs.StreamWriter))


class TaskList(Sequence[Task]):
    """
    Ordered todo list.

    Read access is the plain Sequence protocol, so callers can iterate, filter
    and flatten it however they like. Writes go through load_tasks/add/delete/
    update only, and each one publishes on `changed`:

    - load_tasks -> CollectionReset (once per load)
    - add        -> TaskAdded(task, index)
    - delete     -> TaskRemoved(task, prior index)
    - update     -> TaskReplaced(old, new, index)

    Members are matched by equality (same raw text), first match wins.
    """

    def __init__(self, tasks: Iterable[Task] | None = None) -> None:
        self._tasks: list[Task] = list(tasks) if tasks is not None else []
        self.changed = EventChannel()

    # ---- Sequence ----

    @overload
    def __getitem__(self, index: int) -> Task: ...

    @overload
    def __getitem__(self, index: slice) -> list[Task]: ...

    def __getitem__(self, index: int | slice) -> Task | list[Task]:
        return self._tasks[index]

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    def __repr__(self) -> str:
        return f"TaskList({len(self._tasks)} tasks)"

    # ---- load / save ----

    def load_tasks(self, source: TaskSource) -> None:
        """Replace the contents with one task per line of `source`."""
        text = _read_source(source)
        self._tasks = [Task(line) for line in split_lines(text)]
        logger.debug("Loaded %d task(s)", len(self._tasks))
        self.changed.publish(self, CollectionReset())

    def load_tasks_from_string(self, text: str) -> None:
        self.load_tasks(text)

    def to_text(self, newline: str = "\n") -> str:
        return "".join(f"{task}{newline}" for task in self._tasks)

    def save_tasks(self, destination: IO[str] | IO[bytes], newline: str | None = None) -> None:
        """
        Write one line per task, in current order.

        Binary sinks receive UTF-8 with `newline` (default os.linesep) after each
        line. Text sinks (io.TextIOBase or a codecs.StreamWriter) receive "\\n" and
        own any translation, so `newline` is rejected for them: choose the line
        ending when opening the text stream instead.
        """
        if _is_text_sink(destination):
            if newline is not None:
                raise ValueError("newline applies to binary sinks only; set it when opening a text stream")
            destination.write(self.to_text("\n"))  # type: ignore[arg-type]
        else:
            destination.write(self.to_text(newline or os.linesep).encode("utf-8"))  # type: ignore[arg-type]
        logger.debug("Saved %d task(s)", len(self._tasks))

    # ---- mutation ----

    def add(self, task: Task) -> None:
        self._tasks.append(task)
        index = len(self._tasks) - 1
        logger.debug("Task added index=%d raw=%r", index, task.raw)
        self.changed.publish(self, TaskAdded(task=task, index=index))

    def _find(self, task: Task) -> int:
        for i, member in enumerate(self._tasks):
            if member == task:
                return i
        return -1

    def delete(self, task: Task) -> bool:
        index = self._find(task)
        if index < 0:
            return False
        removed = self._tasks.pop(index)
        logger.debug("Task removed index=%d raw=%r", index, removed.raw)
        self.changed.publish(self, TaskRemoved(task=removed, index=index))
        return True

    def update(self, old: Task, new: Task) -> bool:
        index = self._find(old)
        if index < 0:
            return False
        previous = self._tasks[index]
        self._tasks[index] = new
        logger.debug("Task replaced index=%d %r -> %r", index, previous.raw, new.raw)
        self.changed.publish(self, TaskReplaced(old=previous, new=new, index=index))
        return True

    # ---- query ----

    def search(self, term: str) -> TaskList:
        """Tasks whose body contains `term` (case-insensitive); "-term" negates."""
        return TaskList(filter_tasks(self._tasks, term))
