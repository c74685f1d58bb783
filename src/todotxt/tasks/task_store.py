# src/todotxt/tasks/task_store.py

from __future__ import annotations

import codecs
import contextlib
import logging
import os
from pathlib import Path

from ..errors import TaskFileReadError, TaskFileWriteError
from .task_list import TaskList

logger = logging.getLogger(__name__)


class TaskStore:
    """
    todo.txt file on disk.

    The only place that touches the file system; TaskList itself only sees
    strings and streams.

    - load(): a missing file is an empty list
    - save(): write to a sibling temp file, then os.replace() it into place,
      so a failed write leaves the old file intact
    """

    def __init__(self, path: str | Path = "todo.txt", *, encoding: str = "utf-8") -> None:
        self._path = Path(path)
        self._encoding = encoding
        logger.info("TaskStore ready path=%s exists=%s", self._path, self._path.exists())

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.is_file()

    def load(self) -> TaskList:
        tasks = TaskList()
        if not self._path.exists():
            logger.info("No todo file at %s; starting empty.", self._path)
            return tasks

        try:
            data = self._path.read_bytes()
        except OSError as e:
            raise TaskFileReadError(self._path, "Cannot read todo file") from e

        try:
            encoding = self._encoding
            # utf-8-sig drops a BOM if an editor left one. lookup() also matches "utf8" and "UTF_8".
            if codecs.lookup(encoding).name == "utf-8":
                encoding = "utf-8-sig"
            text = data.decode(encoding)
        except (UnicodeDecodeError, LookupError) as e:
            raise TaskFileReadError(self._path, f"Cannot decode todo file as {self._encoding}") from e

        tasks.load_tasks_from_string(text)
        logger.info("Loaded %d task(s) from %s", len(tasks), self._path)
        return tasks

    def save(self, tasks: TaskList) -> None:
        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp, "w", encoding=self._encoding, newline=os.linesep) as fh:
                tasks.save_tasks(fh)
            os.replace(tmp, self._path)
        except (OSError, UnicodeEncodeError, LookupError) as e:
            with contextlib.suppress(OSError):
                tmp.unlink()
            raise TaskFileWriteError(self._path, "Cannot write todo file") from e

        logger.info("Saved %d task(s) to %s", len(tasks), self._path)
