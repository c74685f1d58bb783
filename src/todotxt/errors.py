# src/todotxt/errors.py

"""
Exceptions raised at the file boundary.

Parsing and list operations never raise for malformed todo.txt text; only
opening, reading, decoding or writing a named file can fail.
"""

from __future__ import annotations

from pathlib import Path


class TodoTxtError(Exception):
    """Base class for todotxt errors."""


class TaskFileError(TodoTxtError, OSError):
    def __init__(self, path: str | Path, message: str) -> None:
        super().__init__(f"{message}: {path}")
        self.path = Path(path)


class TaskFileReadError(TaskFileError):
    """The todo file exists but could not be read or decoded."""


class TaskFileWriteError(TaskFileError):
    """The todo file could not be written."""
