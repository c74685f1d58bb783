# src/todotxt/tasks/task_models.py

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from datetime import date

from ..core.events import EventChannel, FieldChanged, TaskAspect

logger = logging.getLogger(__name__)

_DATE = r"\d{4}-\d{2}-\d{2}"

# Leading whitespace is trimmed before these are applied.
_COMPLETED_RE = re.compile(rf"[xX]\s+({_DATE})(?=\s|$)\s*")
_PRIORITY_RE = re.compile(r"\(([A-Z])\)\s+")
_CREATED_RE = re.compile(rf"({_DATE})\s+")
_TAG_RE = re.compile(r"([^\s:]+):([^\s:]\S*)")

PROJECT_PREFIX = "+"
CONTEXT_PREFIX = "@"
DUE_TAG = "due"


def _parse_date(text: str) -> date | None:
    try:
        return date.fromisoformat(text)
    except ValueError:
        # Shaped like a date but not a real one (2021-02-30).
        return None


def _prefixed(name: str, prefix: str) -> str:
    name = name.strip()
    return name if name.startswith(prefix) else f"{prefix}{name}"


class Task:
    """
    One line of a todo.txt file.

    Parsing never fails: whatever cannot be recognized as a completion marker,
    priority or creation date stays in the body. The original line is kept as
    `raw` until the task is mutated; from then on `raw` is re-rendered from the
    fields in the fixed order: x, completed date, (priority), created date, body.

    Rendering is plain concatenation, so a body that itself starts with a
    completion marker or priority does not survive a re-parse: reopening
    "x 2020-01-01 x 2020-01-02 pay rent" renders "x 2020-01-02 pay rent",
    which reads back as completed. The fields on the object stay correct.

    Equality is by `raw`. Tasks are mutable, so they are not hashable.
    """

    __slots__ = (
        "_raw",
        "_completed",
        "_completed_date",
        "_priority",
        "_created_date",
        "_body",
        "_stashed_priority",
        "changed",
    )

    def __init__(self, raw: str = "") -> None:
        self.changed = EventChannel()
        self._stashed_priority: str | None = None
        self._parse(raw)

    # ---- parsing / rendering ----

    def _parse(self, raw: str) -> None:
        self._raw = raw
        self._completed = False
        self._completed_date: date | None = None
        self._priority: str | None = None
        self._created_date: date | None = None

        rest = raw.lstrip()

        # Completion needs the marker AND a valid date right after it; a bare "x" is body text.
        m = _COMPLETED_RE.match(rest)
        if m:
            done_on = _parse_date(m.group(1))
            if done_on is not None:
                self._completed = True
                self._completed_date = done_on
                rest = rest[m.end():]

        m = _PRIORITY_RE.match(rest)
        if m:
            self._priority = m.group(1)
            rest = rest[m.end():]

        m = _CREATED_RE.match(rest)
        if m:
            created = _parse_date(m.group(1))
            if created is not None:
                self._created_date = created
                rest = rest[m.end():]

        self._body = rest.strip()

    @classmethod
    def parse(cls, line: str) -> Task:
        return cls(line)

    @classmethod
    def create(
        cls,
        body: str,
        *,
        priority: str | None = None,
        projects: Iterable[str] = (),
        contexts: Iterable[str] = (),
        created_date: date | None = None,
    ) -> Task:
        """
        Build a task from parts.

        Projects and contexts missing from the body are appended to it (the
        "+"/"@" prefix is added when absent). The parts are rendered and the
        result parsed, so the task is identical to one read from a file.
        """
        words = body.split()
        for name in projects:
            token = _prefixed(name, PROJECT_PREFIX)
            if token not in words:
                words.append(token)
        for name in contexts:
            token = _prefixed(name, CONTEXT_PREFIX)
            if token not in words:
                words.append(token)

        parts: list[str] = []
        if priority:
            parts.append(f"({_normalize_priority(priority)})")
        if created_date is not None:
            parts.append(created_date.isoformat())
        parts.extend(words)
        return cls(" ".join(parts))

    def render(self) -> str:
        parts: list[str] = []
        if self._completed:
            parts.append("x")
            if self._completed_date is not None:
                parts.append(self._completed_date.isoformat())
        if self._priority:
            parts.append(f"({self._priority})")
        if self._created_date is not None:
            parts.append(self._created_date.isoformat())
        if self._body:
            parts.append(self._body)
        return " ".join(parts)

    # ---- read-only fields ----

    @property
    def raw(self) -> str:
        return self._raw

    @property
    def completed(self) -> bool:
        return self._completed

    @property
    def completed_date(self) -> date | None:
        return self._completed_date

    @property
    def priority(self) -> str | None:
        return self._priority

    @property
    def created_date(self) -> date | None:
        return self._created_date

    @property
    def body(self) -> str:
        return self._body

    @property
    def projects(self) -> list[str]:
        """`+project` tokens of the body, in order, duplicates kept."""
        return self._prefixed_tokens(PROJECT_PREFIX)

    @property
    def contexts(self) -> list[str]:
        """`@context` tokens of the body, in order, duplicates kept."""
        return self._prefixed_tokens(CONTEXT_PREFIX)

    @property
    def tags(self) -> dict[str, str]:
        """`key:value` tokens of the body; the first occurrence of a key wins."""
        out: dict[str, str] = {}
        for token in self._body.split():
            m = _TAG_RE.fullmatch(token)
            if not m:
                continue
            key, value = m.group(1), m.group(2)
            if value.startswith("//"):
                # http://..., not a tag
                continue
            out.setdefault(key, value)
        return out

    @property
    def due_date(self) -> date | None:
        value = self.tags.get(DUE_TAG)
        if value is None:
            return None
        return _parse_date(value)

    def _prefixed_tokens(self, prefix: str) -> list[str]:
        return [t for t in self._body.split() if len(t) > 1 and t.startswith(prefix)]

    # ---- mutation ----

    def _touch(self, aspect: TaskAspect) -> None:
        self._raw = self.render()
        self.changed.publish(self, FieldChanged(task=self, aspect=aspect))

    def append(self, text: str) -> None:
        text = text.strip()
        if not text:
            return
        self._body = f"{self._body} {text}" if self._body else text
        self._touch(TaskAspect.BODY)

    def toggle_completed(self, today: date | None = None) -> None:
        """
        Flip between incomplete and complete.

        Completing stamps the date and hides the priority; reopening clears the
        date and brings the hidden priority back.
        """
        if self._completed:
            self._completed = False
            self._completed_date = None
            if self._stashed_priority is not None:
                self._priority = self._stashed_priority
                self._stashed_priority = None
        else:
            self._completed = True
            self._completed_date = today or date.today()
            self._stashed_priority = self._priority
            self._priority = None

        logger.debug("Task toggled completed=%s raw=%r", self._completed, self.render())
        self._touch(TaskAspect.COMPLETED)

    def set_priority(self, priority: str | None) -> None:
        self._priority = _normalize_priority(priority) if priority else None
        self._stashed_priority = None
        self._touch(TaskAspect.PRIORITY)

    # ---- dunder ----

    def __str__(self) -> str:
        return self._raw

    def __repr__(self) -> str:
        return f"Task({self._raw!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Task):
            return NotImplemented
        return self._raw == other._raw

    __hash__ = None  # type: ignore[assignment]


def _normalize_priority(priority: str) -> str:
    letter = priority.strip().upper()
    if len(letter) != 1 or not ("A" <= letter <= "Z"):
        raise ValueError(f"priority must be a single letter A-Z, got {priority!r}")
    return letter


def parse_task(line: str) -> Task:
    """Parse one line of todo.txt text. Never raises on malformed input."""
    return Task(line)
