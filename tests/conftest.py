# tests/conftest.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from todotxt.config import Settings
from todotxt.core.state import AppState, create_initial_state
from todotxt.logging_setup import _ConsoleNoiseFilter

from .fakes import FakeTaskRepo

# Eight lines, one of them blank. Two bodies mention "foo"; three distinct contexts.
SAMPLE_LINES = [
    "(A) foo the bar +work @office",
    "(B) 2011-02-20 call mom about Foo @phone",
    "x 2011-02-25 pay rent +home",
    "buy milk @store",
    "(C) Sign up for the marathon +health",
    "x 2011-03-01 (A) 2011-02-01 file taxes +home @office",
    "",
    "write blog post due:2011-04-01",
]


@pytest.fixture()
def sample_text() -> str:
    return "\n".join(SAMPLE_LINES) + "\n"


@pytest.fixture()
def todo_file(tmp_path: Path, sample_text: str) -> Path:
    path = tmp_path / "todo.txt"
    path.write_text(sample_text, encoding="utf-8")
    return path


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """
    Settings built directly rather than from the environment, so tests never
    depend on the developer's shell or .env file.
    """
    return Settings(
        app_name="todotxt-test",
        log_level="WARNING",
        log_dir=tmp_path / "logs",
        data_dir=tmp_path,
        todo_file_path=tmp_path / "todo.txt",
        encoding="utf-8",
        auto_save=True,
    )


@pytest.fixture()
def repo(sample_text: str) -> FakeTaskRepo:
    return FakeTaskRepo(sample_text)


@pytest.fixture()
def state(settings: Settings, repo: FakeTaskRepo) -> AppState:
    return create_initial_state(settings, repo)


@pytest.fixture()
def restore_root_logging():
    """setup_logging() installs root handlers; remove and close them afterwards."""
    root = logging.getLogger()
    level = root.level
    yield
    for h in list(root.handlers):
        ours = isinstance(h, logging.FileHandler) or any(
            isinstance(f, _ConsoleNoiseFilter) for f in h.filters
        )
        if ours:
            root.removeHandler(h)
            h.close()
    root.setLevel(level)
    logging.captureWarnings(False)
