# src/todotxt/cli/main.py

"""
CLI entrypoint.

Initializes logging, loads the todo file, then either runs the single command
given on the command line (`todotxt /add buy milk`) or the interactive console.
Changes are written back on exit when auto-save is on.
"""

from __future__ import annotations

import logging
import sys

from ..config import Settings, get_settings
from ..core.state import AppState, create_initial_state
from ..errors import TodoTxtError
from ..logging_setup import setup_logging
from ..tasks.task_store import TaskStore
from .commands import registry as command_registry
from .console import run_console_loop

logger = logging.getLogger(__name__)


def _shutdown(state: AppState) -> int:
    if not (state.settings.auto_save and state.dirty):
        return 0
    try:
        state.save()
    except TodoTxtError as e:
        logger.error("Failed to save %s: %s", state.store.path, e)
        print(f"Save failed: {e}", file=sys.stderr)
        return 1
    return 0


def main(argv: list[str] | None = None, *, settings: Settings | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    if settings is None:
        settings = get_settings()

    console_level = getattr(logging, settings.log_level, logging.WARNING)
    setup_logging(log_dir=settings.log_dir, console_level=console_level)

    logger.info("Starting %s (file=%s)", settings.app_name, settings.todo_file_path)

    store = TaskStore(settings.todo_file_path, encoding=settings.encoding)
    try:
        state = create_initial_state(settings, store)
    except TodoTxtError as e:
        logger.error("Failed to load %s: %s", settings.todo_file_path, e)
        print(f"Load failed: {e}", file=sys.stderr)
        return 1

    if argv:
        line = " ".join(argv)
        if not line.startswith("/"):
            line = f"/{line}"
        print(command_registry.handle(state, line))
    else:
        run_console_loop(state)

    code = _shutdown(state)
    logger.info("Bye.")
    return code


if __name__ == "__main__":
    sys.exit(main())
