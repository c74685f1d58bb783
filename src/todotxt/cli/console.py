# src/todotxt/cli/console.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..core.state import AppState
from .commands import registry as command_registry

logger = logging.getLogger(__name__)

EXIT_COMMANDS = ("/exit", "/quit")


def run_console_loop(
    state: AppState,
    *,
    read: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> None:
    logger.info("Console started (tasks=%d file=%s).", len(state.tasks), state.store.path)
    write(f"[{state.settings.app_name}] {len(state.tasks)} task(s). Use /help for commands, /exit to quit.")

    while True:
        try:
            line = read("todo> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            write("")
            break

        if not line:
            continue

        if line.lower() in EXIT_COMMANDS:
            logger.info("Console exit command received.")
            break

        # Bare text is shorthand for /add.
        if not line.startswith("/"):
            line = f"/add {line}"

        try:
            reply = command_registry.handle(state, line)
        except Exception:
            logger.exception("Command handler crashed: %r", line)
            reply = "Internal error while handling a command."

        if reply is not None:
            write(reply)

    logger.info("Console finished.")
