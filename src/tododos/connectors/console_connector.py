# src/tododos/connectors/console_connector.py

from __future__ import annotations

import logging
import sys
from collections.abc import Callable

from ..cli.commands import CommandRegistry, QuitRequested
from ..cli.commands import registry as command_registry
from ..core.render import render_prompt_context, render_state
from ..core.state import AppState

logger = logging.getLogger(__name__)

PROMPT = "tododos> "
# Scrollback, home, screen, home: 3J first works in more terminals.
CLEAR_SEQUENCE = "\033[3J\033[H\033[2J\033[H"


def _clear_screen() -> None:
    sys.stdout.write(CLEAR_SEQUENCE)
    sys.stdout.flush()


def run_console_loop(
    state: AppState,
    *,
    read_line: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
    registry: CommandRegistry | None = None,
    notices: list[str] | None = None,
) -> int:
    """
    Turn loop: render -> prompt -> handle, until quit/EOF/Ctrl+C.

    Returns the process exit code (always 0: quitting never saves and never fails).
    """
    commands = registry or command_registry
    help_text = commands.build_help()
    clear = bool(getattr(state.settings, "clear_screen", False)) and sys.stdout.isatty()

    # Lines to show under the next redraw (they would be wiped by the clear).
    pending: list[str] = list(notices or [])

    def emit(text: str) -> None:
        write(text)
        if clear:
            pending.append(text)

    logger.info("Console loop started (tasks=%d).", len(state.store))

    while True:
        if clear:
            _clear_screen()
        write(render_state(state, help_text))
        if pending:
            write("")
            for line in pending:
                write(line)
            pending.clear()

        context = render_prompt_context(state)
        if context:
            write(f"\n{context}")

        try:
            line = read_line(PROMPT)
            reply = commands.handle(state, line, read_line, emit)
        except QuitRequested:
            logger.info("Quit command received.")
            write("Goodbye.")
            return 0
        except EOFError:
            logger.info("Console EOF received, exiting.")
            write("")
            return 0
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            write("\nGoodbye.")
            return 0
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply:
            pending.append(reply)
