# src/tododos/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, loads tasks from the remote sheet (if
configured), then runs the console loop in the main thread.

Exit codes: 0 on quit/EOF/interrupt, 1 when startup fails.
"""

from __future__ import annotations

import logging
import signal
import sys

from ..cli.bootstrap import create_initial_state, load_initial_tasks
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _handle_sigterm(signum, _frame) -> None:
    # Same clean exit path as Ctrl+C: the console loop catches KeyboardInterrupt.
    logger.info("Signal %s received, shutting down...", signum)
    raise KeyboardInterrupt


def main() -> None:
    try:
        settings = get_settings()

        level_name = str(getattr(settings, "log_level", "WARNING")).upper()
        console_level = getattr(logging, level_name, logging.WARNING)
        setup_logging(log_dir=settings.data_dir, console_level=console_level)

        logger.info("Starting %s...", settings.app_name)

        state = create_initial_state(settings=settings)

        try:
            signal.signal(signal.SIGTERM, _handle_sigterm)
        except (ValueError, OSError):
            # Not the main thread, or the platform has no SIGTERM.
            logger.debug("SIGTERM handler not installed.", exc_info=True)

        print(f"{settings.app_name} - connecting to {state.gateway.describe()}...")
        startup: list[str] = []
        load_initial_tasks(state, emit=startup.append)
        startup.append('Ready. Enter "help" for a list of commands.')
    except KeyboardInterrupt:
        print()
        sys.exit(0)
    except Exception as e:
        logger.exception("Startup failed.")
        print(f"Failed to start: {e}", file=sys.stderr)
        sys.exit(1)

    code = run_console_loop(state, notices=startup)
    logger.info("Bye.")
    sys.exit(code)


if __name__ == "__main__":
    main()
