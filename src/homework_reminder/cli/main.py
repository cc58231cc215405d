# src/homework_reminder/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then starts the surfaces:
- glance refresher in a background thread (optional),
- console REPL for the main list and share ingest in the main thread (optional).
"""

from __future__ import annotations

import logging
import signal
import threading

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..connectors.glance_runner import GlanceBackgroundRunner, start_glance_in_background
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    level_name = str(settings.log_level).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings)

    glance_runner: GlanceBackgroundRunner | None = start_glance_in_background(state)

    # Use an Event so main can wait without a busy while-loop.
    stop_main = threading.Event()

    def _handle_signal(signum, _frame) -> None:
        logger.info("Signal %s received, shutting down...", signum)
        stop_main.set()

    try:
        signal.signal(signal.SIGTERM, _handle_signal)
        if not settings.console_enabled:
            signal.signal(signal.SIGINT, _handle_signal)
    except (ValueError, OSError):
        # Some platforms may not support SIGTERM, etc.
        pass

    try:
        if settings.console_enabled:
            run_console_loop(state)
            stop_main.set()
        else:
            logger.info("Console disabled. Running the glance surface only. Press Ctrl+C to stop.")
            stop_main.wait()
    finally:
        if glance_runner is not None:
            glance_runner.stop()
            glance_runner.join(timeout=5.0)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
