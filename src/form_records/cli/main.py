# src/form_records/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState (loads the records file), then runs the
console REPL in the main thread.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    setup_logging(log_dir=settings.log_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings)

    if settings.console_enabled:
        run_console_loop(state)
    else:
        logger.info(
            "Console disabled. Loaded %d %s record(s) from %s; nothing else to do.",
            state.store.count(),
            state.store.kind.value,
            state.store.path,
        )

    logger.info("Bye.")


if __name__ == "__main__":
    main()
