# src/form_records/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILENAME = "form_records.log"
APP_LOGGER = "form_records"


class _ConsoleNoiseFilter(logging.Filter):
    """
    The console shares the terminal with the command prompt, so only
    form_records messages reach it at their configured level. Everything
    else (python-dotenv, captured warnings) shows up there only at ERROR+,
    but still lands in the log file.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if name == APP_LOGGER or name.startswith(APP_LOGGER + "."):
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/form_records",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Route all logging to stderr (filtered) and to `<log_dir>/form_records.log`.

    Load/save failures of the record store are logged with tracebacks; the
    file handler keeps them even when the console level hides DEBUG output.
    Replaces any handlers already on the root logger. Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILENAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(_ConsoleNoiseFilter())
    root.addHandler(console)

    records_log = logging.FileHandler(str(log_file), encoding="utf-8")
    records_log.setLevel(file_level)
    records_log.setFormatter(fmt)
    root.addHandler(records_log)

    logging.captureWarnings(True)
    return log_file
