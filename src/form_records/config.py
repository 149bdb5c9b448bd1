# src/form_records/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Paths default to a local, gitignored data dir.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from .records.record_models import RecordKind

ENV_PREFIX = "FORMREC"

DEFAULT_DATA_DIR = Path(".local/form_records")
DEFAULT_RECORDS_FILENAME = "tasks.json"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    log_dir: Path

    # ---- Records ----
    record_kind: RecordKind
    data_dir: Path
    records_path: Path

    # ---- Connector flags ----
    console_enabled: bool

    @staticmethod
    def from_env(*, dotenv: bool = True) -> "Settings":
        if dotenv:
            load_dotenv(find_dotenv(usecwd=True), override=False)

        app_name = _env(_k("APP_NAME"), "form-records").strip() or "form-records"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        record_kind = RecordKind.from_config(os.getenv(_k("RECORD_KIND")))

        data_dir = _env_path(_k("DATA_DIR"), DEFAULT_DATA_DIR)
        records_path = _env_path(_k("RECORDS_PATH"), data_dir / DEFAULT_RECORDS_FILENAME)
        log_dir = _env_path(_k("LOG_DIR"), data_dir)

        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            log_dir=log_dir,
            record_kind=record_kind,
            data_dir=data_dir,
            records_path=records_path,
            console_enabled=console_enabled,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    """Process-wide settings, read from the environment on first use."""
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS
