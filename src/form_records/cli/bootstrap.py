# src/form_records/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- builds the RecordStore for the configured record kind and loads it,
- wires it into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..records.record_models import RecordKind
from ..records.record_store import RecordStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.records_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    kind = getattr(settings, "record_kind", RecordKind.TASK)
    store = RecordStore(settings.records_path, kind)
    store.load()

    logger.info(
        "RecordStore ready path=%s kind=%s total=%s",
        store.path,
        store.kind.value,
        store.count(),
    )
    return AppState.for_store(settings, store)
