# src/form_records/core/state.py

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any

from ..records.edit_session import EditSession
from ..records.record_store import RecordStore


@dataclass
class AppState:
    # Settings object (form_records.config.Settings or a test stand-in).
    settings: Any

    store: RecordStore
    edit: EditSession

    # Serializes command handling across connectors.
    lock: threading.Lock = field(default_factory=threading.Lock)

    @classmethod
    def for_store(cls, settings: Any, store: RecordStore) -> AppState:
        return cls(settings=settings, store=store, edit=EditSession(store))
