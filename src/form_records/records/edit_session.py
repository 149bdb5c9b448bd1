# src/form_records/records/edit_session.py

from __future__ import annotations

"""
Edit toggle for a single record.

Two states:
- idle: nothing is being edited, the buffer is empty
- editing(id): the buffer holds the fields of record `id`

start() loads the record into the buffer, commit() writes the buffer through
RecordStore.update(), cancel() drops it. The buffer itself is never persisted.
"""

import logging
from typing import Any

from .errors import EditStateError, RecordNotFoundError
from .record_models import Record, record_type
from .record_store import RecordStore

logger = logging.getLogger(__name__)


class EditSession:
    def __init__(self, store: RecordStore) -> None:
        self._store = store
        self._editing_id: int | None = None
        self._buffer: dict[str, str] = {}

    @property
    def editing_id(self) -> int | None:
        return self._editing_id

    @property
    def is_editing(self) -> bool:
        return self._editing_id is not None

    @property
    def buffer(self) -> dict[str, str]:
        return dict(self._buffer)

    def start(self, record_id: int) -> dict[str, str]:
        rec = self._store.get(record_id)
        if rec is None:
            raise RecordNotFoundError(record_id)

        if self._editing_id is not None and self._editing_id != record_id:
            logger.debug("Discarding edit buffer for id=%s", self._editing_id)

        self._editing_id = rec.id
        self._buffer = rec.fields()
        logger.debug("Editing record id=%s", rec.id)
        return self.buffer

    def set_field(self, name: str, value: Any) -> None:
        if self._editing_id is None:
            raise EditStateError("not editing any record")
        clean = record_type(self._store.kind).clean_fields({name: value})
        self._buffer.update(clean)

    def commit(self) -> list[Record]:
        if self._editing_id is None:
            raise EditStateError("not editing any record")
        record_id, fields = self._editing_id, dict(self._buffer)
        self._reset()
        return self._store.update(record_id, fields)

    def cancel(self) -> None:
        if self._editing_id is not None:
            logger.debug("Edit cancelled id=%s", self._editing_id)
        self._reset()

    def _reset(self) -> None:
        self._editing_id = None
        self._buffer = {}
