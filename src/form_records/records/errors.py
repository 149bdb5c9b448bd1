# src/form_records/records/errors.py

from __future__ import annotations


class RecordStoreError(Exception):
    """Base class for record store failures."""


class RecordParseError(RecordStoreError):
    """The records file is not a JSON array of records."""


class RecordNotFoundError(RecordStoreError, KeyError):
    def __init__(self, record_id: int) -> None:
        super().__init__(record_id)
        self.record_id = record_id

    def __str__(self) -> str:
        return f"record not found: id={self.record_id}"


class EditStateError(RecordStoreError):
    """Edit-session operation called in the wrong state."""
