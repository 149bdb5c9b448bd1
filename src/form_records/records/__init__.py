# src/form_records/records/__init__.py

from .edit_session import EditSession
from .errors import EditStateError, RecordNotFoundError, RecordParseError, RecordStoreError
from .record_models import ProfileRecord, Record, RecordKind, TaskRecord
from .record_store import RecordStore

__all__ = [
    "EditSession",
    "EditStateError",
    "ProfileRecord",
    "Record",
    "RecordKind",
    "RecordNotFoundError",
    "RecordParseError",
    "RecordStore",
    "RecordStoreError",
    "TaskRecord",
]
