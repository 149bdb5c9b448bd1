# src/form_records/records/record_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
import threading
import time
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path
from typing import Any

from .errors import RecordParseError
from .record_models import Record, RecordKind, record_type

logger = logging.getLogger(__name__)


def now_ms() -> int:
    return int(time.time() * 1000)


class RecordStore:
    """
    JSON-file record store.

    The whole collection lives in one JSON array at `path`:
    - load() reads and parses the entire file
    - every mutation builds a new list and rewrites the entire file
    - the in-memory list is replaced only after the write succeeded

    Thread-safety:
    - load/modify/save runs under one lock, so mutations never interleave
    """

    def __init__(
        self,
        path: str | Path,
        kind: RecordKind = RecordKind.TASK,
        *,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self._path = Path(path)
        self._kind = kind
        self._record_cls = record_type(kind)
        self._clock = clock
        self._lock = threading.RLock()
        self._records: list[Record] = []
        self.last_error: BaseException | None = None

    @property
    def path(self) -> Path:
        return self._path

    @property
    def kind(self) -> RecordKind:
        return self._kind

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(self._record_cls.FIELDS)

    @property
    def records(self) -> tuple[Record, ...]:
        """Read-only snapshot of the current collection."""
        with self._lock:
            return tuple(self._records)

    def count(self) -> int:
        with self._lock:
            return len(self._records)

    def get(self, record_id: int) -> Record | None:
        with self._lock:
            for rec in self._records:
                if rec.id == record_id:
                    return rec
            return None

    # ---- low-level helpers ----

    def _decode(self, text: str) -> list[Record]:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise RecordParseError(f"invalid JSON in {self._path}: {e}") from e
        except RecursionError as e:
            raise RecordParseError(f"JSON nested too deeply in {self._path}") from e

        if not isinstance(data, list):
            raise RecordParseError(
                f"expected a JSON array in {self._path}, got {type(data).__name__}"
            )

        out: list[Record] = []
        for i, raw in enumerate(data):
            rec = self._record_cls.from_dict(raw)
            if rec is None:
                logger.warning(
                    "Skipping malformed %s record at index %d in %s", self._kind.value, i, self._path
                )
                continue
            out.append(rec)
        return out

    @staticmethod
    def _encode(records: Iterable[Record]) -> str:
        return json.dumps([r.to_dict() for r in records], ensure_ascii=False)

    def _write(self, records: Iterable[Record]) -> None:
        payload = self._encode(records)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            with contextlib.suppress(FileNotFoundError):
                tmp.unlink()
            # Profile records carry plaintext passwords: private before any byte is written.
            tmp.touch(mode=0o600)
            tmp.write_text(payload, "utf-8")
            os.replace(tmp, self._path)
        except BaseException:
            with contextlib.suppress(OSError):
                tmp.unlink()
            raise

    def _next_id(self) -> int:
        new_id = int(self._clock())
        if self._records:
            top = max(r.id for r in self._records)
            if new_id <= top:
                new_id = top + 1
        return new_id

    # ---- public API ----

    def load(self) -> list[Record]:
        """
        Load the collection from disk.

        A missing file yields an empty collection. A corrupt or unreadable
        file is logged and the current in-memory collection is kept.
        """
        with self._lock:
            if not self._path.exists():
                logger.info("No records file at %s, starting empty.", self._path)
                self._records = []
                self.last_error = None
                return list(self._records)

            try:
                text = self._path.read_text("utf-8")
                records = self._decode(text)
            except (RecordParseError, OSError, UnicodeDecodeError) as e:
                self.last_error = e
                logger.exception("Failed to load records from %s", self._path)
                return list(self._records)

            self._records = records
            self.last_error = None
            logger.info("Loaded %d %s record(s) from %s", len(records), self._kind.value, self._path)
            return list(self._records)

    def save(self, records: Iterable[Record]) -> bool:
        """
        Overwrite the file with the full collection.

        Returns False (and keeps `last_error`) when the write failed; the
        previous file content is left in place.
        """
        records = list(records)
        with self._lock:
            try:
                self._write(records)
            except (OSError, TypeError, ValueError) as e:
                self.last_error = e
                logger.exception("Failed to save %d record(s) to %s", len(records), self._path)
                return False
            self.last_error = None
            logger.debug("Saved %d record(s) to %s", len(records), self._path)
            return True

    def _commit(self, updated: list[Record]) -> list[Record]:
        if self.save(updated):
            self._records = updated
        return list(self._records)

    def add(self, fields: Mapping[str, Any]) -> list[Record]:
        with self._lock:
            rec = self._record_cls.create(self._next_id(), fields)
            result = self._commit([*self._records, rec])
            if self.last_error is None:
                logger.info("Record added id=%s kind=%s", rec.id, self._kind.value)
            return result

    def update(self, record_id: int, fields: Mapping[str, Any]) -> list[Record]:
        """
        Replace the fields of the record with `record_id`, keeping its position.

        An unknown id leaves the collection as it is; it is still written back.
        """
        with self._lock:
            self._record_cls.clean_fields(fields)
            matched = False
            updated: list[Record] = []
            for rec in self._records:
                if rec.id == record_id:
                    rec = rec.with_fields(fields)
                    matched = True
                updated.append(rec)

            if not matched:
                logger.debug("Update for unknown record id=%s (no-op)", record_id)

            result = self._commit(updated)
            if matched and self.last_error is None:
                logger.info("Record updated id=%s", record_id)
            return result

    def remove(self, record_id: int) -> list[Record]:
        with self._lock:
            updated = [r for r in self._records if r.id != record_id]
            removed = len(self._records) - len(updated)
            result = self._commit(updated)
            if self.last_error is None:
                logger.info("Record removed id=%s count=%d", record_id, removed)
            return result
