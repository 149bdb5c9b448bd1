# src/form_records/records/record_models.py

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Any, ClassVar, TypeAlias

logger = logging.getLogger(__name__)


class RecordKind(StrEnum):
    """
    Which record shape a store holds.

    One store never mixes kinds: the file on disk is a plain JSON array
    with no type tag per element.
    """

    PROFILE = "profile"
    TASK = "task"

    @classmethod
    def from_config(cls, raw: str | None) -> RecordKind:
        if not raw:
            return cls.TASK
        try:
            return cls(raw.strip().lower())
        except ValueError:
            logger.warning("Unknown record kind %r, using %s.", raw, cls.TASK.value)
            return cls.TASK


class _RecordMixin:
    __slots__ = ()

    # JSON key -> attribute name, in on-disk key order.
    FIELDS: ClassVar[dict[str, str]] = {}
    kind: ClassVar[RecordKind]

    id: int

    @classmethod
    def clean_fields(cls, fields: Mapping[str, Any]) -> dict[str, str]:
        """
        Validate a field mapping keyed by JSON names and coerce values to str.

        `id` is never accepted here: it is assigned by the store.
        """
        unknown = sorted(k for k in fields if k not in cls.FIELDS)
        if unknown:
            allowed = ", ".join(cls.FIELDS)
            raise ValueError(
                f"unknown field(s) for {cls.kind.value} record: {', '.join(unknown)} "
                f"(allowed: {allowed})"
            )
        return {k: "" if v is None else str(v) for k, v in fields.items()}

    @classmethod
    def create(cls, record_id: int, fields: Mapping[str, Any]):
        clean = cls.clean_fields(fields)
        kwargs = {attr: clean.get(key, "") for key, attr in cls.FIELDS.items()}
        return cls(id=int(record_id), **kwargs)  # type: ignore[call-arg]

    @classmethod
    def from_dict(cls, raw: Any):
        """
        Decode one element of the on-disk array.

        Lenient: missing fields become "", unknown keys are dropped.
        Returns None when the element is not an object or has no integer id.
        """
        if not isinstance(raw, dict):
            return None
        rid = raw.get("id")
        if isinstance(rid, bool) or not isinstance(rid, int):
            return None
        kwargs = {}
        for key, attr in cls.FIELDS.items():
            val = raw.get(key)
            kwargs[attr] = "" if val is None else str(val)
        return cls(id=rid, **kwargs)  # type: ignore[call-arg]

    def fields(self) -> dict[str, str]:
        return {key: getattr(self, attr) for key, attr in self.FIELDS.items()}

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, **self.fields()}

    def with_fields(self, fields: Mapping[str, Any]):
        """Copy with the given (JSON-named) fields replaced; id is kept."""
        clean = self.clean_fields(fields)
        changes = {self.FIELDS[k]: v for k, v in clean.items()}
        return replace(self, **changes)  # type: ignore[type-var]


@dataclass(slots=True)
class ProfileRecord(_RecordMixin):
    FIELDS: ClassVar[dict[str, str]] = {
        "name": "name",
        "lastName": "last_name",
        "email": "email",
        # Stored as typed, in plaintext.
        "password": "password",
    }
    kind: ClassVar[RecordKind] = RecordKind.PROFILE

    id: int
    name: str = ""
    last_name: str = ""
    email: str = ""
    password: str = ""


@dataclass(slots=True)
class TaskRecord(_RecordMixin):
    FIELDS: ClassVar[dict[str, str]] = {
        "task": "task",
        "description": "description",
    }
    kind: ClassVar[RecordKind] = RecordKind.TASK

    id: int
    task: str = ""
    description: str = ""


Record: TypeAlias = ProfileRecord | TaskRecord

RECORD_TYPES: dict[RecordKind, type[ProfileRecord] | type[TaskRecord]] = {
    RecordKind.PROFILE: ProfileRecord,
    RecordKind.TASK: TaskRecord,
}


def record_type(kind: RecordKind) -> type[ProfileRecord] | type[TaskRecord]:
    return RECORD_TYPES[kind]
