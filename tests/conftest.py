# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from form_records.core.state import AppState
from form_records.records.record_models import RecordKind
from form_records.records.record_store import RecordStore

from .fakes import FakeClock


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment.
    """
    return SimpleNamespace(
        app_name="form-records-test",
        log_level="DEBUG",
        log_dir=tmp_path,
        record_kind=RecordKind.TASK,
        data_dir=tmp_path,
        records_path=tmp_path / "tasks.json",
        console_enabled=False,
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def store(settings: SimpleNamespace, clock: FakeClock) -> RecordStore:
    s = RecordStore(settings.records_path, RecordKind.TASK, clock=clock)
    s.load()
    return s


@pytest.fixture()
def profile_store(tmp_path: Path, clock: FakeClock) -> RecordStore:
    s = RecordStore(tmp_path / "profiles.json", RecordKind.PROFILE, clock=clock)
    s.load()
    return s


@pytest.fixture()
def state(settings: SimpleNamespace, store: RecordStore) -> AppState:
    """AppState over a real JSON store in tmp_path."""
    return AppState.for_store(settings, store)


@pytest.fixture()
def profile_state(settings: SimpleNamespace, profile_store: RecordStore) -> AppState:
    return AppState.for_store(settings, profile_store)
