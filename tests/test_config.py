"""Tests for settings loading and bootstrap."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from form_records.cli.bootstrap import create_initial_state
from form_records.config import Settings
from form_records.logging_setup import LOG_FILENAME, _ConsoleNoiseFilter, setup_logging
from form_records.records.record_models import RecordKind

_ENV_KEYS = [
    "FORMREC_APP_NAME",
    "FORMREC_LOG_LEVEL",
    "FORMREC_RECORD_KIND",
    "FORMREC_DATA_DIR",
    "FORMREC_RECORDS_PATH",
    "FORMREC_LOG_DIR",
    "FORMREC_CONSOLE_ENABLED",
]


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> pytest.MonkeyPatch:
    monkeypatch.chdir(tmp_path)
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


class TestSettings:
    def test_defaults(self, clean_env):
        s = Settings.from_env(dotenv=False)
        assert s.app_name == "form-records"
        assert s.record_kind is RecordKind.TASK
        assert s.records_path == Path(".local/form_records") / "tasks.json"
        assert s.log_dir == s.data_dir
        assert s.console_enabled is True

    def test_env_override(self, clean_env, tmp_path: Path):
        clean_env.setenv("FORMREC_RECORD_KIND", "Profile")
        clean_env.setenv("FORMREC_DATA_DIR", str(tmp_path / "data"))
        clean_env.setenv("FORMREC_CONSOLE_ENABLED", "no")

        s = Settings.from_env(dotenv=False)
        assert s.record_kind is RecordKind.PROFILE
        assert s.records_path == tmp_path / "data" / "tasks.json"
        assert s.console_enabled is False

    def test_explicit_records_path_wins(self, clean_env, tmp_path: Path):
        clean_env.setenv("FORMREC_DATA_DIR", str(tmp_path / "data"))
        clean_env.setenv("FORMREC_RECORDS_PATH", str(tmp_path / "elsewhere.json"))

        s = Settings.from_env(dotenv=False)
        assert s.records_path == tmp_path / "elsewhere.json"

    def test_unknown_kind_falls_back_to_task(self, clean_env):
        clean_env.setenv("FORMREC_RECORD_KIND", "invoice")
        assert Settings.from_env(dotenv=False).record_kind is RecordKind.TASK

    def test_dotenv_file(self, clean_env, tmp_path: Path):
        (tmp_path / ".env").write_text("FORMREC_RECORD_KIND=profile\nFORMREC_APP_NAME=from-dotenv\n")
        try:
            s = Settings.from_env()
        finally:
            # load_dotenv writes into os.environ; drop it again for other tests
            clean_env.delenv("FORMREC_RECORD_KIND", raising=False)
            clean_env.delenv("FORMREC_APP_NAME", raising=False)
        assert s.record_kind is RecordKind.PROFILE
        assert s.app_name == "from-dotenv"


def test_bootstrap_loads_existing_file(settings) -> None:
    settings.records_path.write_text('[{"id": 7, "task": "t", "description": "d"}]', "utf-8")

    state = create_initial_state(settings=settings)

    assert state.store.count() == 1
    assert state.store.get(7) is not None
    assert not state.edit.is_editing


def test_setup_logging_writes_file(tmp_path: Path) -> None:
    root = logging.getLogger()
    saved = list(root.handlers), root.level
    try:
        log_file = setup_logging(log_dir=tmp_path / "logs")
        logging.getLogger("form_records.test").info("hello log")
        for h in root.handlers:
            h.flush()
        assert log_file == tmp_path / "logs" / LOG_FILENAME
        assert "hello log" in log_file.read_text("utf-8")
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        for h in saved[0]:
            root.addHandler(h)
        root.setLevel(saved[1])
        logging.captureWarnings(False)


def test_console_filter_keeps_app_logs_and_quiets_others() -> None:
    f = _ConsoleNoiseFilter()

    def rec(name: str, level: int) -> logging.LogRecord:
        return logging.LogRecord(name, level, __file__, 1, "msg", None, None)

    assert f.filter(rec("form_records.records.record_store", logging.INFO))
    assert f.filter(rec("form_records", logging.DEBUG))
    assert not f.filter(rec("form_records_other", logging.INFO))
    assert not f.filter(rec("dotenv.main", logging.WARNING))
    assert not f.filter(rec("py.warnings", logging.WARNING))
    assert f.filter(rec("dotenv.main", logging.ERROR))
