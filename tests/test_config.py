from pathlib import Path

from pydantic import ValidationError
import pytest

from passit.config import Settings, package_data_dir


def test_settings_defaults(monkeypatch):
    for name in ("PASSIT_DATA_DIR", "PASSIT_MAYBE_READ_BYTE", "PASSIT_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    s = Settings()
    assert s.data_dir == package_data_dir
    assert s.maybe_read_byte is False
    assert s.log_level == "WARNING"


def test_settings_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("PASSIT_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("PASSIT_MAYBE_READ_BYTE", "true")
    monkeypatch.setenv("PASSIT_LOG_LEVEL", "debug")

    s = Settings()
    assert s.data_dir == Path(tmp_path)
    assert s.maybe_read_byte is True
    assert s.log_level == "DEBUG"


def test_settings_reject_unknown_log_level(monkeypatch):
    monkeypatch.setenv("PASSIT_LOG_LEVEL", "chatty")

    with pytest.raises(ValidationError, match="Invalid log level 'chatty'"):
        Settings()
