from pathlib import Path

import pytest

from taskpad.config import load_settings


def _clear(monkeypatch):
    for name in ("BOT_TOKEN", "DB_PATH", "TZ", "ALLOWED_USER_IDS", "REJECT_CONCURRENT_EDITS", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


def test_defaults(monkeypatch):
    _clear(monkeypatch)
    monkeypatch.setenv("BOT_TOKEN", "123:abc")
    settings = load_settings(dotenv=False)
    assert settings.db_path == Path("data/taskpad.db")
    assert settings.timezone == "UTC"
    assert settings.allowed_user_ids == frozenset()
    assert settings.reject_concurrent_edits is False
    assert settings.log_level == "INFO"


def test_overrides(monkeypatch):
    _clear(monkeypatch)
    monkeypatch.setenv("BOT_TOKEN", "123:abc")
    monkeypatch.setenv("ALLOWED_USER_IDS", "11, 22,")
    monkeypatch.setenv("REJECT_CONCURRENT_EDITS", "yes")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    settings = load_settings(dotenv=False)
    assert settings.allowed_user_ids == frozenset({"11", "22"})
    assert settings.reject_concurrent_edits is True
    assert settings.log_level == "DEBUG"


def test_missing_token_is_an_error(monkeypatch):
    _clear(monkeypatch)
    with pytest.raises(RuntimeError, match="BOT_TOKEN"):
        load_settings(dotenv=False)


def test_bad_user_id(monkeypatch):
    _clear(monkeypatch)
    monkeypatch.setenv("BOT_TOKEN", "123:abc")
    monkeypatch.setenv("ALLOWED_USER_IDS", "alice")
    with pytest.raises(RuntimeError, match="ALLOWED_USER_IDS"):
        load_settings(dotenv=False)
