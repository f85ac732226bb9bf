import json
import logging

import pytest

import settings


@pytest.fixture
def settings_file(tmp_path, monkeypatch):
    path = tmp_path / "settings.json"
    monkeypatch.setenv("JALALI_CALENDAR_SETTINGS", str(path))
    return path


def test_missing_file_gives_defaults(settings_file, caplog):
    with caplog.at_level(logging.WARNING):
        loaded = settings.load_settings()
    assert loaded == settings._DEFAULTS
    assert caplog.records == []


def test_settings_path_honours_environment(settings_file):
    assert settings.settings_path() == str(settings_file)


def test_settings_path_default(monkeypatch):
    monkeypatch.delenv("JALALI_CALENDAR_SETTINGS", raising=False)
    assert settings.settings_path().endswith(".jalali-calendar-settings.json")


def test_stored_values_override_defaults(settings_file):
    settings_file.write_text(json.dumps({
        "persian_digits": True,
        "date_format": "Y/m/d",
        "timezone": "UTC",
    }), encoding="utf-8")
    loaded = settings.load_settings()
    assert loaded["persian_digits"] is True
    assert loaded["date_format"] == "Y/m/d"
    assert loaded["timezone"] == "UTC"
    assert loaded["show_time"] is True
    assert loaded["log_level"] == "INFO"


def test_wrongly_typed_values_are_ignored(settings_file):
    settings_file.write_text(json.dumps({
        "persian_digits": "yes",
        "show_time": 0,
        "date_format": "   ",
        "log_level": 10,
        "unknown": 1,
    }), encoding="utf-8")
    assert settings.load_settings() == settings._DEFAULTS


def test_explicit_path_wins(settings_file, tmp_path):
    other = tmp_path / "other.json"
    other.write_text('{"show_time": false}', encoding="utf-8")
    assert settings.load_settings(str(other))["show_time"] is False


@pytest.mark.parametrize("content", ["{not json", "[1, 2]", '"text"'])
def test_bad_file_warns_and_uses_defaults(settings_file, caplog, content):
    settings_file.write_text(content, encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="settings"):
        loaded = settings.load_settings()
    assert loaded == settings._DEFAULTS
    assert "Ignoring" in caplog.text


def test_defaults_are_not_shared(settings_file):
    loaded = settings.load_settings()
    loaded["timezone"] = "UTC"
    assert settings.load_settings()["timezone"] == "Asia/Tehran"
