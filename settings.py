"""JSON-based settings for the Jalali calendar host (read-only)."""

import json
import logging
import os

logger = logging.getLogger(__name__)

_SETTINGS_ENV = "JALALI_CALENDAR_SETTINGS"
_SETTINGS_PATH = os.path.join(os.path.expanduser("~"), ".jalali-calendar-settings.json")

_DEFAULTS = {
    "persian_digits": False,
    "show_time": True,
    "date_format": "l j F Y H:i",
    "timezone": "Asia/Tehran",
    "log_level": "INFO",
}


def settings_path() -> str:
    """Return the settings file path, honouring $JALALI_CALENDAR_SETTINGS."""
    return os.environ.get(_SETTINGS_ENV) or _SETTINGS_PATH


def load_settings(path: str | None = None) -> dict:
    """Load settings from disk, returning defaults for missing keys."""
    settings = dict(_DEFAULTS)
    path = path or settings_path()
    try:
        with open(path, "r", encoding="utf-8") as f:
            stored = json.load(f)
    except FileNotFoundError:
        return settings
    except (json.JSONDecodeError, OSError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", path, exc)
        return settings

    if not isinstance(stored, dict):
        logger.warning("Ignoring settings file %s: expected a JSON object", path)
        return settings
    for key in ("persian_digits", "show_time"):
        if key in stored and isinstance(stored[key], bool):
            settings[key] = stored[key]
    for key in ("date_format", "timezone", "log_level"):
        if key in stored and isinstance(stored[key], str) and stored[key].strip():
            settings[key] = stored[key]
    return settings
