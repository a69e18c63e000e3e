"""JSON-based settings persistence for the date picker's default options."""

import json
import logging
import os

logger = logging.getLogger(__name__)

_SETTINGS_PATH = os.path.join(os.path.expanduser("~"), ".mini-datepicker-settings.json")

_DEFAULTS = {
    "lang": "en-US",
    "aria_prev": "Previous",
    "aria_next": "Next",
    "months_only": False,
    "first_weekday": 0,
    "fixed": None,
    "min": None,
    "max": None,
    "start": None,
}


def _is_partial(value) -> bool:
    return isinstance(value, dict) and all(
        isinstance(k, str) and isinstance(v, int) and not isinstance(v, bool)
        for k, v in value.items()
    )


def load_settings() -> dict:
    """Load settings from disk, returning defaults for missing keys.

    Only the JSON shape is checked here; whether the dates make sense is
    decided when the picker resolves them.
    """
    settings = dict(_DEFAULTS)
    try:
        with open(_SETTINGS_PATH, "r", encoding="utf-8") as f:
            stored = json.load(f)
    except FileNotFoundError:
        return settings
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Ignoring unreadable settings file %s: %s", _SETTINGS_PATH, e)
        return settings
    if not isinstance(stored, dict):
        return settings

    for key in ("lang", "aria_prev", "aria_next"):
        if key in stored and isinstance(stored[key], str):
            settings[key] = stored[key]
    if "months_only" in stored and isinstance(stored["months_only"], bool):
        settings["months_only"] = stored["months_only"]
    if "first_weekday" in stored and isinstance(stored["first_weekday"], int) \
            and 0 <= stored["first_weekday"] <= 6:
        settings["first_weekday"] = stored["first_weekday"]
    if "fixed" in stored and (isinstance(stored["fixed"], str) or _is_partial(stored["fixed"])):
        settings["fixed"] = stored["fixed"]
    for key in ("min", "max"):
        if key in stored and (stored[key] == "now" or _is_partial(stored[key])):
            settings[key] = stored[key]
    if "start" in stored and _is_partial(stored["start"]):
        settings["start"] = stored["start"]
    return settings


def save_settings(settings: dict) -> None:
    """Persist settings to disk."""
    with open(_SETTINGS_PATH, "w", encoding="utf-8") as f:
        json.dump(settings, f, indent=2)


def picker_options(settings: dict) -> dict:
    """Map stored settings onto :class:`date_picker.DatePicker` keyword arguments."""
    return {key: settings.get(key, default) for key, default in _DEFAULTS.items()}
