"""
Settings Module for Nonogram Solver

Persists the solver preferences (strategy, deduction pass cap, guess
budget, debug logging) as JSON in config.json. Values read back are
checked against the expected types and ranges; anything unusable is
replaced by its default so a hand-edited file can never stop a solve.
"""

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

# Settings file location (working directory)
SETTINGS_FILE = Path("config.json")

# Default settings
DEFAULT_SETTINGS: Dict[str, Any] = {
    "debug_enabled": False,
    "strategy_name": "guess",
    "max_iterations": 100,
    "max_guesses": 1000,
}


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


# Acceptance check per key
_VALIDATORS: Dict[str, Callable[[Any], bool]] = {
    "debug_enabled": lambda value: isinstance(value, bool),
    "strategy_name": lambda value: isinstance(value, str) and bool(value),
    "max_iterations": lambda value: _is_int(value) and value >= 1,
    "max_guesses": _is_int,
}


def settings_path(path: Optional[PathLike] = None) -> Path:
    """Settings file to use: the given path, else config.json."""
    return Path(path) if path is not None else SETTINGS_FILE


def validate_settings(settings: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge settings over the defaults, keeping only usable values.

    Unknown keys are dropped. A known key with a value of the wrong
    type or out of range is logged and reset to its default.

    Args:
        settings: Raw settings, e.g. decoded from config.json

    Returns:
        Complete settings dictionary
    """
    result = DEFAULT_SETTINGS.copy()
    for key, value in settings.items():
        check = _VALIDATORS.get(key)
        if check is None:
            logger.debug(f"Ignoring unknown setting '{key}'")
            continue
        if not check(value):
            logger.warning(
                f"Invalid value for '{key}': {value!r}, using {DEFAULT_SETTINGS[key]!r}"
            )
            continue
        result[key] = value
    return result


def load_settings(path: Optional[PathLike] = None) -> Dict[str, Any]:
    """
    Load settings from config.json.

    Args:
        path: Settings file (default config.json in the working directory)

    Returns:
        Settings dictionary. Returns defaults if file missing or invalid.
    """
    settings_file = settings_path(path)
    if not settings_file.exists():
        logger.debug("Settings file not found, using defaults")
        return DEFAULT_SETTINGS.copy()

    try:
        with open(settings_file, 'r', encoding='utf-8') as f:
            settings = json.load(f)
    except (ValueError, IOError) as e:
        logger.warning(f"Failed to load settings: {e}, using defaults")
        return DEFAULT_SETTINGS.copy()

    if not isinstance(settings, dict):
        logger.warning(f"Settings in {settings_file} are not a JSON object, using defaults")
        return DEFAULT_SETTINGS.copy()

    result = validate_settings(settings)
    logger.debug(f"Settings loaded: {result}")
    return result


def save_settings(settings: Dict[str, Any], path: Optional[PathLike] = None) -> bool:
    """
    Save the known, valid settings to config.json.

    Args:
        settings: Settings dictionary to save
        path: Settings file (default config.json in the working directory)

    Returns:
        True if the file was written
    """
    settings_file = settings_path(path)
    to_save = validate_settings(settings)
    try:
        with open(settings_file, 'w', encoding='utf-8') as f:
            json.dump(to_save, f, indent=2)
        logger.debug(f"Settings saved: {to_save}")
        return True
    except IOError as e:
        logger.error(f"Failed to save settings: {e}")
        return False
