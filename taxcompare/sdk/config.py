"""Configuration management for Tax Compare.

Settings live in settings.json - machine-specific user preferences:
- default_currency: currency salaries are entered in when --currency is omitted
- default_country: country used when a command's country is omitted
- output_format: 'text' or 'json'

Config directory resolution:
1. TAX_COMPARE_CONFIG_PATH environment variable (if set)
2. XDG_CONFIG_HOME/tax-compare/ or ~/.config/tax-compare/

Settings only supply CLI defaults. SDK calculation functions never read
them; every entry point takes its country and salary explicitly.
"""

import json
import os
from pathlib import Path
from typing import Any, Callable, Dict


APP_NAME = "tax-compare"
SETTINGS_FILENAME = "settings.json"

DEFAULT_CURRENCY = "AUD"
DEFAULT_OUTPUT_FORMAT = "text"
OUTPUT_FORMATS = ("text", "json")


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Resolution order:
    1. TAX_COMPARE_CONFIG_PATH environment variable
    2. ~/.config/tax-compare/ (XDG_CONFIG_HOME)

    Returns:
        Path to the configuration directory
    """
    env_path = os.environ.get("TAX_COMPARE_CONFIG_PATH")
    if env_path:
        return Path(env_path)

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
    return Path(xdg_config_home) / APP_NAME


def get_settings_path() -> Path:
    """Get the path to settings.json (may not exist yet)."""
    return get_config_dir() / SETTINGS_FILENAME


def load_settings() -> dict:
    """Load settings from settings.json.

    Returns:
        Settings dictionary (empty dict if file doesn't exist)
    """
    settings_file = get_settings_path()

    if not settings_file.exists():
        return {}

    with open(settings_file, "r") as f:
        return json.load(f)


def save_settings(settings: dict) -> Path:
    """Save settings to settings.json.

    Returns:
        Path to the saved settings file
    """
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)

    settings_file = config_dir / SETTINGS_FILENAME

    with open(settings_file, "w") as f:
        json.dump(settings, f, indent=2)

    return settings_file


def _validate_currency(value: str) -> str:
    from .currency import normalize_currency
    return normalize_currency(value)


def _validate_country(value: str) -> str:
    from .jurisdictions import resolve
    return resolve(value).code


def _validate_output_format(value: str) -> str:
    normalized = value.strip().lower()
    if normalized not in OUTPUT_FORMATS:
        raise ValueError(f"output_format must be one of: {', '.join(OUTPUT_FORMATS)}")
    return normalized


# Known settings and the validator that normalizes each value
KNOWN_SETTINGS: Dict[str, Callable[[str], str]] = {
    "default_currency": _validate_currency,
    "default_country": _validate_country,
    "output_format": _validate_output_format,
}


def get_setting(key: str, default: Any = None) -> Any:
    """Get a setting value from settings.json.

    Args:
        key: Setting key (e.g., "default_currency")
        default: Default value if key not found

    Returns:
        Setting value or default
    """
    settings = load_settings()
    return settings.get(key, default)


def set_setting(key: str, value: str) -> Path:
    """Validate and set a setting value in settings.json.

    Args:
        key: One of KNOWN_SETTINGS
        value: Raw value; normalized by the key's validator

    Returns:
        Path to the saved settings file

    Raises:
        ValueError: Unknown key or invalid value
        UnsupportedJurisdictionError: default_country does not resolve
        InvalidCurrencyCodeError: default_currency is not supported
    """
    validator = KNOWN_SETTINGS.get(key)
    if validator is None:
        raise ValueError(f"Unknown setting '{key}'. Known settings: {', '.join(KNOWN_SETTINGS)}")

    settings = load_settings()
    settings[key] = validator(value)
    return save_settings(settings)


def unset_setting(key: str) -> bool:
    """Remove a setting. Returns True if it was set."""
    settings = load_settings()
    if key not in settings:
        return False
    del settings[key]
    save_settings(settings)
    return True


def get_default_currency() -> str:
    return get_setting("default_currency", DEFAULT_CURRENCY)


def get_default_country() -> Any:
    """Configured default country code, or None."""
    return get_setting("default_country")


def get_output_format() -> str:
    return get_setting("output_format", DEFAULT_OUTPUT_FORMAT)
