"""Configuration management for the G935 battery reporter."""

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any

from g935_battery.core.profile import DEFAULT_CARD, DEFAULT_COMMAND, DEFAULT_PROFILE
from g935_battery.providers.sysfs import POWER_SUPPLY_DIR, USB_DEVICES_DIR

log = logging.getLogger(__name__)


# Default configuration values
DEFAULTS = {
    # Where battery data comes from: "hid" (HID++ request) or "sysfs" (kernel)
    "acquisition": {
        "mode": "hid",
    },

    # Status poller
    "polling": {
        "interval_ms": 500,
    },

    # Card profile switching on connect/disconnect
    "profile": {
        "enabled": False,
        "command": list(DEFAULT_COMMAND),
        "card": DEFAULT_CARD,
        "profile": DEFAULT_PROFILE,
    },

    # sysfs roots, only used in sysfs mode
    "sysfs": {
        "usb_root": str(USB_DEVICES_DIR),
        "power_supply_root": str(POWER_SUPPLY_DIR),
    },
}


def get_config_dir() -> Path:
    """Get the configuration directory, creating it if needed."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME", "")
    if xdg_config:
        config_dir = Path(xdg_config) / "g935-battery"
    else:
        config_dir = Path.home() / ".config" / "g935-battery"

    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_config_path() -> Path:
    """Get the path to the configuration file."""
    return get_config_dir() / "config.json"


def _deep_merge(base: dict, override: dict) -> dict:
    """Deep merge override into base, returning new dict."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config() -> dict:
    """Load configuration from file, merging with defaults."""
    try:
        config_path = get_config_path()
    except OSError as e:
        log.warning("Could not create config directory: %s", e)
        return _deep_merge(copy.deepcopy(DEFAULTS), {})

    if config_path.exists():
        try:
            with open(config_path, "r") as f:
                user_config = json.load(f)
            return _deep_merge(copy.deepcopy(DEFAULTS), user_config)
        except (json.JSONDecodeError, OSError) as e:
            log.warning("Could not load config from %s: %s", config_path, e)
            return _deep_merge(copy.deepcopy(DEFAULTS), {})

    # Create default config file on first run
    save_config(DEFAULTS)
    return _deep_merge(copy.deepcopy(DEFAULTS), {})


def save_config(config: dict) -> bool:
    """Save configuration to file."""
    try:
        config_path = get_config_path()
        with open(config_path, "w") as f:
            json.dump(config, f, indent=2)
        return True
    except OSError as e:
        log.warning("Could not save config: %s", e)
        return False


def get(config: dict, key: str, default: Any = None) -> Any:
    """Get a config value using dot notation (e.g., 'polling.interval_ms')."""
    value = config
    for k in key.split("."):
        if isinstance(value, dict) and k in value:
            value = value[k]
        else:
            return default
    return value
