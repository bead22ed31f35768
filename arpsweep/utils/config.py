#!/usr/bin/env python3
"""
ArpSweep - Configuration Management Module
Copyright (C) 2025  Dorin Badea
GPLv3 License

Persistent defaults for the CLI (last target, interface, listening window,
vendor registry path, language).
"""

import copy
import json
import logging
import os
from typing import Any, Dict, Optional

from arpsweep.utils.constants import (
    DEFAULT_LISTEN_WINDOW,
    ENV_LISTEN_WINDOW,
    MAX_LISTEN_WINDOW,
    MIN_LISTEN_WINDOW,
    SECURE_FILE_MODE,
)
from arpsweep.utils.paths import get_invoking_home_dir, maybe_chown_to_invoking_user

# Config version
CONFIG_VERSION = "1.0.0"

# Default config structure
DEFAULT_CONFIG: Dict[str, Any] = {
    "version": CONFIG_VERSION,
    "defaults": {
        "target_network": None,  # str CIDR, e.g. "192.168.1.0/24"
        "interface": None,  # str | None (None = first usable adapter)
        "listen_window": None,  # float seconds
        "oui_path": None,  # str path to oui.txt
        "lang": None,  # "en" | "es"
    },
}

logger = logging.getLogger(__name__)


def get_config_paths() -> tuple[str, str]:
    """
    Get the config directory and file path.

    - Normal execution: use the current user's home (~/.arpsweep/config.json)
    - sudo execution: use the invoking user's home (~SUDO_USER/.arpsweep/config.json)
    """
    config_dir = os.path.join(get_invoking_home_dir(), ".arpsweep")
    config_file = os.path.join(config_dir, "config.json")
    return config_dir, config_file


def ensure_config_dir() -> str:
    """
    Create config directory if it doesn't exist.

    Returns:
        Path to config directory
    """
    config_dir, _ = get_config_paths()
    if not os.path.isdir(config_dir):
        os.makedirs(config_dir, mode=0o700, exist_ok=True)
    try:
        os.chmod(config_dir, 0o700)
    except OSError:
        logger.debug("Failed to chmod config dir: %s", config_dir, exc_info=True)
    maybe_chown_to_invoking_user(config_dir)
    return config_dir


def load_config() -> Dict[str, Any]:
    """
    Load configuration from file.

    Returns:
        Configuration dictionary (defaults if file doesn't exist or is invalid)
    """
    _, config_file = get_config_paths()
    if not os.path.isfile(config_file):
        return copy.deepcopy(DEFAULT_CONFIG)

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            config = json.load(f)
    except (json.JSONDecodeError, OSError):
        logger.debug("Failed to load config file; using defaults", exc_info=True)
        return copy.deepcopy(DEFAULT_CONFIG)

    if not isinstance(config, dict):
        return copy.deepcopy(DEFAULT_CONFIG)

    # Merge with defaults for any missing keys
    merged = copy.deepcopy(DEFAULT_CONFIG)
    merged.update(config)
    return merged


def save_config(config: Dict[str, Any]) -> bool:
    """
    Save configuration to file with secure permissions.

    Returns:
        True if save succeeded
    """
    try:
        ensure_config_dir()
    except OSError:
        logger.debug("Failed to create config dir", exc_info=True)
        return False
    _, config_file = get_config_paths()

    config["version"] = CONFIG_VERSION

    try:
        # Write to temp file first then rename (atomic)
        temp_file = config_file + ".tmp"
        with open(temp_file, "w", encoding="utf-8") as f:
            json.dump(config, f, indent=2)

        # Owner read/write only
        os.chmod(temp_file, SECURE_FILE_MODE)

        os.replace(temp_file, config_file)
        maybe_chown_to_invoking_user(config_file)
        return True

    except OSError:
        logger.debug("Failed to save config file", exc_info=True)
        return False


def get_persistent_defaults() -> Dict[str, Any]:
    """
    Get persisted defaults from config file.

    Returns:
        Dict with default keys; values may be None if not configured.
    """
    config = load_config()
    raw = config.get("defaults")
    defaults = DEFAULT_CONFIG["defaults"].copy()
    if isinstance(raw, dict):
        defaults.update({k: v for k, v in raw.items() if k in defaults})
    return defaults


def update_persistent_defaults(**kwargs: Any) -> bool:
    """
    Update persisted defaults in config file.

    Any keys not present in DEFAULT_CONFIG["defaults"] are ignored.

    Returns:
        True if save succeeded
    """
    config = load_config()
    existing = config.get("defaults")
    defaults = existing if isinstance(existing, dict) else {}

    allowed = set(DEFAULT_CONFIG["defaults"].keys())
    for key, value in kwargs.items():
        if key in allowed:
            defaults[key] = value

    config["defaults"] = defaults
    return save_config(config)


def _coerce_listen_window(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        window = float(value)
    except (TypeError, ValueError):
        return None
    if not MIN_LISTEN_WINDOW <= window <= MAX_LISTEN_WINDOW:
        return None
    return window


def resolve_listen_window(explicit: Any = None, configured: Any = None) -> float:
    """
    Resolve the listening window (seconds).

    Priority: explicit value, ARPSWEEP_LISTEN_WINDOW, persisted value, default.
    Out-of-range or non-numeric values are ignored.
    """
    for candidate in (explicit, os.environ.get(ENV_LISTEN_WINDOW), configured):
        if candidate is None or candidate == "":
            continue
        window = _coerce_listen_window(candidate)
        if window is not None:
            return window
        logger.warning("Ignoring invalid listening window: %r", candidate)
    return DEFAULT_LISTEN_WINDOW
