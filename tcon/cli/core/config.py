#!/usr/bin/env python3
"""
Configuration management for TCon CLI tools.

This module provides functions for loading, saving, and accessing user
settings of the command-line tools.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

# Default settings
DEFAULT_CONFIG = {
    "output_dir": ".",
    "default_seed": -1,
    "log_level": "WARNING",
    "recent_pipelines": [],
}

MAX_RECENT = 10

# Settings read by the commands, shown by `config show`
SETTING_USAGE = {
    "output_dir": "build: directory of <seed>.obj exports",
    "default_seed": "build: seed used when the document seed is -1",
    "log_level": "all commands: logging level unless --verbose",
    "recent_pipelines": "build: most recently built documents",
}


def normalize_log_level(value: Any) -> Optional[str]:
    """
    Canonical logging level name for a setting value.

    Returns:
        Upper-case level name, or None if logging does not know the level
    """
    name = str(value).upper()
    if isinstance(logging.getLevelName(name), int):
        return name
    return None


def get_config_path() -> Path:
    """Get the path to the configuration file."""
    return Path.home() / ".tcon_config.json"


def load_config() -> Dict[str, Any]:
    """
    Load configuration from config file or create default one.

    Returns:
        Dictionary containing configuration settings.
    """
    config_path = get_config_path()
    if not config_path.exists():
        save_config(DEFAULT_CONFIG)
        return json.loads(json.dumps(DEFAULT_CONFIG))

    try:
        with open(config_path, 'r') as f:
            config = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Could not load config file: {e}")
        return json.loads(json.dumps(DEFAULT_CONFIG))

    if not isinstance(config, dict):
        logger.warning(f"Ignoring config file {config_path}: not a JSON object")
        return json.loads(json.dumps(DEFAULT_CONFIG))

    # Update with any missing default values
    for key, value in DEFAULT_CONFIG.items():
        config.setdefault(key, value)
    return config


def save_config(config: Dict[str, Any]) -> None:
    """
    Save configuration to config file.

    Args:
        config: Configuration dictionary to save.
    """
    config_path = get_config_path()
    try:
        with open(config_path, 'w') as f:
            json.dump(config, f, indent=2)
    except OSError as e:
        logger.warning(f"Could not save config file: {e}")


def get_config_value(key: str, default: Any = None) -> Any:
    return load_config().get(key, default)


def set_config_value(key: str, value: Any) -> None:
    config = load_config()
    config[key] = value
    save_config(config)


def reset_config() -> None:
    """Reset configuration to default values."""
    save_config(DEFAULT_CONFIG)


def parse_config_value(value: str) -> Any:
    """Convert a command-line string to the JSON type it looks like."""
    if value.lower() == "true":
        return True
    if value.lower() == "false":
        return False
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return float(value)
    except ValueError:
        return value


def update_recent_pipelines(filepath: str) -> None:
    """
    Add a pipeline file to the recent list.

    Args:
        filepath: Path to the file to add.
    """
    config = load_config()
    recent = [p for p in config.get("recent_pipelines", []) if p != filepath]
    recent.insert(0, filepath)
    config["recent_pipelines"] = recent[:MAX_RECENT]
    save_config(config)
