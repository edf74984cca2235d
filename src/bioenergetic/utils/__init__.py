# src/bioenergetic/utils/__init__.py
"""Configuration, logging and run-directory utilities."""

from .config import (
    DEFAULT_CONFIG_PATH,
    ConfigError,
    get_value,
    load_config,
    merge_configs,
    save_config,
    to_dict,
    validate_config,
)
from .logging import setup_logging

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "ConfigError",
    "get_value",
    "load_config",
    "merge_configs",
    "save_config",
    "setup_logging",
    "to_dict",
    "validate_config",
]
