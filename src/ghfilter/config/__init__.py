"""Configuration module for ghfilter.

This module provides configuration loading, validation, and schema definitions.

Usage:
    from ghfilter.config import load_config, Config

    config = load_config()  # Auto-discovers config file
    config = load_config("/path/to/filters.yaml")  # Explicit path
"""

from ghfilter.config.loader import (
    ConfigError,
    ConfigNotFoundError,
    ConfigValidationError,
    EnvironmentVariableError,
    discover_config_path,
    load_config,
)
from ghfilter.config.schema import Config, NamedFilter

__all__ = [
    "Config",
    "ConfigError",
    "ConfigNotFoundError",
    "ConfigValidationError",
    "EnvironmentVariableError",
    "NamedFilter",
    "discover_config_path",
    "load_config",
]
