"""Configuration for searchtrend."""

from .settings import (
    LOG_LEVELS,
    ConfigError,
    Settings,
    generate_example_env,
    get_settings,
    load_env_file,
    load_settings,
)

__all__ = [
    "LOG_LEVELS",
    "ConfigError",
    "Settings",
    "generate_example_env",
    "get_settings",
    "load_env_file",
    "load_settings",
]
