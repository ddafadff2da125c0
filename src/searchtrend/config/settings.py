"""Centralized configuration for searchtrend.

Loads configuration from a .env file and the environment and provides typed
access to settings. Every setting has a default, so a fresh checkout runs
without any configuration; invalid values produce clear errors.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from ..rollups.time_windows import DEFAULT_WINDOW_SIZE

__all__ = [
    "ConfigError",
    "LOG_LEVELS",
    "Settings",
    "generate_example_env",
    "get_settings",
    "load_env_file",
    "load_settings",
]

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class ConfigError(Exception):
    """Raised when configuration is missing or invalid."""

    pass


@dataclass
class Settings:
    """Settings for loading, aggregating and charting search trends.

    Attributes
    ----------
    data_file : Path
        Default input CSV
    window_size : int
        Observations per rolling window
    date_column : str
        CSV column holding the date
    value_column : str
        CSV column holding the search count
    chart_title : str
        Title of rendered charts
    quarantine_dir : Path | None
        Directory for quarantined rows (None keeps them in memory)
    log_level : str
        Logging level
    log_dir : Path | None
        Directory for the JSONL log file (None logs to console only)
    """

    data_file: Path = Path("gold_search_data.csv")
    window_size: int = DEFAULT_WINDOW_SIZE
    date_column: str = "date"
    value_column: str = "searchCount"
    chart_title: str = "Search Trends Analysis"
    quarantine_dir: Path | None = None
    log_level: str = "INFO"
    log_dir: Path | None = None

    def __post_init__(self):
        """Validate settings after initialization."""
        if isinstance(self.data_file, str):
            self.data_file = Path(self.data_file)
        if self.quarantine_dir and isinstance(self.quarantine_dir, str):
            self.quarantine_dir = Path(self.quarantine_dir)
        if self.log_dir and isinstance(self.log_dir, str):
            self.log_dir = Path(self.log_dir)

        if isinstance(self.window_size, bool) or not isinstance(self.window_size, int) or self.window_size < 1:
            raise ConfigError(
                f"SEARCHTREND_WINDOW_SIZE must be a positive integer, got {self.window_size!r}"
            )

        if not self.date_column or not self.value_column:
            raise ConfigError("SEARCHTREND_DATE_COLUMN and SEARCHTREND_VALUE_COLUMN must not be empty")

        self.log_level = self.log_level.upper()
        if self.log_level not in LOG_LEVELS:
            raise ConfigError(
                f"SEARCHTREND_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {self.log_level!r}"
            )

    @classmethod
    def from_env(cls, env_file: Path | str | None = None) -> Settings:
        """Load settings from environment.

        Loads from .env file if present, otherwise from os.environ.

        Parameters
        ----------
        env_file
            Path to .env file (default: .env in current directory)

        Returns
        -------
        Settings
            Loaded settings

        Raises
        ------
        ConfigError
            If settings are invalid
        """
        if env_file is None:
            env_file = Path(".env")
        if isinstance(env_file, str):
            env_file = Path(env_file)

        if env_file.exists():
            load_env_file(env_file)

        try:
            return cls(
                data_file=Path(os.environ.get("SEARCHTREND_DATA_FILE", "gold_search_data.csv")),
                window_size=int(os.environ.get("SEARCHTREND_WINDOW_SIZE", str(DEFAULT_WINDOW_SIZE))),
                date_column=os.environ.get("SEARCHTREND_DATE_COLUMN", "date"),
                value_column=os.environ.get("SEARCHTREND_VALUE_COLUMN", "searchCount"),
                chart_title=os.environ.get("SEARCHTREND_CHART_TITLE", "Search Trends Analysis"),
                quarantine_dir=(
                    Path(os.environ["SEARCHTREND_QUARANTINE_DIR"])
                    if os.environ.get("SEARCHTREND_QUARANTINE_DIR")
                    else None
                ),
                log_level=os.environ.get("SEARCHTREND_LOG_LEVEL", "INFO"),
                log_dir=Path(os.environ["SEARCHTREND_LOG_DIR"]) if os.environ.get("SEARCHTREND_LOG_DIR") else None,
            )

        except ValueError as exc:
            raise ConfigError(f"Invalid configuration: {exc}") from exc


def load_env_file(env_file: Path) -> None:
    """Load environment variables from .env file.

    Parameters
    ----------
    env_file
        Path to .env file
    """
    with open(env_file, encoding="utf-8") as f:
        for line in f:
            line = line.strip()

            # Skip comments and empty lines
            if not line or line.startswith("#"):
                continue

            if "=" in line:
                key, value = line.split("=", 1)
                key = key.strip()
                value = value.strip()

                # Remove quotes
                if (value.startswith('"') and value.endswith('"')) or (value.startswith("'") and value.endswith("'")):
                    value = value[1:-1]

                os.environ[key] = value


# Global settings instance
_settings: Settings | None = None


def load_settings(env_file: Path | str | None = None) -> Settings:
    """Load settings from environment and cache them.

    Parameters
    ----------
    env_file
        Path to .env file

    Returns
    -------
    Settings
        Loaded settings

    Raises
    ------
    ConfigError
        If settings are invalid
    """
    global _settings
    _settings = Settings.from_env(env_file)
    return _settings


def get_settings() -> Settings:
    """Get current settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def generate_example_env(output_path: Path | None = None) -> str:
    """Generate example .env file with all settings.

    Parameters
    ----------
    output_path
        Optional path to write .env file

    Returns
    -------
    str
        Example .env contents
    """
    example = """# searchtrend configuration
# Copy this to .env and adjust values. Every setting is optional.

# ====================
# Input
# ====================

# Default CSV file (header row required)
SEARCHTREND_DATA_FILE=gold_search_data.csv

# Column names
SEARCHTREND_DATE_COLUMN=date
SEARCHTREND_VALUE_COLUMN=searchCount

# Directory for rows rejected at load time (unset: keep in memory only)
# SEARCHTREND_QUARANTINE_DIR=artifacts/quarantine

# ====================
# Aggregation
# ====================

# Observations per rolling window
SEARCHTREND_WINDOW_SIZE=7

# ====================
# Chart
# ====================

SEARCHTREND_CHART_TITLE=Search Trends Analysis

# ====================
# Logging
# ====================

# Options: TRACE, DEBUG, INFO, SUCCESS, WARNING, ERROR, CRITICAL
SEARCHTREND_LOG_LEVEL=INFO

# Directory for searchtrend.jsonl (unset: console only)
# SEARCHTREND_LOG_DIR=logs
"""

    if output_path:
        output_path.write_text(example, encoding="utf-8")

    return example
