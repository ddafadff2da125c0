"""Shared fixtures for searchtrend tests."""

from __future__ import annotations

import os
from datetime import date, timedelta

import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def clean_env():
    """Isolate settings and logging between tests."""
    original_env = os.environ.copy()

    for var in [k for k in os.environ if k.startswith("SEARCHTREND_")]:
        del os.environ[var]

    import searchtrend.config.settings as settings_module

    settings_module._settings = None

    yield

    # Drop sinks bound to streams that pytest/CliRunner may have closed
    logger.remove()
    logger.disable("searchtrend")
    settings_module._settings = None
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def log_records():
    """Capture loguru records emitted during a test."""
    records: list[dict] = []
    logger.enable("searchtrend")
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG", format="{message}")
    yield records
    logger.remove(handler_id)


@pytest.fixture
def write_csv(tmp_path):
    """Write CSV text to a temp file and return its path."""

    def _write(text: str, name: str = "searches.csv"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_rows():
    """Build consecutive daily rows starting 2024-01-01."""

    def _make(count: int, value=10) -> list[dict]:
        start = date(2024, 1, 1)
        return [
            {"date": (start + timedelta(days=offset)).isoformat(), "searchCount": value}
            for offset in range(count)
        ]

    return _make
