"""Loguru configuration with timing support.

This module provides centralized loguru configuration with:
- Colored console output on stderr
- Structured JSONL file logging when a log directory is set
- Component-bound loggers (ingest, rollup, render, pipeline, cli)
- A context manager for timing operations
"""

from __future__ import annotations

import sys
import time
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Any

from loguru import logger

if TYPE_CHECKING:
    from collections.abc import Generator

__all__ = [
    "LOG_FILE_NAME",
    "configure_loguru",
    "get_logger",
    "timing_context",
]

LOG_FILE_NAME = "searchtrend.jsonl"


def configure_loguru(
    *,
    log_dir: Path | None = None,
    level: str = "INFO",
    rotation: str = "100 MB",
    retention: str = "10 days",
    compression: str = "zip",
    enable_console: bool = True,
) -> None:
    """Configure loguru sinks.

    Parameters
    ----------
    log_dir
        Directory for the JSONL log file (None disables file logging)
    level
        Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    rotation
        Log rotation policy (e.g., "100 MB", "1 day")
    retention
        Log retention policy (e.g., "10 days", "1 week")
    compression
        Compression for rotated logs (zip, gz, bz2, xz)
    enable_console
        Enable console output

    Example
    -------
    >>> from searchtrend.observability.loguru_config import configure_loguru
    >>> configure_loguru(log_dir=Path("logs"), level="DEBUG")
    """
    # Remove default handler
    logger.remove()
    logger.enable("searchtrend")

    if enable_console:
        logger.add(
            sys.stderr,
            format="<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{extra[component]}</cyan> | "
            "<level>{message}</level>",
            level=level,
            colorize=True,
            backtrace=True,
            diagnose=False,
            filter=_ensure_component,
        )

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_dir / LOG_FILE_NAME,
            format="{message}",
            level=level,
            rotation=rotation,
            retention=retention,
            compression=compression,
            serialize=True,  # JSON serialization
            backtrace=True,
            diagnose=False,
        )

    logger.bind(component="searchtrend").debug(
        "Loguru configured",
        log_dir=str(log_dir) if log_dir else None,
        level=level,
    )


def _ensure_component(record: dict[str, Any]) -> bool:
    record["extra"].setdefault("component", "searchtrend")
    return True


def get_logger(component: str = "searchtrend") -> Any:
    """Get logger instance bound to a component.

    Parameters
    ----------
    component
        Component name (ingest, rollup, render, pipeline, cli)

    Returns
    -------
    Logger
        Loguru logger bound to component
    """
    return logger.bind(component=component)


@contextmanager
def timing_context(
    operation: str,
    *,
    component: str = "searchtrend",
    trace_id: str | None = None,
    **metadata: Any,
) -> Generator[dict[str, Any], None, None]:
    """Context manager for timing operations.

    Parameters
    ----------
    operation
        Name of the operation being timed
    component
        Component name for filtering logs
    trace_id
        Trace ID for correlation
    **metadata
        Additional metadata to log

    Yields
    ------
    dict
        Context dictionary that can be updated with additional data;
        ``duration_ms`` is set on exit

    Example
    -------
    >>> with timing_context("aggregate", component="rollup") as ctx:
    ...     points = aggregate(observations)
    ...     ctx["points"] = len(points)
    """
    start_ns = time.perf_counter_ns()
    context: dict[str, Any] = {**metadata}

    bound = logger.bind(component=component, timing=True, operation=operation, trace_id=trace_id)
    bound.debug(f"START: {operation}", phase="start", **metadata)

    try:
        yield context
    finally:
        duration_ms = (time.perf_counter_ns() - start_ns) / 1_000_000
        context["duration_ms"] = duration_ms
        bound.debug(
            f"END: {operation}",
            phase="end",
            **{k: v for k, v in context.items() if k != "phase"},
        )
