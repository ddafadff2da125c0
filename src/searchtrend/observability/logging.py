"""Structured event logging for the trend pipeline.

Every stage logs one event type with correlation by trace id:
ingress → validation → quarantine → aggregation.
Fields go to loguru ``extra`` so the JSONL sink carries them verbatim.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from .loguru_config import get_logger

__all__ = [
    "log_aggregation",
    "log_event",
    "log_ingress",
    "log_quarantine",
    "log_validation_failure",
]


def log_event(
    level: str,
    event_type: str,
    message: str,
    *,
    component: str = "searchtrend",
    trace_id: str | None = None,
    **fields: Any,
) -> None:
    """Log one structured event.

    Parameters
    ----------
    level
        Log level name
    event_type
        Type of event (ingress, validation_failure, quarantine, aggregation)
    message
        Human-readable message
    component
        Component the event belongs to
    trace_id
        Trace ID for correlation
    **fields
        Additional structured data
    """
    get_logger(component).bind(event_type=event_type, trace_id=trace_id, **fields).log(level.upper(), message)


def log_ingress(source: str, rows: int, *, trace_id: str | None = None, **fields: Any) -> None:
    """Log rows read from an input source."""
    log_event(
        "INFO",
        "ingress",
        f"Read {rows} rows from {source}",
        component="ingest",
        trace_id=trace_id,
        source=source,
        rows=rows,
        **fields,
    )


def log_validation_failure(
    row_number: int | None,
    errors: list[str],
    *,
    trace_id: str | None = None,
) -> None:
    """Log a row that failed validation."""
    log_event(
        "WARNING",
        "validation_failure",
        f"Row {row_number if row_number is not None else '?'} failed validation: {'; '.join(errors)}",
        component="ingest",
        trace_id=trace_id,
        row_number=row_number,
        errors=errors,
    )


def log_quarantine(
    row_number: int | None,
    reason: str,
    quarantine_path: Path | None = None,
    *,
    trace_id: str | None = None,
) -> None:
    """Log a quarantined row."""
    log_event(
        "WARNING",
        "quarantine",
        f"Row {row_number if row_number is not None else '?'} quarantined: {reason}",
        component="ingest",
        trace_id=trace_id,
        row_number=row_number,
        reason=reason,
        quarantine_path=str(quarantine_path) if quarantine_path else None,
    )


def log_aggregation(
    observations: int,
    window_size: int,
    compared_points: int,
    *,
    trace_id: str | None = None,
) -> None:
    """Log a completed aggregation."""
    log_event(
        "DEBUG",
        "aggregation",
        f"Aggregated {observations} observations with window {window_size}",
        component="rollup",
        trace_id=trace_id,
        observations=observations,
        window_size=window_size,
        compared_points=compared_points,
    )
