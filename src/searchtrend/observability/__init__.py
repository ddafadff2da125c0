"""Observability module for searchtrend.

Provides loguru configuration, structured events and timing.
"""

from .logging import (
    log_aggregation,
    log_event,
    log_ingress,
    log_quarantine,
    log_validation_failure,
)
from .loguru_config import (
    LOG_FILE_NAME,
    configure_loguru,
    get_logger,
    timing_context,
)

__all__ = [
    "LOG_FILE_NAME",
    "configure_loguru",
    "get_logger",
    "timing_context",
    "log_aggregation",
    "log_event",
    "log_ingress",
    "log_quarantine",
    "log_validation_failure",
]
