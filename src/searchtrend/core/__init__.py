"""Core records, validation and quarantine."""

from .observations import AggregatedPoint, Number, Observation, coerce_search_count
from .quarantine import QuarantineRecord, quarantine_invalid_row
from .validation import ValidationError, ValidationResult, is_missing, validate_columns, validate_row

__all__ = [
    "AggregatedPoint",
    "Number",
    "Observation",
    "coerce_search_count",
    "QuarantineRecord",
    "quarantine_invalid_row",
    "ValidationError",
    "ValidationResult",
    "is_missing",
    "validate_columns",
    "validate_row",
]
