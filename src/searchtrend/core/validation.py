"""Validation of input records before aggregation.

Rows without a usable date are rejected here. Errors are surfaced to callers,
never repaired silently.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from typing import Any

import pandas as pd

__all__ = [
    "ValidationError",
    "ValidationResult",
    "is_missing",
    "validate_columns",
    "validate_row",
]


class ValidationError(Exception):
    """Raised when an observation or input table fails validation."""

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class ValidationResult:
    """Result of row validation."""

    def __init__(self, valid: bool, errors: list[str] | None = None) -> None:
        self.valid = valid
        self.errors = errors or []

    def __bool__(self) -> bool:
        """Boolean conversion."""
        return self.valid

    def __str__(self) -> str:
        """String representation."""
        if self.valid:
            return "Valid"
        return f"Invalid: {'; '.join(self.errors)}"

    def add_error(self, error: str) -> None:
        """Add validation error."""
        self.errors.append(error)
        self.valid = False


def is_missing(value: Any) -> bool:
    """Return True for None, NaN, pandas NA/NaT and blank strings."""
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    if pd.api.types.is_scalar(value) and pd.isna(value):
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return False


def validate_row(row: Mapping[str, Any], *, date_key: str = "date") -> ValidationResult:
    """Validate a single input row.

    Parameters
    ----------
    row
        Parsed record (CSV row or mapping)
    date_key
        Name of the date field

    Returns
    -------
    ValidationResult
        Validation result with collected errors
    """
    result = ValidationResult(valid=True)

    if date_key not in row:
        result.add_error(f"Missing required field: '{date_key}'")
    elif is_missing(row[date_key]):
        result.add_error(f"Field '{date_key}' is empty")

    return result


def validate_columns(columns: Iterable[str], required: Iterable[str]) -> None:
    """Check that a table header carries every required column.

    Raises
    ------
    ValidationError
        If any required column is absent
    """
    found = list(columns)
    missing = [name for name in required if name not in found]
    if missing:
        raise ValidationError(
            f"CSV is missing required columns: {missing}. Found: {found}",
            errors=[f"Missing column: {name}" for name in missing],
        )
