"""Typed records flowing through the trend pipeline.

``Observation`` is one dated search count as read from the input table.
``AggregatedPoint`` is one row of the derived series handed to the chart;
its ``to_dict`` keys are shared with the renderer and must stay stable.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .validation import ValidationError, is_missing, validate_row

__all__ = [
    "AggregatedPoint",
    "Number",
    "Observation",
    "coerce_search_count",
]

Number = int | float


def coerce_search_count(value: Any) -> Number:
    """Coerce a raw cell to a number, treating anything unusable as zero.

    Missing cells, NaN, infinities and non-numeric text all contribute
    nothing to a window sum.

    Examples
    --------
    >>> coerce_search_count("42")
    42
    >>> coerce_search_count("4.5")
    4.5
    >>> coerce_search_count("abc")
    0
    >>> coerce_search_count(None)
    0
    """
    if is_missing(value):
        return 0

    if isinstance(value, bool):
        return int(value)

    if isinstance(value, int):
        return value

    if isinstance(value, float):
        return value if math.isfinite(value) else 0

    text = str(value).strip()
    try:
        return int(text)
    except ValueError:
        pass

    try:
        number = float(text)
    except ValueError:
        return 0

    return number if math.isfinite(number) else 0


@dataclass(frozen=True)
class Observation:
    """One dated search count.

    Attributes
    ----------
    date : str
        Date identifier, compared as a raw string
    search_count : int | float
        Numeric search count (already coerced)
    """

    date: str
    search_count: Number = 0

    @classmethod
    def from_mapping(
        cls,
        row: Mapping[str, Any],
        *,
        date_key: str = "date",
        value_key: str = "searchCount",
    ) -> Observation:
        """Build an observation from a parsed table row.

        Raises
        ------
        ValidationError
            If the row has no usable date
        """
        result = validate_row(row, date_key=date_key)
        if not result:
            raise ValidationError(f"Invalid observation: {result}", errors=result.errors)

        return cls(
            date=str(row[date_key]).strip(),
            search_count=coerce_search_count(row.get(value_key)),
        )


@dataclass(frozen=True)
class AggregatedPoint:
    """Rolling sums for one observation date."""

    date: str
    current_period: Number
    previous_period: Number | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the chart-facing dictionary."""
        return {
            "date": self.date,
            "currentPeriod": self.current_period,
            "previousPeriod": self.previous_period,
        }
