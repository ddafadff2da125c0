"""Rolling current/previous period sums over daily observations.

For each observation, in date order:

- ``current_period`` is the sum over the window ending at that observation
  (one to ``window_size`` rows, growing until full, then sliding);
- ``previous_period`` is the sum over the ``window_size`` rows immediately
  before the current window, and is ``None`` until that range is full.

With the default window of 7 the first non-null ``previous_period`` appears
at index 13.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from ..core.observations import AggregatedPoint, Number, Observation
from ..core.validation import ValidationError, is_missing
from ..observability import log_aggregation
from .time_windows import (
    DEFAULT_WINDOW_SIZE,
    current_window_bounds,
    previous_window_bounds,
    validate_window_size,
)

__all__ = [
    "WindowedAggregator",
    "aggregate",
    "sort_observations",
]

ObservationLike = Observation | Mapping[str, Any]


def _as_observation(item: ObservationLike, position: int) -> Observation:
    if isinstance(item, Observation):
        if is_missing(item.date):
            raise ValidationError(
                f"Observation at position {position} has no date",
                errors=[f"position {position}: empty date"],
            )
        date = str(item.date).strip()
        if date != item.date:
            return Observation(date=date, search_count=item.search_count)
        return item

    if isinstance(item, Mapping):
        try:
            return Observation.from_mapping(item)
        except ValidationError as exc:
            raise ValidationError(
                f"Observation at position {position} is invalid: {exc}",
                errors=[f"position {position}: {error}" for error in exc.errors],
            ) from exc

    raise ValidationError(
        f"Observation at position {position} has unsupported type {type(item).__name__}",
        errors=[f"position {position}: unsupported type"],
    )


def sort_observations(observations: Iterable[ObservationLike]) -> list[Observation]:
    """Validate observations and sort them by raw date string.

    The sort is stable: observations sharing a date keep input order.

    Raises
    ------
    ValidationError
        If any observation lacks a usable date
    """
    validated = [_as_observation(item, position) for position, item in enumerate(observations)]
    return sorted(validated, key=lambda observation: observation.date)


class WindowedAggregator:
    """Trailing-window aggregator for dated search counts.

    Stateless apart from its window size; ``aggregate`` can be called any
    number of times on any input.

    Example
    -------
    >>> aggregator = WindowedAggregator()
    >>> points = aggregator.aggregate([{"date": "2024-01-01", "searchCount": 5}])
    >>> points[0].to_dict()
    {'date': '2024-01-01', 'currentPeriod': 5, 'previousPeriod': None}
    """

    def __init__(self, window_size: int = DEFAULT_WINDOW_SIZE) -> None:
        self.window_size = validate_window_size(window_size)

    def aggregate(
        self,
        observations: Iterable[ObservationLike],
        *,
        trace_id: str | None = None,
    ) -> list[AggregatedPoint]:
        """Compute current and previous period sums for every observation.

        Parameters
        ----------
        observations
            Observations or row mappings, in any order
        trace_id
            Optional trace ID for log correlation

        Returns
        -------
        list[AggregatedPoint]
            One point per observation, in date order

        Raises
        ------
        ValidationError
            If any observation lacks a usable date
        """
        ordered = sort_observations(observations)
        counts = [observation.search_count for observation in ordered]

        points: list[AggregatedPoint] = []
        compared = 0

        for index, observation in enumerate(ordered):
            start, stop = current_window_bounds(index, self.window_size)
            current: Number = sum(counts[start:stop])

            prev_start, prev_stop = previous_window_bounds(index, self.window_size)
            previous: Number | None = None
            if prev_stop - prev_start == self.window_size:
                previous = sum(counts[prev_start:prev_stop])
                compared += 1

            points.append(
                AggregatedPoint(
                    date=observation.date,
                    current_period=current,
                    previous_period=previous,
                )
            )

        log_aggregation(len(ordered), self.window_size, compared, trace_id=trace_id)
        return points


def aggregate(
    observations: Iterable[ObservationLike],
    *,
    window_size: int = DEFAULT_WINDOW_SIZE,
    trace_id: str | None = None,
) -> list[AggregatedPoint]:
    """Aggregate observations with a fresh ``WindowedAggregator``.

    See ``WindowedAggregator.aggregate``.
    """
    return WindowedAggregator(window_size).aggregate(observations, trace_id=trace_id)
