"""Rolling-window aggregation of daily search counts."""

from .aggregator import WindowedAggregator, aggregate, sort_observations
from .time_windows import (
    DEFAULT_WINDOW_SIZE,
    current_window_bounds,
    previous_window_bounds,
    validate_window_size,
)

__all__ = [
    # Windows
    "DEFAULT_WINDOW_SIZE",
    "current_window_bounds",
    "previous_window_bounds",
    "validate_window_size",
    # Aggregation
    "WindowedAggregator",
    "aggregate",
    "sort_observations",
]
