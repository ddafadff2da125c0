"""searchtrend - rolling current vs previous period search counts."""

from loguru import logger

from .core import AggregatedPoint, Observation, ValidationError
from .rollups import WindowedAggregator, aggregate

__version__ = "0.1.0"

# Silent as a library until configure_loguru() is called
logger.disable("searchtrend")

__all__ = [
    "AggregatedPoint",
    "Observation",
    "ValidationError",
    "WindowedAggregator",
    "aggregate",
]
