"""Input loading for search-count tables."""

from .csv_loader import LoadResult, load_observations, observations_from_frame, read_search_csv

__all__ = [
    "LoadResult",
    "load_observations",
    "observations_from_frame",
    "read_search_csv",
]
