"""Line chart of current vs previous period search counts.

Consumes the aggregated series in its dict form (``date``, ``currentPeriod``,
``previousPeriod``) and writes an image file.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402

from ..core.observations import AggregatedPoint  # noqa: E402
from ..observability import get_logger  # noqa: E402

__all__ = [
    "CURRENT_COLOR",
    "DEFAULT_TITLE",
    "PREVIOUS_COLOR",
    "chart_series",
    "render_trend_chart",
]

DEFAULT_TITLE = "Search Trends Analysis"
CURRENT_COLOR = "#8884d8"
PREVIOUS_COLOR = "#82ca9d"

log = get_logger("render")


def chart_series(
    points: Iterable[AggregatedPoint | Mapping[str, Any]],
) -> tuple[list[str], list[float], list[float]]:
    """Split points into x labels and the two y series.

    Null previous values become NaN so matplotlib leaves a gap.
    """
    dates: list[str] = []
    current: list[float] = []
    previous: list[float] = []

    for point in points:
        row = point.to_dict() if isinstance(point, AggregatedPoint) else point
        dates.append(str(row["date"]))
        current.append(float(row["currentPeriod"]))
        prev = row.get("previousPeriod")
        previous.append(math.nan if prev is None else float(prev))

    return dates, current, previous


def render_trend_chart(
    points: Iterable[AggregatedPoint | Mapping[str, Any]],
    output_path: str | Path,
    *,
    title: str = DEFAULT_TITLE,
    dpi: int = 150,
) -> Path:
    """Render the current/previous period chart to ``output_path``.

    Parameters
    ----------
    points
        Aggregated points or their dict form
    output_path
        Image path; the format follows the extension (png, svg, pdf)
    title
        Chart title
    dpi
        Raster resolution

    Returns
    -------
    Path
        Path of the written image
    """
    out = Path(output_path)
    out.parent.mkdir(parents=True, exist_ok=True)

    dates, current, previous = chart_series(points)
    positions = list(range(len(dates)))

    fig, ax = plt.subplots(figsize=(12, 6))
    try:
        ax.grid(True, linestyle=(0, (3, 3)), alpha=0.6)
        ax.plot(positions, current, color=CURRENT_COLOR, label="Current Period", linewidth=1.8)
        ax.plot(
            positions,
            previous,
            color=PREVIOUS_COLOR,
            label="Previous Period",
            linewidth=1.8,
            linestyle=(0, (5, 5)),
        )

        if dates:
            # Keep at most ~12 readable date labels
            step = max(1, math.ceil(len(dates) / 12))
            ax.set_xticks(positions[::step])
            ax.set_xticklabels(dates[::step], rotation=45, ha="right")

        ax.set_title(title)
        ax.set_xlabel("date")
        ax.set_ylabel("search count")
        ax.legend()
        fig.tight_layout()
        fig.savefig(out, dpi=dpi)
    finally:
        plt.close(fig)

    log.bind(path=str(out), points=len(dates)).info(f"Chart written to {out}")
    return out
