"""Chart rendering for aggregated search trends."""

from .chart import CURRENT_COLOR, DEFAULT_TITLE, PREVIOUS_COLOR, chart_series, render_trend_chart

__all__ = [
    "CURRENT_COLOR",
    "DEFAULT_TITLE",
    "PREVIOUS_COLOR",
    "chart_series",
    "render_trend_chart",
]
