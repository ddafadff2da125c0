"""Tests for the trend chart renderer."""

import math

from searchtrend.core.observations import AggregatedPoint
from searchtrend.render.chart import chart_series, render_trend_chart
from searchtrend.rollups.aggregator import aggregate

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def test_chart_series_from_points():
    """Test null previous values become gaps."""
    points = [
        AggregatedPoint("2024-01-01", 10),
        AggregatedPoint("2024-01-14", 70, 70),
    ]

    dates, current, previous = chart_series(points)

    assert dates == ["2024-01-01", "2024-01-14"]
    assert current == [10.0, 70.0]
    assert math.isnan(previous[0])
    assert previous[1] == 70.0


def test_chart_series_from_dicts():
    """Test the dict form is accepted too."""
    rows = [{"date": "2024-01-01", "currentPeriod": 3, "previousPeriod": None}]

    dates, current, previous = chart_series(rows)

    assert dates == ["2024-01-01"]
    assert current == [3.0]
    assert math.isnan(previous[0])


def test_render_writes_png(tmp_path, make_rows):
    """Test a PNG file is produced."""
    points = aggregate(make_rows(20))

    out = render_trend_chart(points, tmp_path / "trend.png", title="Test Trends")

    assert out == tmp_path / "trend.png"
    assert out.read_bytes()[:8] == PNG_SIGNATURE


def test_render_creates_parent_dirs(tmp_path, make_rows):
    """Test missing output directories are created."""
    out = render_trend_chart(aggregate(make_rows(3)), tmp_path / "charts" / "daily" / "trend.png")

    assert out.exists()


def test_render_empty_series(tmp_path):
    """Test an empty series still renders an (empty) chart."""
    out = render_trend_chart([], tmp_path / "empty.png")

    assert out.exists()
    assert out.stat().st_size > 0


def test_render_svg(tmp_path, make_rows):
    """Test format follows the file extension."""
    out = render_trend_chart(aggregate(make_rows(10)), tmp_path / "trend.svg")

    assert "<svg" in out.read_text(encoding="utf-8")
