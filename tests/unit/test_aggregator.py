"""Tests for the rolling current/previous period aggregator."""

import math
import random

import pandas as pd
import pytest

from searchtrend.core.observations import AggregatedPoint, Observation
from searchtrend.core.validation import ValidationError
from searchtrend.rollups.aggregator import WindowedAggregator, aggregate, sort_observations


def _dates(n):
    return [f"d{i:02d}" for i in range(n)]


def test_empty_input_returns_empty_output():
    """Test empty input yields empty output without error."""
    assert aggregate([]) == []


def test_fourteen_constant_observations():
    """Test the reference example: 14 rows of 10."""
    rows = [{"date": d, "searchCount": 10} for d in _dates(14)]

    points = aggregate(rows)

    assert points[0] == AggregatedPoint(date="d00", current_period=10, previous_period=None)
    assert points[6] == AggregatedPoint(date="d06", current_period=70, previous_period=None)
    assert points[13] == AggregatedPoint(date="d13", current_period=70, previous_period=70)


def test_output_length_matches_input(make_rows):
    """Test one point per observation."""
    for n in (1, 6, 7, 13, 14, 30):
        assert len(aggregate(make_rows(n))) == n


def test_current_period_grows_then_slides():
    """Test current window grows to 7 elements then slides."""
    rows = [{"date": d, "searchCount": i + 1} for i, d in enumerate(_dates(10))]

    points = aggregate(rows)

    assert [p.current_period for p in points] == [1, 3, 6, 10, 15, 21, 28, 35, 42, 49]


def test_previous_period_null_before_index_13(make_rows):
    """Test previous period stays null until a full prior window exists."""
    points = aggregate(make_rows(20, value=3))

    assert all(p.previous_period is None for p in points[:13])
    assert all(p.previous_period == 21 for p in points[13:])


def test_previous_period_is_null_not_zero():
    """Test partial prior windows give None, never 0."""
    rows = [{"date": d, "searchCount": 0} for d in _dates(12)]

    points = aggregate(rows)

    assert points[11].previous_period is None
    assert points[11].current_period == 0


def test_previous_period_sums_window_before_current():
    """Test previous period uses the 7 rows right before the current window."""
    rows = [{"date": d, "searchCount": i} for i, d in enumerate(_dates(16))]

    points = aggregate(rows)

    # index 13: current = 7..13, previous = 0..6
    assert points[13].current_period == sum(range(7, 14))
    assert points[13].previous_period == sum(range(0, 7))
    # index 15: current = 9..15, previous = 2..8
    assert points[15].current_period == sum(range(9, 16))
    assert points[15].previous_period == sum(range(2, 9))


def test_fewer_than_seven_observations():
    """Test short input: partial current sums, all previous null."""
    rows = [{"date": d, "searchCount": 5} for d in _dates(4)]

    points = aggregate(rows)

    assert [p.current_period for p in points] == [5, 10, 15, 20]
    assert all(p.previous_period is None for p in points)


def test_unsorted_input_is_sorted_by_date_string():
    """Test output follows lexicographic date order."""
    rows = [
        {"date": "2024-01-03", "searchCount": 3},
        {"date": "2024-01-01", "searchCount": 1},
        {"date": "2024-01-02", "searchCount": 2},
    ]

    points = aggregate(rows)

    assert [p.date for p in points] == ["2024-01-01", "2024-01-02", "2024-01-03"]
    assert [p.current_period for p in points] == [1, 3, 6]


def test_dates_compared_as_raw_strings():
    """Test dates are not parsed: '10' sorts before '9'."""
    rows = [{"date": "9", "searchCount": 1}, {"date": "10", "searchCount": 2}]

    points = aggregate(rows)

    assert [p.date for p in points] == ["10", "9"]


def test_duplicate_dates_keep_input_order():
    """Test stable sort for equal dates; duplicates are not merged."""
    observations = [
        Observation("2024-01-02", 100),
        Observation("2024-01-01", 1),
        Observation("2024-01-02", 200),
    ]

    ordered = sort_observations(observations)
    points = aggregate(observations)

    assert [o.search_count for o in ordered] == [1, 100, 200]
    assert [p.date for p in points] == ["2024-01-01", "2024-01-02", "2024-01-02"]
    assert [p.current_period for p in points] == [1, 101, 301]


def test_non_numeric_count_contributes_zero():
    """Test a non-numeric value sums as zero and raises nothing."""
    rows = [{"date": d, "searchCount": 10} for d in _dates(8)]
    rows[3]["searchCount"] = "abc"

    points = aggregate(rows)

    assert points[3].current_period == 30
    assert points[6].current_period == 60
    # row 3 still occupies a slot in the sliding window
    assert points[7].current_period == 60


@pytest.mark.parametrize("bad", [None, "", float("nan"), float("inf"), "n/a"])
def test_missing_counts_never_poison_sums(bad):
    """Test missing or invalid counts keep totals numeric."""
    rows = [{"date": d, "searchCount": 1} for d in _dates(14)]
    rows[0]["searchCount"] = bad

    points = aggregate(rows)

    for point in points:
        assert not math.isnan(point.current_period)
        assert point.previous_period is None or not math.isnan(point.previous_period)
    assert points[13].previous_period == 6


def test_missing_count_field_contributes_zero():
    """Test a row without searchCount is kept with zero."""
    points = aggregate([{"date": "d00"}, {"date": "d01", "searchCount": 4}])

    assert [p.current_period for p in points] == [0, 4]


@pytest.mark.parametrize("row", [{"searchCount": 3}, {"date": None, "searchCount": 3}, {"date": "  ", "searchCount": 3}])
def test_missing_date_raises_validation_error(row):
    """Test an observation without a usable date is rejected."""
    rows = [{"date": "d00", "searchCount": 1}, row]

    with pytest.raises(ValidationError) as exc_info:
        aggregate(rows)

    assert "position 1" in str(exc_info.value)
    assert exc_info.value.errors


def test_observation_instance_with_empty_date_rejected():
    """Test Observation objects are validated too."""
    with pytest.raises(ValidationError):
        aggregate([Observation(date="", search_count=1)])


@pytest.mark.parametrize("missing", [pd.NA, pd.NaT])
def test_pandas_missing_date_raises_validation_error(missing):
    """Test pandas NA markers are not aggregated as date strings."""
    rows = [{"date": "d00", "searchCount": 1}, {"date": missing, "searchCount": 2}]

    with pytest.raises(ValidationError, match="position 1"):
        aggregate(rows)


def test_pandas_missing_count_contributes_zero():
    """Test a pd.NA count is treated as zero."""
    points = aggregate([{"date": "d00", "searchCount": pd.NA}, {"date": "d01", "searchCount": 2}])

    assert [p.current_period for p in points] == [0, 2]


def test_observation_instance_date_is_stripped():
    """Test Observation dates are compared without surrounding whitespace."""
    points = aggregate([Observation(" 2024-01-03", 3), {"date": "2024-01-01", "searchCount": 1}])

    assert [p.date for p in points] == ["2024-01-01", "2024-01-03"]
    assert [p.current_period for p in points] == [1, 4]


def test_observation_instance_with_blank_date_rejected():
    """Test a whitespace-only Observation date is rejected."""
    with pytest.raises(ValidationError):
        aggregate([Observation(date="   ", search_count=1)])


def test_unsupported_item_type_rejected():
    """Test non-mapping, non-observation items are rejected."""
    with pytest.raises(ValidationError, match="unsupported type"):
        aggregate([("2024-01-01", 3)])


def test_aggregate_is_idempotent():
    """Test same input twice gives identical output."""
    rng = random.Random(7)
    rows = [{"date": f"2024-02-{rng.randint(1, 28):02d}", "searchCount": rng.randint(0, 500)} for _ in range(40)]

    assert aggregate(rows) == aggregate(rows)


def test_input_is_not_mutated(make_rows):
    """Test the aggregator leaves its input untouched."""
    rows = list(reversed(make_rows(15)))
    snapshot = [dict(row) for row in rows]

    aggregate(rows)

    assert rows == snapshot


def test_matches_brute_force_definition():
    """Test against a direct restatement of the window rules."""
    rng = random.Random(42)
    rows = [{"date": f"2024-03-{rng.randint(1, 31):02d}", "searchCount": rng.randint(0, 100)} for _ in range(50)]

    points = aggregate(rows)
    counts = [r["searchCount"] for r in sorted(rows, key=lambda r: r["date"])]

    for i, point in enumerate(points):
        start = max(0, i - 6)
        assert point.current_period == sum(counts[start : i + 1])
        prev = counts[max(0, start - 7) : start]
        assert point.previous_period == (sum(prev) if len(prev) == 7 else None)


def test_to_dict_uses_chart_field_names():
    """Test the renderer-facing field names."""
    point = aggregate([{"date": "2024-01-01", "searchCount": 2}])[0]

    assert point.to_dict() == {"date": "2024-01-01", "currentPeriod": 2, "previousPeriod": None}


class TestWindowSize:
    """Test configurable window sizes."""

    def test_default_window_is_seven(self):
        assert WindowedAggregator().window_size == 7

    def test_custom_window(self):
        rows = [{"date": d, "searchCount": 1} for d in _dates(6)]

        points = WindowedAggregator(window_size=2).aggregate(rows)

        assert [p.current_period for p in points] == [1, 2, 2, 2, 2, 2]
        assert [p.previous_period for p in points] == [None, None, None, 2, 2, 2]

    def test_window_of_one(self):
        rows = [{"date": d, "searchCount": i} for i, d in enumerate(_dates(3))]

        points = aggregate(rows, window_size=1)

        assert [p.current_period for p in points] == [0, 1, 2]
        assert [p.previous_period for p in points] == [None, 0, 1]

    @pytest.mark.parametrize("size", [0, -3, 2.5, True])
    def test_invalid_window_size(self, size):
        with pytest.raises(ValueError):
            WindowedAggregator(window_size=size)


def test_aggregation_is_logged(log_records):
    """Test aggregation emits a structured event."""
    rows = [{"date": d, "searchCount": 1} for d in _dates(14)]

    aggregate(rows, trace_id="trace-abc")

    events = [r for r in log_records if r["extra"].get("event_type") == "aggregation"]
    assert len(events) == 1
    assert events[0]["extra"]["trace_id"] == "trace-abc"
    assert events[0]["extra"]["observations"] == 14
    assert events[0]["extra"]["compared_points"] == 1
