"""Trend Pipeline - thin orchestration of load → aggregate → render.

The pipeline owns no business logic. It wires the CSV loader, the windowed
aggregator and the chart renderer together, and turns their failures into a
result object carrying the same messages a dashboard would display.
"""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from ..core.observations import AggregatedPoint
from ..core.validation import ValidationError
from ..ingest.csv_loader import load_observations
from ..observability import log_event, timing_context
from ..render.chart import DEFAULT_TITLE, render_trend_chart
from ..rollups.aggregator import WindowedAggregator
from ..rollups.time_windows import DEFAULT_WINDOW_SIZE

if TYPE_CHECKING:
    from ..config.settings import Settings
    from ..core.quarantine import QuarantineRecord

__all__ = [
    "TrendPipeline",
    "TrendPipelineConfig",
    "TrendPipelineResult",
    "create_trend_pipeline",
]


@dataclass
class TrendPipelineConfig:
    """Configuration for trend pipeline."""

    data_file: Path = Path("gold_search_data.csv")
    window_size: int = DEFAULT_WINDOW_SIZE
    date_column: str = "date"
    value_column: str = "searchCount"
    chart_title: str = DEFAULT_TITLE
    strict: bool = False
    quarantine_dir: Path | None = None

    @classmethod
    def from_settings(cls, settings: Settings, *, strict: bool = False) -> TrendPipelineConfig:
        return cls(
            data_file=settings.data_file,
            window_size=settings.window_size,
            date_column=settings.date_column,
            value_column=settings.value_column,
            chart_title=settings.chart_title,
            strict=strict,
            quarantine_dir=settings.quarantine_dir,
        )


@dataclass
class TrendPipelineResult:
    """Result of a pipeline run."""

    success: bool
    source: str
    points: list[AggregatedPoint]
    rows_read: int
    duration_ms: float
    trace_id: str
    chart_path: Path | None = None
    quarantined: list[QuarantineRecord] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    error_kind: str | None = None  # "load", "parse" or "render"

    def series(self) -> list[dict[str, Any]]:
        """Aggregated points in chart form."""
        return [point.to_dict() for point in self.points]


class TrendPipeline:
    """Thin orchestration pipeline for search trend reports.

    Example:
        >>> pipeline = create_trend_pipeline(data_file=Path("gold_search_data.csv"))
        >>> result = pipeline.run(chart_path=Path("out/trend.png"))
        >>> result.success
        True
    """

    def __init__(self, config: TrendPipelineConfig) -> None:
        self.config = config
        self.aggregator = WindowedAggregator(config.window_size)

    def run(
        self,
        csv_path: str | Path | None = None,
        chart_path: str | Path | None = None,
        *,
        trace_id: str | None = None,
    ) -> TrendPipelineResult:
        """Load, aggregate and optionally render one CSV file.

        Parameters
        ----------
        csv_path
            Input file (default: ``config.data_file``)
        chart_path
            Where to write the chart; no chart is rendered when None
        trace_id
            Trace ID (generated when omitted)

        Returns
        -------
        TrendPipelineResult
            Execution result; ``errors`` is non-empty when ``success`` is False
        """
        trace_id = trace_id or str(uuid.uuid4())
        source = Path(csv_path) if csv_path is not None else self.config.data_file
        start_time = time.time()

        log_event(
            "INFO",
            "pipeline_started",
            f"Trend pipeline started for {source}",
            component="pipeline",
            trace_id=trace_id,
            source=str(source),
            window_size=self.config.window_size,
        )

        points: list[AggregatedPoint] = []
        quarantined: list[QuarantineRecord] = []
        rows_read = 0
        written: Path | None = None
        errors: list[str] = []
        error_kind: str | None = None

        try:
            with timing_context("load", component="pipeline", trace_id=trace_id):
                loaded = load_observations(
                    source,
                    date_column=self.config.date_column,
                    value_column=self.config.value_column,
                    strict=self.config.strict,
                    quarantine_dir=self.config.quarantine_dir,
                    trace_id=trace_id,
                )
            rows_read = loaded.rows_read
            quarantined = loaded.quarantined

            with timing_context("aggregate", component="pipeline", trace_id=trace_id):
                points = self.aggregator.aggregate(loaded.observations, trace_id=trace_id)

            if chart_path is not None:
                try:
                    with timing_context("render", component="pipeline", trace_id=trace_id):
                        written = render_trend_chart(points, chart_path, title=self.config.chart_title)
                except (ValueError, OSError) as exc:
                    # Unsupported image format or unwritable output path
                    errors.append(f"Error rendering chart: {exc}")
                    error_kind = "render"

        except ValidationError as exc:
            errors.append(f"Error parsing data: {exc}")
            error_kind = "parse"
        except OSError as exc:
            errors.append(f"Error loading data: {exc}")
            error_kind = "load"

        duration_ms = (time.time() - start_time) * 1000

        result = TrendPipelineResult(
            success=not errors,
            source=str(source),
            points=points if not errors else [],
            rows_read=rows_read,
            duration_ms=duration_ms,
            trace_id=trace_id,
            chart_path=written,
            quarantined=quarantined,
            errors=errors,
            error_kind=error_kind,
        )

        log_event(
            "INFO" if result.success else "ERROR",
            "pipeline_completed",
            f"Trend pipeline {'succeeded' if result.success else 'failed'} for {source}",
            component="pipeline",
            trace_id=trace_id,
            points=len(result.points),
            quarantined=len(quarantined),
            duration_ms=duration_ms,
            outcome="success" if result.success else "failure",
            errors=errors,
        )

        return result


def create_trend_pipeline(
    data_file: Path | None = None,
    *,
    window_size: int = DEFAULT_WINDOW_SIZE,
    **kwargs: Any,
) -> TrendPipeline:
    """Factory function to create trend pipeline.

    Parameters
    ----------
    data_file
        Default input CSV
    window_size
        Observations per rolling window
    **kwargs
        Additional ``TrendPipelineConfig`` fields

    Returns
    -------
    TrendPipeline
        Configured pipeline
    """
    config = TrendPipelineConfig(
        data_file=data_file or Path("gold_search_data.csv"),
        window_size=window_size,
        **kwargs,
    )
    return TrendPipeline(config)
