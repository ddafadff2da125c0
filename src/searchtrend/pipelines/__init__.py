"""Pipelines wiring the loader, aggregator and renderer together."""

from .trend_pipeline import TrendPipeline, TrendPipelineConfig, TrendPipelineResult, create_trend_pipeline

__all__ = [
    "TrendPipeline",
    "TrendPipelineConfig",
    "TrendPipelineResult",
    "create_trend_pipeline",
]
