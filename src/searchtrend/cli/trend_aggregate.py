#!/usr/bin/env python3
"""CLI command printing the rolling current/previous period series."""

from pathlib import Path

import click

from ..pipelines.trend_pipeline import TrendPipeline, TrendPipelineConfig, TrendPipelineResult
from .cli_common import CLIContext, ExitCode, cli_command, exit_code_for_kind, handle_cli_error

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.command(
    context_settings=CONTEXT_SETTINGS,
    help="Compute rolling current/previous period sums for a CSV file",
)
@click.argument("csv_file", type=click.Path(path_type=Path), required=False)
@click.option("--window", "window_size", type=click.IntRange(min=1), help="Observations per window")
@click.option("--strict", is_flag=True, help="Fail on rows without a date instead of quarantining them")
@cli_command
def cli(ctx: CLIContext, csv_file: Path | None, window_size: int | None, strict: bool) -> None:
    """Aggregate a search-count CSV and print the series."""
    try:
        config = TrendPipelineConfig.from_settings(ctx.settings, strict=strict)
        if window_size is not None:
            config.window_size = window_size

        result = TrendPipeline(config).run(csv_file, trace_id=ctx.trace_id)
        code = report_result(ctx, result, config.window_size)
    except Exception as exc:
        code = handle_cli_error(ctx, exc)

    click.get_current_context().exit(int(code))


def report_result(ctx: CLIContext, result: TrendPipelineResult, window_size: int) -> ExitCode:
    """Print a pipeline result and return the exit code."""
    meta = {
        "source": result.source,
        "window_size": window_size,
        "rows_read": result.rows_read,
        "quarantined": [record.to_dict() for record in result.quarantined],
        "duration_ms": round(result.duration_ms, 3),
    }

    if not result.success:
        ctx.output(None, status="error", error="; ".join(result.errors), meta=meta if ctx.json_output else None)
        return exit_code_for_kind(result.error_kind)

    if ctx.json_output:
        ctx.output(result.series(), meta=meta)
        return ExitCode.SUCCESS

    click.echo(f"{'date':<12} {'currentPeriod':>14} {'previousPeriod':>15}")
    for point in result.points:
        previous = "-" if point.previous_period is None else point.previous_period
        click.echo(f"{point.date:<12} {point.current_period:>14} {previous:>15}")

    if result.quarantined:
        ctx.output(f"{len(result.quarantined)} row(s) quarantined", status="warning")
        if ctx.verbose:
            for record in result.quarantined:
                click.echo(f"   row {record.row_number}: {'; '.join(record.errors)}")

    return ExitCode.SUCCESS
