#!/usr/bin/env python3
"""CLI command rendering the current vs previous period chart."""

from pathlib import Path

import click

from ..pipelines.trend_pipeline import TrendPipeline, TrendPipelineConfig
from .cli_common import CLIContext, ExitCode, cli_command, exit_code_for_kind, handle_cli_error

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.command(
    context_settings=CONTEXT_SETTINGS,
    help="Render the current/previous period line chart for a CSV file",
)
@click.argument("csv_file", type=click.Path(path_type=Path), required=False)
@click.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    required=True,
    help="Image file to write (png, svg, pdf)",
)
@click.option("--title", type=str, help="Chart title")
@click.option("--window", "window_size", type=click.IntRange(min=1), help="Observations per window")
@cli_command
def cli(
    ctx: CLIContext,
    csv_file: Path | None,
    output_path: Path,
    title: str | None,
    window_size: int | None,
) -> None:
    """Render a search trend chart."""
    try:
        config = TrendPipelineConfig.from_settings(ctx.settings)
        if window_size is not None:
            config.window_size = window_size
        if title:
            config.chart_title = title

        result = TrendPipeline(config).run(csv_file, chart_path=output_path, trace_id=ctx.trace_id)

        if result.success:
            ctx.output(
                {"chart": str(result.chart_path), "points": len(result.points), "quarantined": len(result.quarantined)}
            )
            code = ExitCode.SUCCESS
        else:
            ctx.output(None, status="error", error="; ".join(result.errors))
            code = exit_code_for_kind(result.error_kind)
    except Exception as exc:
        code = handle_cli_error(ctx, exc)

    click.get_current_context().exit(int(code))
