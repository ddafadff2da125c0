#!/usr/bin/env python3
"""Main CLI module for searchtrend."""

import sys

import click

from .trend_aggregate import cli as aggregate_cli
from .trend_chart import cli as chart_cli

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
EPILOG = """
Examples:
  searchtrend aggregate gold_search_data.csv          # Print rolling sums
  searchtrend aggregate data.csv --json               # Machine-readable output
  searchtrend aggregate data.csv --window 14          # Two-week windows
  searchtrend chart data.csv -o out/trend.png         # Render the chart
""".strip()


@click.group(
    context_settings=CONTEXT_SETTINGS,
    help="searchtrend - rolling search-count comparison",
    epilog=EPILOG,
)
def cli() -> None:
    """Root CLI command."""


cli.add_command(aggregate_cli, "aggregate")
cli.add_command(chart_cli, "chart")


def main(args: list[str] | None = None) -> int:
    """Run the CLI and return its exit code."""
    try:
        # Non-standalone mode returns ctx.exit() codes instead of raising
        rv = cli.main(args=args, prog_name="searchtrend", standalone_mode=False)
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.exceptions.Abort:
        click.echo("Aborted!", err=True)
        return 1
    return rv if isinstance(rv, int) else 0


if __name__ == "__main__":
    sys.exit(main())
