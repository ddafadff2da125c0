#!/usr/bin/env python3
"""Common CLI utilities: JSON output, stable exit codes, logging setup."""

import functools
import json
import traceback
import uuid
from enum import IntEnum
from typing import Any

import click

from ..config.settings import ConfigError, Settings, load_settings
from ..core.validation import ValidationError
from ..observability import configure_loguru


class ExitCode(IntEnum):
    """Stable exit codes for CLI commands."""

    SUCCESS = 0  # Successful execution
    VALIDATION_ERROR = 2  # Bad input data or columns
    IO_ERROR = 5  # Input unreadable or chart not writable
    CONFIG_ERROR = 6  # Configuration error
    UNKNOWN_ERROR = 7  # Unknown/unexpected error


class CLIContext:
    """Context for CLI execution with JSON output, trace ID and settings."""

    def __init__(
        self,
        settings: Settings,
        json_output: bool = False,
        trace_id: str | None = None,
        verbose: bool = False,
    ):
        """Initialize CLI context.

        Args:
            settings: Loaded settings
            json_output: Enable JSON output mode
            trace_id: Trace ID for correlation
            verbose: Verbose output
        """
        self.settings = settings
        self.json_output = json_output
        self.trace_id = trace_id or f"trace-{uuid.uuid4().hex[:12]}"
        self.verbose = verbose

    def output(
        self, data: Any, status: str = "success", error: str | None = None, meta: dict[str, Any] | None = None
    ) -> None:
        """Output result in appropriate format.

        Args:
            data: Result data
            status: Status ("success", "error", "warning")
            error: Error message if status is error
            meta: Additional metadata
        """
        if self.json_output:
            # JSON mode: print only JSON, no logs
            result: dict[str, Any] = {"status": status, "trace_id": self.trace_id}

            if error:
                result["error"] = error
            else:
                result["data"] = data

            if meta:
                result["meta"] = meta

            click.echo(json.dumps(result, ensure_ascii=False, indent=2))
        else:
            if status == "error":
                click.echo(f"❌ {error}", err=True)
            elif status == "warning":
                click.echo(f"⚠️  {data}")
            elif isinstance(data, dict):
                for key, value in data.items():
                    click.echo(f"{key}: {value}")
            elif isinstance(data, list):
                for item in data:
                    click.echo(f"  - {item}")
            else:
                click.echo(data)


def cli_command(func):
    """Decorator to add common CLI options to commands.

    Adds:
    - --json: JSON output mode
    - --trace-id: Trace ID for correlation
    - --verbose: Verbose output

    Loads settings and configures logging before the command runs; console
    logging is disabled in JSON mode so stdout stays machine-readable.
    """

    @click.option("--json", "json_output", is_flag=True, help="Output as JSON (machine-readable)")
    @click.option("--trace-id", type=str, help="Trace ID for correlation")
    @click.option("--verbose", "-v", is_flag=True, help="Verbose output")
    @functools.wraps(func)
    def wrapper(
        json_output: bool,
        trace_id: str | None,
        verbose: bool,
        *args: Any,
        **kwargs: Any,
    ) -> Any:
        try:
            settings = load_settings()
        except ConfigError as exc:
            click.echo(f"❌ {exc}", err=True)
            click.get_current_context().exit(int(ExitCode.CONFIG_ERROR))

        configure_loguru(
            log_dir=settings.log_dir,
            level="DEBUG" if verbose else settings.log_level,
            enable_console=not json_output,
        )

        ctx = CLIContext(
            settings,
            json_output=json_output,
            trace_id=trace_id,
            verbose=verbose,
        )

        # Inject context as first argument
        return func(ctx, *args, **kwargs)

    return wrapper


def exit_code_for(exc: BaseException) -> ExitCode:
    """Map an exception to a stable exit code."""
    if isinstance(exc, ValidationError):
        return ExitCode.VALIDATION_ERROR
    if isinstance(exc, ConfigError):
        return ExitCode.CONFIG_ERROR
    if isinstance(exc, OSError):
        return ExitCode.IO_ERROR
    return ExitCode.UNKNOWN_ERROR


def exit_code_for_kind(error_kind: str | None) -> ExitCode:
    """Map a pipeline ``error_kind`` to an exit code."""
    if error_kind == "parse":
        return ExitCode.VALIDATION_ERROR
    if error_kind in ("load", "render"):
        return ExitCode.IO_ERROR
    if error_kind is None:
        return ExitCode.SUCCESS
    return ExitCode.UNKNOWN_ERROR


def handle_cli_error(ctx: CLIContext, exc: Exception) -> ExitCode:
    """Report an unexpected error and return its exit code.

    Args:
        ctx: CLI context
        exc: Exception to handle

    Returns:
        Appropriate exit code
    """
    exit_code = exit_code_for(exc)
    meta: dict[str, Any] = {"error_type": type(exc).__name__, "exit_code": int(exit_code)}
    if ctx.verbose:
        meta["traceback"] = traceback.format_exc()

    ctx.output(None, status="error", error=str(exc), meta=meta if ctx.json_output else None)
    if ctx.verbose and not ctx.json_output:
        click.echo(meta["traceback"], err=True)

    return exit_code
