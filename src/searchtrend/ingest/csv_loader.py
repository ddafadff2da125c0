"""Load daily search-count CSV files into observations.

The file is read as text so no column type is guessed; every cell goes
through explicit validation and coercion instead. Rows without a usable date
are quarantined (or rejected outright in strict mode).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import pandas as pd

from ..core.observations import Observation
from ..core.quarantine import QuarantineRecord, quarantine_invalid_row
from ..core.validation import ValidationError, validate_columns, validate_row
from ..observability import log_ingress, log_quarantine, log_validation_failure

__all__ = [
    "LoadResult",
    "load_observations",
    "observations_from_frame",
    "read_search_csv",
]


@dataclass
class LoadResult:
    """Outcome of loading an input table."""

    observations: list[Observation] = field(default_factory=list)
    quarantined: list[QuarantineRecord] = field(default_factory=list)
    rows_read: int = 0
    source: str | None = None

    @property
    def accepted(self) -> int:
        return len(self.observations)


def read_search_csv(path: str | Path) -> pd.DataFrame:
    """Read a header CSV as strings, skipping blank lines.

    Raises
    ------
    FileNotFoundError
        If the file does not exist
    ValidationError
        If the file is empty or cannot be parsed as CSV
    """
    p = Path(path)
    try:
        return pd.read_csv(
            p,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            encoding="utf-8",
        )
    except pd.errors.EmptyDataError as exc:
        raise ValidationError(f"CSV file is empty: {p}", errors=["empty file"]) from exc
    except (pd.errors.ParserError, UnicodeDecodeError) as exc:
        raise ValidationError(f"Could not parse CSV {p}: {exc}", errors=[str(exc)]) from exc


def observations_from_frame(
    frame: pd.DataFrame,
    *,
    date_column: str = "date",
    value_column: str = "searchCount",
    strict: bool = False,
    quarantine_dir: Path | None = None,
    source: str | None = None,
    trace_id: str | None = None,
) -> LoadResult:
    """Convert a parsed table into observations.

    Parameters
    ----------
    frame
        Table with at least ``date_column`` and ``value_column``
    date_column
        Name of the date column
    value_column
        Name of the search-count column
    strict
        Raise on the first invalid row instead of quarantining it
    quarantine_dir
        Directory to persist quarantined rows in
    source
        Label of the input, for logs
    trace_id
        Trace ID for log correlation

    Returns
    -------
    LoadResult
        Accepted observations and quarantined rows

    Raises
    ------
    ValidationError
        If a required column is missing, or in strict mode on a bad row
    """
    validate_columns(frame.columns, [date_column, value_column])

    result = LoadResult(rows_read=len(frame), source=source)
    log_ingress(source or "<frame>", len(frame), trace_id=trace_id)

    for row_number, row in enumerate(frame.to_dict(orient="records"), start=1):
        validation = validate_row(row, date_key=date_column)
        if not validation:
            if strict:
                raise ValidationError(
                    f"Row {row_number} is invalid: {validation}",
                    errors=[f"row {row_number}: {error}" for error in validation.errors],
                )

            log_validation_failure(row_number, validation.errors, trace_id=trace_id)
            record = quarantine_invalid_row(
                row,
                validation.errors,
                "Row has no usable date",
                row_number=row_number,
                quarantine_dir=quarantine_dir,
            )
            log_quarantine(row_number, record.reason, record.file_path, trace_id=trace_id)
            result.quarantined.append(record)
            continue

        result.observations.append(
            Observation.from_mapping(row, date_key=date_column, value_key=value_column)
        )

    return result


def load_observations(
    path: str | Path,
    *,
    date_column: str = "date",
    value_column: str = "searchCount",
    strict: bool = False,
    quarantine_dir: Path | None = None,
    trace_id: str | None = None,
) -> LoadResult:
    """Load a search-count CSV file.

    See ``observations_from_frame`` for the row handling.

    Example
    -------
    >>> result = load_observations("gold_search_data.csv")
    >>> points = aggregate(result.observations)
    """
    frame = read_search_csv(path)
    return observations_from_frame(
        frame,
        date_column=date_column,
        value_column=value_column,
        strict=strict,
        quarantine_dir=quarantine_dir,
        source=str(path),
        trace_id=trace_id,
    )
