"""Quarantine for rejected input rows.

Rows that cannot become observations are kept with their reason and errors.
When a quarantine directory is configured each record is also written as a
JSON file for later inspection.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

__all__ = [
    "QuarantineRecord",
    "quarantine_invalid_row",
]


class QuarantineRecord:
    """Record of a quarantined row.

    Attributes
    ----------
    timestamp : str
        UTC timestamp when quarantined
    entity_type : str
        Kind of record ("observation")
    reason : str
        Reason for quarantine
    errors : list[str]
        List of validation errors
    payload : dict
        Original row
    row_number : int | None
        1-based data row number in the source file
    file_path : Path | None
        Path to the quarantine file, if one was written
    """

    def __init__(
        self,
        timestamp: str,
        entity_type: str,
        reason: str,
        errors: list[str],
        payload: dict[str, Any],
        row_number: int | None = None,
        file_path: Path | None = None,
    ) -> None:
        self.timestamp = timestamp
        self.entity_type = entity_type
        self.reason = reason
        self.errors = errors
        self.payload = payload
        self.row_number = row_number
        self.file_path = file_path

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "timestamp": self.timestamp,
            "entity_type": self.entity_type,
            "reason": self.reason,
            "errors": self.errors,
            "payload": self.payload,
            "row_number": self.row_number,
        }


def quarantine_invalid_row(
    payload: dict[str, Any],
    errors: list[str],
    reason: str,
    *,
    row_number: int | None = None,
    entity_type: str = "observation",
    quarantine_dir: Path | None = None,
) -> QuarantineRecord:
    """Quarantine a row that failed validation.

    Parameters
    ----------
    payload
        Original row (as read from the table)
    errors
        List of validation errors
    reason
        High-level reason for quarantine
    row_number
        1-based data row number, if known
    entity_type
        Kind of record
    quarantine_dir
        Directory to persist the record in (None keeps it in memory only)

    Returns
    -------
    QuarantineRecord
        Record of the quarantined row
    """
    now = datetime.now(timezone.utc)
    record = QuarantineRecord(
        timestamp=now.isoformat(),
        entity_type=entity_type,
        reason=reason,
        errors=list(errors),
        payload=dict(payload),
        row_number=row_number,
    )

    if quarantine_dir is not None:
        quarantine_dir.mkdir(parents=True, exist_ok=True)

        # {entity_type}_{timestamp}_row{n}.json
        timestamp_compact = now.strftime("%Y%m%d_%H%M%S_%f")
        suffix = f"row{row_number}" if row_number is not None else "unknown"
        file_path = quarantine_dir / f"{entity_type}_{timestamp_compact}_{suffix}.json"

        with open(file_path, "w", encoding="utf-8") as f:
            json.dump(record.to_dict(), f, indent=2, ensure_ascii=False, default=str)

        record.file_path = file_path

    return record
