from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ErrorRecord model for the conversion error log.

Each record is one JSON line with a fixed key set. row and column use -1 as
a sentinel when the failure cannot be tied to a specific cell (e.g. a header
mismatch is row-level, an unreadable file is file-level).
"""

__all__ = [
    "ErrorRecord",
]


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        source: Input file name
        tab: Sheet tab name (may be empty)
        row: 1-based sheet row, -1 if unknown
        column: 1-based column id, -1 if unknown
        error_type: Error classification in UPPER_SNAKE_CASE format
        message: Human readable description
    """
    timestamp: str
    source: str
    tab: str
    row: int
    column: int
    error_type: str
    message: str

    @staticmethod
    def create(
        source: str, tab: str, row: int, error_type: str, message: str, column: int = -1
    ) -> ErrorRecord:
        """Create a new ErrorRecord stamped with the current UTC time."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            source=source,
            tab=tab,
            row=row,
            column=column,
            error_type=error_type,
            message=message,
        )

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)
