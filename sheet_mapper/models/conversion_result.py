from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from .row_data import RowData

"""Conversion result model: aggregated outcome of one batch conversion.

Feeds the SUMMARY line and the CLI exit code.
"""

__all__ = [
    "ConversionResult",
]


@dataclass(frozen=True)
class ConversionResult:
    total_rows: int  # data rows seen (empty rows excluded)
    parsed_rows: int
    failed_rows: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    rows: list[RowData] = field(default_factory=list)
    error_log: Path | None = None  # set when failures were flushed

    @property
    def has_failures(self) -> bool:
        return self.failed_rows > 0
