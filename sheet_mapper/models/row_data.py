from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .cell_value import CellValue
from .sheet_range import RangeAddress

"""RowData model: one sheet row after marshaling.

Carries the populated record together with the cell payloads it serializes
back to and the range that addresses the row on its tab.
"""

__all__ = [
    "RowData",
]


@dataclass(frozen=True)
class RowData:
    """A parsed data row.

    row_number is the 1-based sheet row (the header row is usually row 1, so
    the first data row is row 2).
    """
    row_number: int
    record: Any  # instance built by RecordSchema.factory
    cells: list[CellValue]  # column order, one per schema field
    range: RangeAddress
    raw_values: list[str] | None = None  # original cell text for debugging

    def to_dict(self) -> dict[str, Any]:
        return {
            "row": self.row_number,
            "range": str(self.range),
            "values": [c.to_cell_data() for c in self.cells],
        }
