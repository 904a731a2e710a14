from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

"""Cell value descriptors produced by the marshaler for writing.

The shape mirrors the Sheets API CellData payload: a user-entered value of
one kind (string, number or bool) plus an optional number format. A NUMBER
or BOOLEAN cell whose value is None carries no value at all, which clears
the cell when written.
"""

__all__ = [
    "CellValue",
    "CellValueKind",
    "FormatType",
    "NumberFormat",
]


class CellValueKind(Enum):
    STRING = "stringValue"
    NUMBER = "numberValue"
    BOOLEAN = "boolValue"


class FormatType(Enum):
    CURRENCY = "CURRENCY"
    NUMBER = "NUMBER"


@dataclass(frozen=True)
class NumberFormat:
    pattern: str
    type: FormatType

    def to_dict(self) -> dict[str, str]:
        return {"pattern": self.pattern, "type": self.type.value}


@dataclass(frozen=True)
class CellValue:
    kind: CellValueKind
    value: str | int | float | bool | None
    number_format: NumberFormat | None = None  # None -> plain cell

    @property
    def is_absent(self) -> bool:
        return self.value is None

    def to_cell_data(self) -> dict[str, Any]:
        """Render as a Sheets API CellData dict."""
        user_entered: dict[str, Any] = {}
        if self.value is not None:
            user_entered[self.kind.value] = self.value
        data: dict[str, Any] = {"userEnteredValue": user_entered}
        if self.number_format is not None:
            data["userEnteredFormat"] = {"numberFormat": self.number_format.to_dict()}
        return data
