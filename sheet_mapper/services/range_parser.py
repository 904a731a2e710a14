from __future__ import annotations

import re
from typing import Any

from ..models.sheet_range import RangeAddress, letters_to_integer

"""Range notation recognition and parsing.

Two grammars are supported, each with an optional "<tab>!" prefix where the
tab is everything before the last '!':

- letter form:  [tab!]COLROW[:COLROW]      e.g. Sheet1!B2:D10, b2
- numeric form: [tab!]R<row>C<col>[:R<row>C<col>]  e.g. Sheet1!R2C2:R10C4

Rows and columns are positive integers without leading zeros.
"""

__all__ = [
    "InvalidRangeFormat",
    "is_valid_letter_notation",
    "is_valid_numeric_notation",
    "parse_letter_notation",
    "parse_numeric_notation",
    "parse_range",
]


class InvalidRangeFormat(ValueError):
    """Raised when a range string matches none of the expected grammars."""

    def __init__(self, value: Any, notation: str = "letter or numeric") -> None:
        self.value = value
        super().__init__(f"'{value}' is not a valid {notation} range")


_POSITIVE = r"[1-9][0-9]*"
_TAB = r"(?:(?P<tab>.+)!)?"

LETTER_RE = re.compile(
    rf"^{_TAB}(?P<c1>[A-Za-z]+)(?P<r1>{_POSITIVE})"
    rf"(?::(?P<c2>[A-Za-z]+)(?P<r2>{_POSITIVE}))?$"
)
NUMERIC_RE = re.compile(
    rf"^{_TAB}[Rr](?P<r1>{_POSITIVE})[Cc](?P<c1>{_POSITIVE})"
    rf"(?::[Rr](?P<r2>{_POSITIVE})[Cc](?P<c2>{_POSITIVE}))?$"
)


def _match(pattern: re.Pattern[str], value: Any) -> re.Match[str] | None:
    if not isinstance(value, str):
        return None
    return pattern.fullmatch(value)


def is_valid_letter_notation(value: Any) -> bool:
    return _match(LETTER_RE, value) is not None


def is_valid_numeric_notation(value: Any) -> bool:
    return _match(NUMERIC_RE, value) is not None


def parse_letter_notation(value: str) -> RangeAddress:
    """Parse letter notation ("Sheet1!B2:D10") into a RangeAddress.

    Raises:
        InvalidRangeFormat: if value is not letter notation
    """
    m = _match(LETTER_RE, value)
    if m is None:
        raise InvalidRangeFormat(value, "letter")
    end_column = letters_to_integer(m["c2"]) if m["c2"] else None
    end_row = int(m["r2"]) if m["r2"] else None
    return RangeAddress(
        tab_name=m["tab"] or "",
        start_column=letters_to_integer(m["c1"]),
        start_row=int(m["r1"]),
        end_column=end_column,
        end_row=end_row,
    )


def parse_numeric_notation(value: str) -> RangeAddress:
    """Parse numeric notation ("Sheet1!R2C2:R10C4") into a RangeAddress.

    Raises:
        InvalidRangeFormat: if value is not numeric notation
    """
    m = _match(NUMERIC_RE, value)
    if m is None:
        raise InvalidRangeFormat(value, "numeric")
    end_column = int(m["c2"]) if m["c2"] else None
    end_row = int(m["r2"]) if m["r2"] else None
    return RangeAddress(
        tab_name=m["tab"] or "",
        start_column=int(m["c1"]),
        start_row=int(m["r1"]),
        end_column=end_column,
        end_row=end_row,
    )


def parse_range(value: str) -> RangeAddress:
    """Parse either notation; numeric is tried first.

    Raises:
        InvalidRangeFormat: if both recognizers reject value
    """
    if is_valid_numeric_notation(value):
        return parse_numeric_notation(value)
    if is_valid_letter_notation(value):
        return parse_letter_notation(value)
    raise InvalidRangeFormat(value)
