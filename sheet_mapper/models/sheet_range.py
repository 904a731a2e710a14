from __future__ import annotations

import string
from dataclasses import dataclass, field

"""RangeAddress value type and column letter conversion.

A RangeAddress is a rectangular (or single cell) region on a named tab. Both
textual renderings are computed once at construction:

- letter notation:  Sheet1!B2:D10   (only when end_column is known)
- numeric notation: Sheet1!R2C2:R10C4

Column letters form a bijective base-26 system (A=1 .. Z=26, AA=27); there is
no digit for zero.
"""

__all__ = [
    "RangeAddress",
    "integer_to_letters",
    "letters_to_integer",
]

_LETTERS = string.ascii_uppercase


def integer_to_letters(column_id: int) -> str:
    """Convert a 1-based column id to its letter form (1 -> A, 27 -> AA)."""
    if column_id < 1:
        raise ValueError(f"column id must be >= 1: {column_id}")
    digits: list[str] = []
    n = column_id
    while n > 0:
        n, remainder = divmod(n - 1, 26)
        digits.append(_LETTERS[remainder])
    return "".join(reversed(digits))


def letters_to_integer(letters: str) -> int:
    """Convert column letters (case-insensitive) to a 1-based column id."""
    if not letters:
        raise ValueError("column letters must not be empty")
    result = 0
    for ch in letters.upper():
        if ch not in _LETTERS:
            raise ValueError(f"invalid column letter '{ch}' in '{letters}'")
        result = result * 26 + (ord(ch) - ord("A") + 1)
    return result


@dataclass(frozen=True)
class RangeAddress:
    """Region of a sheet tab addressed by 1-based row/column coordinates.

    Inverted ranges (end before start) are accepted as given; callers that
    need ordered bounds validate them.
    """
    tab_name: str
    start_column: int
    start_row: int
    end_column: int | None = None
    end_row: int | None = None
    letter_notation: str | None = field(init=False)  # None unless end_column is known
    numeric_notation: str = field(init=False)

    def __post_init__(self) -> None:
        # None tab names normalize to "" so equality stays structural
        if self.tab_name is None:
            object.__setattr__(self, "tab_name", "")
        prefix = f"{self.tab_name}!" if self.tab_name else ""

        if self.end_row is not None and self.end_column is not None:
            numeric = (
                f"R{self.start_row}C{self.start_column}:R{self.end_row}C{self.end_column}"
            )
        else:
            numeric = f"R{self.start_row}C{self.start_column}"
        object.__setattr__(self, "numeric_notation", prefix + numeric)

        letter: str | None = None
        if self.end_column is not None:
            start_letters = integer_to_letters(self.start_column)
            end_letters = integer_to_letters(self.end_column)
            end_row = "" if self.end_row is None else str(self.end_row)
            letter = f"{prefix}{start_letters}{self.start_row}:{end_letters}{end_row}"
        object.__setattr__(self, "letter_notation", letter)

    @property
    def is_single_cell(self) -> bool:
        return self.end_row is None

    @property
    def supports_letter_notation(self) -> bool:
        return self.end_column is not None

    @classmethod
    def from_notation(cls, value: str) -> RangeAddress:
        """Build a RangeAddress from numeric or letter notation text.

        Numeric notation is tried first, then letter notation.

        Raises:
            InvalidRangeFormat: if the text matches neither grammar
        """
        from ..services.range_parser import parse_range

        return parse_range(value)

    @classmethod
    def for_row(cls, tab_name: str, row: int, first_column: int, last_column: int) -> RangeAddress:
        """Address one full row segment, e.g. Sheet1!A5:E5."""
        return cls(tab_name, first_column, row, last_column, row)

    def __str__(self) -> str:
        return self.letter_notation or self.numeric_notation
