from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Any

import pandas as pd

from ..services.conversions import datetime_to_serial

"""Local sheet export reader.

Reads a CSV or XLSX export into ordered rows of raw cell text, shaped like
the unformatted values the Sheets API returns for a range:

- empty cells are ""
- trailing empty cells of a row are dropped
- date/time cells become serial numbers, whole floats become integers,
  booleans become TRUE / FALSE

Fully empty rows are skipped; each kept row remembers its 1-based sheet row
number.
"""

__all__ = [
    "SheetHeaderError",
    "SheetRows",
    "UnsupportedSourceError",
    "read_sheet",
    "to_raw_cell",
]

CSV_SUFFIXES = {".csv"}
EXCEL_SUFFIXES = {".xlsx", ".xlsm"}


class SheetHeaderError(Exception):
    """Raised when the header row is missing."""


class UnsupportedSourceError(Exception):
    """Raised for input files that are neither CSV nor XLSX."""


@dataclass
class SheetRows:
    tab_name: str
    header: list[str]
    header_row: int  # 1-based
    rows: list[tuple[int, list[str]]]  # (sheet row number, raw cells)


def _format_number(value: float) -> str:
    if value.is_integer():
        return str(int(value))
    return repr(value)


def to_raw_cell(value: Any) -> str:
    """Render one pandas cell as the raw text the marshaler consumes."""
    if value is None:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    if value is pd.NaT:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, (datetime, date)):
        # pandas Timestamp is a datetime subclass
        return _format_number(datetime_to_serial(value))
    if isinstance(value, float):
        return _format_number(value)
    return str(value)


def _trim_trailing(cells: list[str]) -> list[str]:
    end = len(cells)
    while end > 0 and cells[end - 1] == "":
        end -= 1
    return cells[:end]


def _read_frame(path: Path, tab_name: str | None) -> tuple[pd.DataFrame, str]:
    suffix = path.suffix.lower()
    if suffix in CSV_SUFFIXES:
        df = pd.read_csv(
            path, header=None, dtype=str, keep_default_na=False, skip_blank_lines=False
        )
        return df, tab_name or ""
    if suffix in EXCEL_SUFFIXES:
        sheet = tab_name if tab_name else 0
        # text such as "NA" or "null" stays verbatim; only truly empty cells are NaN
        df = pd.read_excel(path, sheet_name=sheet, header=None, keep_default_na=False, na_values=[])
        if tab_name:
            return df, tab_name
        with pd.ExcelFile(path) as xls:
            return df, str(xls.sheet_names[0])
    raise UnsupportedSourceError(f"unsupported input type '{path.suffix}': {path}")


def read_sheet(path: Path, tab_name: str | None = None, header_row: int = 1) -> SheetRows:
    """Read one tab of a CSV / XLSX export.

    Args:
        path: Input file
        tab_name: XLSX sheet to read (first sheet if omitted); for CSV it is
            only used as the tab name of the resulting ranges
        header_row: 1-based row holding the display names; data starts on
            the next row

    Raises:
        UnsupportedSourceError: unknown file extension
        SheetHeaderError: the file has fewer rows than header_row
    """
    try:
        df, resolved_tab = _read_frame(path, tab_name)
    except pd.errors.EmptyDataError:
        df, resolved_tab = pd.DataFrame(), tab_name or ""

    if df.shape[0] < header_row:
        raise SheetHeaderError(f"'{path.name}' has no header row {header_row}")

    raw_rows = [[to_raw_cell(v) for v in r] for r in df.itertuples(index=False, name=None)]
    header = [c.strip() for c in _trim_trailing(raw_rows[header_row - 1])]

    rows: list[tuple[int, list[str]]] = []
    for index, cells in enumerate(raw_rows[header_row:], start=header_row + 1):
        trimmed = _trim_trailing(cells)
        if not trimmed:
            continue
        rows.append((index, trimmed))
    return SheetRows(tab_name=resolved_tab, header=header, header_row=header_row, rows=rows)
