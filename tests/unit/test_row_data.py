from __future__ import annotations

from sheet_mapper.models.cell_value import CellValue, CellValueKind, FormatType, NumberFormat
from sheet_mapper.models.row_data import RowData
from sheet_mapper.models.sheet_range import RangeAddress


def test_row_data_to_dict():
    row = RowData(
        row_number=4,
        record={"name": "Alice", "visits": 3},
        cells=[
            CellValue(CellValueKind.STRING, "Alice"),
            CellValue(CellValueKind.NUMBER, 3, NumberFormat("0", FormatType.NUMBER)),
        ],
        range=RangeAddress.for_row("Sheet1", 4, 1, 2),
    )
    assert row.to_dict() == {
        "row": 4,
        "range": "Sheet1!A4:B4",
        "values": [
            {"userEnteredValue": {"stringValue": "Alice"}},
            {
                "userEnteredValue": {"numberValue": 3},
                "userEnteredFormat": {"numberFormat": {"pattern": "0", "type": "NUMBER"}},
            },
        ],
    }
    assert row.raw_values is None


def test_row_data_range_without_tab():
    row = RowData(row_number=2, record={}, cells=[], range=RangeAddress.for_row("", 2, 3, 5))
    assert row.to_dict()["range"] == "C2:E2"
