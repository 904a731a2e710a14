from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path

import pandas as pd

from sheet_mapper.cli import main as cli_main
from sheet_mapper.logging.init import reset_logging

"""End-to-end XLSX conversion: per-record tabs and typed Excel cells."""


def _make_excel_file(tmp_path: Path, name: str, sheets: dict[str, list[list[object]]]) -> Path:
    excel_path = tmp_path / name
    with pd.ExcelWriter(excel_path, engine="openpyxl") as writer:
        for sheet_name, rows in sheets.items():
            df = pd.DataFrame(rows)
            df.to_excel(writer, sheet_name=sheet_name, header=False, index=False)
    return excel_path


def test_convert_xlsx_uses_record_tab(temp_workdir: Path, write_config, capsys):
    reset_logging()
    excel = _make_excel_file(
        temp_workdir / "data",
        "workbook.xlsx",
        {
            "Contacts": [
                ["Name", "Number", "Price Amount", "Date", "Quantity", "Active", "Visits"],
                ["Alice", 7031112222, 12.5, datetime(2023, 1, 15, 10, 30), 2, True, 4],
            ],
            "Orders": [
                ["Order", "Total"],
                [1001, 99.9],
                [1002, "n/a"],
            ],
        },
    )

    code = cli_main(["convert", str(excel), "--record", "Order"])
    captured = capsys.readouterr()
    assert code == 2
    rows = [json.loads(line) for line in captured.out.splitlines()]
    assert len(rows) == 1
    assert rows[0]["range"] == "Orders!A2:B2"
    assert rows[0]["values"] == [
        {
            "userEnteredValue": {"numberValue": 1001},
            "userEnteredFormat": {"numberFormat": {"pattern": "0", "type": "NUMBER"}},
        },
        {
            "userEnteredValue": {"numberValue": 99.9},
            "userEnteredFormat": {"numberFormat": {"pattern": "#,##0.00 [$EUR]", "type": "CURRENCY"}},
        },
    ]

    reset_logging()
    code = cli_main(["convert", str(excel), "--record", "Contact"])
    captured = capsys.readouterr()
    assert code == 0
    contact = json.loads(captured.out.splitlines()[0])
    assert contact["range"] == "Contacts!A2:G2"
    assert contact["values"][3]["userEnteredValue"] == {"numberValue": 44941.4375}
    assert contact["values"][5] == {"userEnteredValue": {"boolValue": True}}
