from __future__ import annotations

import re
from pathlib import Path

from sheet_mapper.cli import main as cli_main
from sheet_mapper.logging.init import reset_logging

"""SUMMARY line contract: exactly one line on stderr, never on stdout."""

SUMMARY_PATTERN = re.compile(
    r"^SUMMARY rows=([0-9]+) parsed=([0-9]+) failed=([0-9]+) elapsed_sec=([0-9]+(\.[0-9]+)?)$"
)


def test_summary_line_format(temp_workdir: Path, write_config, write_csv, capsys):
    reset_logging()
    cli_main(["convert", str(write_csv), "--record", "Contact"])
    captured = capsys.readouterr()

    summary_lines = [line for line in captured.err.splitlines() if line.startswith("SUMMARY")]
    assert len(summary_lines) == 1
    match = SUMMARY_PATTERN.match(summary_lines[0])
    assert match, summary_lines[0]
    assert match.group(1, 2, 3) == ("3", "2", "1")
    assert "SUMMARY" not in captured.out
