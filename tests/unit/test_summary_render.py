from __future__ import annotations

import re
from datetime import datetime, timezone

import pytest

from sheet_mapper.models.conversion_result import ConversionResult
from sheet_mapper.services.summary import render_summary_line

SUMMARY_PATTERN = re.compile(
    r"^SUMMARY\s+rows=([0-9]+)\s+parsed=([0-9]+)\s+failed=([0-9]+)\s+elapsed_sec=([0-9]+\.?[0-9]*)$"
)

T0 = datetime(2023, 1, 1, 10, 0, 0, tzinfo=timezone.utc)


def _result(total: int, parsed: int, failed: int, elapsed: float) -> ConversionResult:
    return ConversionResult(
        total_rows=total,
        parsed_rows=parsed,
        failed_rows=failed,
        start_time=T0,
        end_time=T0,
        elapsed_seconds=elapsed,
    )


def test_render_summary_line_partial_failure():
    line = render_summary_line(_result(3, 2, 1, 0.84))
    assert line == "SUMMARY rows=3 parsed=2 failed=1 elapsed_sec=0.84"
    assert SUMMARY_PATTERN.match(line)


@pytest.mark.parametrize(
    "elapsed,expected",
    [
        (0.0, "0"),
        (5.0, "5"),
        (1.5, "1.5"),
        (1.23456, "1.235"),
        (0.00005, "0.00005"),
    ],
)
def test_elapsed_formatting(elapsed: float, expected: str):
    line = render_summary_line(_result(0, 0, 0, elapsed))
    assert line.endswith(f"elapsed_sec={expected}")
    assert "e-" not in line
    assert SUMMARY_PATTERN.match(line)


def test_has_failures():
    assert _result(3, 2, 1, 0).has_failures is True
    assert _result(3, 3, 0, 0).has_failures is False
