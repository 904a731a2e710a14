from __future__ import annotations

from ..models.conversion_result import ConversionResult

"""SUMMARY line rendering for conversion runs."""


def _format_seconds(value: float) -> str:
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        # avoid scientific notation for very small numbers
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return f"{value:.3f}".rstrip("0").rstrip(".")


def render_summary_line(result: ConversionResult) -> str:
    """Render the SUMMARY line for a conversion.

    Examples:
        >>> from datetime import datetime, timezone
        >>> t = datetime(2024, 1, 1, tzinfo=timezone.utc)
        >>> result = ConversionResult(
        ...     total_rows=3, parsed_rows=2, failed_rows=1,
        ...     start_time=t, end_time=t, elapsed_seconds=1.5,
        ... )
        >>> render_summary_line(result)
        'SUMMARY rows=3 parsed=2 failed=1 elapsed_sec=1.5'
    """
    return (
        f"SUMMARY rows={result.total_rows} "
        f"parsed={result.parsed_rows} "
        f"failed={result.failed_rows} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )
