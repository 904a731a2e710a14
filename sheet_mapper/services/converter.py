from __future__ import annotations

import logging
import time
from datetime import UTC, datetime

from ..logging.error_log import ErrorLogBuffer
from ..models.conversion_result import ConversionResult
from ..models.error_record import ErrorRecord
from ..models.field_schema import RecordSchema
from ..models.row_data import RowData
from ..models.sheet_range import RangeAddress
from ..sheet.reader import SheetRows
from .marshaler import FieldParseError, SchemaMismatch, populate, to_row_cells, validate_header
from .progress import ProgressTracker

"""Batch conversion of sheet rows into records and cell payloads.

For every data row: populate a record, serialize it back into CellValue
payloads and address the row with a RangeAddress spanning the schema's
columns. Row-level failures are turned into ErrorRecords (never dropped) and
counted; fail_fast re-raises the first one instead.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "ConversionError",
    "convert_rows",
]


class ConversionError(Exception):
    """Raised when a conversion cannot start (e.g. header mismatch)."""


def _row_error(
    exc: FieldParseError | SchemaMismatch, source: str, tab: str, row_number: int
) -> ErrorRecord:
    if isinstance(exc, FieldParseError):
        return ErrorRecord.create(
            source, tab, row_number, "FIELD_PARSE_ERROR", str(exc), column=exc.column_id
        )
    column = exc.column_ids[0] if exc.column_ids else -1
    return ErrorRecord.create(source, tab, row_number, "SCHEMA_MISMATCH", str(exc), column=column)


def convert_rows(
    schema: RecordSchema,
    sheet: SheetRows,
    *,
    source: str,
    min_column_id: int = 1,
    strict: bool = False,
    fail_fast: bool = False,
    error_buffer: ErrorLogBuffer | None = None,
) -> ConversionResult:
    """Convert every data row of sheet with schema.

    Args:
        schema: Record schema to populate
        sheet: Rows read by sheet.reader.read_sheet
        source: Input name used in error records
        min_column_id: Column id of the first cell in each row
        strict: Missing trailing cells raise SchemaMismatch
        fail_fast: Re-raise the first row failure
        error_buffer: Receives one ErrorRecord per failed row; flushed at the end

    Raises:
        ConversionError: if the header does not match the schema
        FieldParseError, SchemaMismatch: on the first bad row when fail_fast
    """
    buffer = error_buffer if error_buffer is not None else ErrorLogBuffer()
    start = datetime.now(UTC)
    t0 = time.perf_counter()

    try:
        validate_header(schema, sheet.header, min_column_id)
    except SchemaMismatch as e:
        buffer.append(ErrorRecord.create(source, sheet.tab_name, sheet.header_row, "HEADER_MISMATCH", str(e)))
        buffer.flush()
        raise ConversionError(str(e)) from e

    rows: list[RowData] = []
    failed = 0
    with ProgressTracker(len(sheet.rows), description=f"Converting {schema.name}") as progress:
        for row_number, cells in sheet.rows:
            try:
                record = populate(schema, cells, min_column_id, strict=strict)
            except (FieldParseError, SchemaMismatch) as e:
                if fail_fast:
                    raise
                failed += 1
                logger.warning(f"row {row_number}: {e}")
                buffer.append(_row_error(e, source, sheet.tab_name, row_number))
                progress.advance(success=False)
                continue
            rows.append(
                RowData(
                    row_number=row_number,
                    record=record,
                    cells=to_row_cells(record, schema),
                    range=RangeAddress.for_row(
                        sheet.tab_name, row_number, schema.min_column_id, schema.max_column_id
                    ),
                    raw_values=cells,
                )
            )
            progress.advance()

    error_log = buffer.flush()
    if error_log is not None:
        logger.info(f"error log written: {error_log}")

    elapsed = time.perf_counter() - t0
    return ConversionResult(
        total_rows=len(sheet.rows),
        parsed_rows=len(rows),
        failed_rows=failed,
        start_time=start,
        end_time=datetime.now(UTC),
        elapsed_seconds=elapsed,
        rows=rows,
        error_log=error_log,
    )
