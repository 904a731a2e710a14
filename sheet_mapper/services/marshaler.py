from __future__ import annotations

import logging
import math
from collections.abc import Callable, Sequence
from decimal import Decimal
from typing import Any

from ..models.cell_value import CellValue, CellValueKind, FormatType, NumberFormat
from ..models.field_schema import (
    FieldSchema,
    FieldType,
    MarshalError,
    RecordSchema,
    UnsupportedFieldType,
    read_field_value,
)
from .conversions import (
    datetime_to_serial,
    parse_boolean,
    parse_currency,
    remove_us_country_code,
    serial_to_datetime,
)

"""Record marshaling driven by RecordSchema metadata.

populate() turns a positional row of raw cell strings into a record;
to_cell_value() / to_row_cells() turn a record back into CellValue payloads.

Two "field left unset" paths are deliberately distinct:
- the row is shorter than the field's column (missing trailing cell): the
  field is skipped without looking at its type, or SchemaMismatch in strict
  mode;
- the cell exists but is empty: the field's parser sees "" and leaves the
  field unset.
"""

__all__ = [
    "FieldParseError",
    "MarshalError",
    "SchemaMismatch",
    "UnsupportedFieldType",
    "header_row",
    "parse_field",
    "populate",
    "to_cell_value",
    "to_row_cells",
    "validate_header",
]

logger = logging.getLogger(__name__)


class FieldParseError(MarshalError):
    """Raised when a non-empty raw cell cannot be converted to its field type."""

    def __init__(self, column_id: int, raw: str, field_type: FieldType, reason: str = "") -> None:
        self.column_id = column_id
        self.raw = raw
        self.field_type = field_type
        self.reason = reason
        msg = f"column {column_id}: cannot parse '{raw}' as {field_type.value}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


class SchemaMismatch(MarshalError):
    """Raised when row or header data does not line up with the schema."""

    def __init__(self, message: str, column_ids: Sequence[int] = ()) -> None:
        self.column_ids = list(column_ids)
        super().__init__(message)


# ---------------------------------------------------------------------------
# Deserialization
# ---------------------------------------------------------------------------

def _parse_string(raw: str) -> Any:
    return raw if raw != "" else None


def _parse_currency(raw: str) -> Any:
    return parse_currency(raw) if raw.strip() else None


def _parse_phone_number(raw: str) -> Any:
    if not raw.strip():
        return None
    digits = remove_us_country_code(raw)
    if not digits:
        raise ValueError("no digits in phone number")
    return int(digits)


def _finite_float(text: str) -> float:
    # float() also takes "nan", "inf" and "1_000"; none of them is a cell number
    if "_" in text:
        raise ValueError("digit separators are not allowed")
    value = float(text)
    if not math.isfinite(value):
        raise ValueError("not a finite number")
    return value


def _parse_date_time(raw: str) -> Any:
    return serial_to_datetime(_finite_float(raw.strip())) if raw.strip() else None


def _parse_number(raw: str) -> Any:
    return _finite_float(raw.strip()) if raw.strip() else None


def _parse_integer(raw: str) -> Any:
    text = raw.strip()
    if not text:
        return None
    if "_" in text:
        raise ValueError("digit separators are not allowed")
    try:
        return int(text)
    except ValueError:
        # whole-valued decimals such as "3.0" come back from numeric cells
        value = Decimal(text)
        if value != value.to_integral_value():
            raise ValueError("not a whole number") from None
        return int(value)


def _parse_boolean(raw: str) -> Any:
    return parse_boolean(raw) if raw.strip() else None


_PARSERS: dict[FieldType, Callable[[str], Any]] = {
    FieldType.STRING: _parse_string,
    FieldType.CURRENCY: _parse_currency,
    FieldType.PHONE_NUMBER: _parse_phone_number,
    FieldType.DATE_TIME: _parse_date_time,
    FieldType.NUMBER: _parse_number,
    FieldType.INTEGER: _parse_integer,
    FieldType.BOOLEAN: _parse_boolean,
}


def parse_field(schema_field: FieldSchema, raw: Any) -> Any:
    """Convert one raw cell to the field's Python value (None = unset).

    Raises:
        UnsupportedFieldType: if the field type has no parser
        FieldParseError: if a non-empty value cannot be converted
    """
    parser = _PARSERS.get(schema_field.field_type)
    if parser is None:
        raise UnsupportedFieldType(schema_field.field_type)
    text = "" if raw is None else str(raw)
    try:
        return parser(text)
    except (ValueError, ArithmeticError) as e:
        raise FieldParseError(schema_field.column_id, text, schema_field.field_type, str(e)) from e


def populate(schema: RecordSchema, row: Sequence[Any], min_column_id: int = 1, *, strict: bool = False) -> Any:
    """Build a record from a positional row of raw cells.

    Args:
        schema: Record schema describing the fields
        row: Raw cell values; row[0] holds column min_column_id
        min_column_id: Column id of the first cell in row
        strict: Raise SchemaMismatch instead of skipping fields whose column
            lies outside row

    Returns:
        schema.factory(**values) with only the populated fields passed
    """
    values: dict[str, Any] = {}
    missing: list[int] = []
    for f in schema.fields:
        offset = f.column_id - min_column_id
        if offset < 0 or offset >= len(row):
            missing.append(f.column_id)
            continue
        value = parse_field(f, row[offset])
        if value is not None:
            values[f.attribute] = value

    if missing:
        if strict:
            raise SchemaMismatch(
                f"record '{schema.name}': row has no cells for columns {missing}", missing
            )
        logger.debug("record '%s': skipped missing columns %s", schema.name, missing)
    return schema.factory(**values)


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------

def _number_cell(value: Any, schema_field: FieldSchema, fmt_type: FormatType) -> CellValue:
    return CellValue(
        kind=CellValueKind.NUMBER,
        value=value,
        number_format=NumberFormat(schema_field.format_pattern or "", fmt_type),
    )


def _string_to_cell(value: Any, schema_field: FieldSchema) -> CellValue:
    text = "" if value is None or not str(value).strip() else str(value)
    return CellValue(kind=CellValueKind.STRING, value=text)


def _currency_to_cell(value: Any, schema_field: FieldSchema) -> CellValue:
    number = None if value is None else float(value)
    return _number_cell(number, schema_field, FormatType.CURRENCY)


def _phone_number_to_cell(value: Any, schema_field: FieldSchema) -> CellValue:
    number = None
    if value is not None:
        parsed = float(value)
        # zero means "no phone number", not the number 0
        number = parsed if parsed != 0 else None
    return _number_cell(number, schema_field, FormatType.NUMBER)


def _date_time_to_cell(value: Any, schema_field: FieldSchema) -> CellValue:
    number = None if value is None else datetime_to_serial(value)
    return _number_cell(number, schema_field, FormatType.NUMBER)


def _number_to_cell(value: Any, schema_field: FieldSchema) -> CellValue:
    number = None if value is None else float(value)
    return _number_cell(number, schema_field, FormatType.NUMBER)


def _integer_to_cell(value: Any, schema_field: FieldSchema) -> CellValue:
    number = None
    if isinstance(value, str):
        number = _parse_integer(value)
    elif value is not None:
        number = int(value)
        if number != value:
            raise ValueError(f"column {schema_field.column_id}: {value!r} is not a whole number")
    return _number_cell(number, schema_field, FormatType.NUMBER)


def _boolean_to_cell(value: Any, schema_field: FieldSchema) -> CellValue:
    if isinstance(value, str):
        # text goes through the same tokens as reading, so "false" stays False
        value = _parse_boolean(value)
    return CellValue(kind=CellValueKind.BOOLEAN, value=None if value is None else bool(value))


_SERIALIZERS: dict[FieldType, Callable[[Any, FieldSchema], CellValue]] = {
    FieldType.STRING: _string_to_cell,
    FieldType.CURRENCY: _currency_to_cell,
    FieldType.PHONE_NUMBER: _phone_number_to_cell,
    FieldType.DATE_TIME: _date_time_to_cell,
    FieldType.NUMBER: _number_to_cell,
    FieldType.INTEGER: _integer_to_cell,
    FieldType.BOOLEAN: _boolean_to_cell,
}


def to_cell_value(record: Any, schema_field: FieldSchema) -> CellValue:
    """Serialize one field of record into a CellValue.

    Raises:
        UnsupportedFieldType: if the field type has no serializer
        ValueError: if an Integer value is not whole or a Boolean string is not
            a boolean token
    """
    serializer = _SERIALIZERS.get(schema_field.field_type)
    if serializer is None:
        raise UnsupportedFieldType(schema_field.field_type)
    return serializer(read_field_value(record, schema_field), schema_field)


def to_row_cells(record: Any, schema: RecordSchema) -> list[CellValue]:
    """Serialize every schema field of record, in column order."""
    return [to_cell_value(record, f) for f in schema.fields]


def header_row(schema: RecordSchema) -> list[str]:
    return schema.header()


def validate_header(schema: RecordSchema, header: Sequence[Any], min_column_id: int = 1) -> None:
    """Check that each field's display name sits in its column of header.

    Raises:
        SchemaMismatch: listing every missing or mismatched column
    """
    problems: list[str] = []
    columns: list[int] = []
    for f in schema.fields:
        offset = f.column_id - min_column_id
        actual = header[offset] if 0 <= offset < len(header) else None
        actual_text = "" if actual is None else str(actual).strip()
        if actual_text != f.display_name:
            columns.append(f.column_id)
            problems.append(f"column {f.column_id} expected '{f.display_name}' got '{actual_text}'")
    if problems:
        raise SchemaMismatch(f"record '{schema.name}' header mismatch: " + "; ".join(problems), columns)
