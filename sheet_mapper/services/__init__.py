"""Range parsing, record marshaling and batch conversion services."""

from .marshaler import (
    FieldParseError,
    SchemaMismatch,
    header_row,
    parse_field,
    populate,
    to_cell_value,
    to_row_cells,
    validate_header,
)
from .range_parser import (
    InvalidRangeFormat,
    is_valid_letter_notation,
    is_valid_numeric_notation,
    parse_letter_notation,
    parse_numeric_notation,
    parse_range,
)

__all__ = [
    # Ranges
    "InvalidRangeFormat",
    "is_valid_letter_notation",
    "is_valid_numeric_notation",
    "parse_letter_notation",
    "parse_numeric_notation",
    "parse_range",
    # Marshaling
    "FieldParseError",
    "SchemaMismatch",
    "header_row",
    "parse_field",
    "populate",
    "to_cell_value",
    "to_row_cells",
    "validate_header",
]
