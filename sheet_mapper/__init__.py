"""sheet-mapper: spreadsheet range notation and typed record marshaling."""

from .models import (
    CellValue,
    FieldSchema,
    FieldType,
    RangeAddress,
    RecordSchema,
    UnsupportedFieldType,
    integer_to_letters,
    letters_to_integer,
)
from .services import (
    FieldParseError,
    InvalidRangeFormat,
    SchemaMismatch,
    populate,
    to_cell_value,
    to_row_cells,
)

__version__ = "0.1.0"

__all__ = [
    "CellValue",
    "FieldParseError",
    "FieldSchema",
    "FieldType",
    "InvalidRangeFormat",
    "RangeAddress",
    "RecordSchema",
    "SchemaMismatch",
    "UnsupportedFieldType",
    "integer_to_letters",
    "letters_to_integer",
    "populate",
    "to_cell_value",
    "to_row_cells",
]
