"""Domain models for sheet-mapper.

Range addressing, field metadata, cell payloads and conversion results.
"""

from .cell_value import CellValue, CellValueKind, FormatType, NumberFormat
from .conversion_result import ConversionResult
from .error_record import ErrorRecord
from .field_schema import (
    DEFAULT_FORMAT_PATTERNS,
    FieldSchema,
    FieldType,
    MarshalError,
    RecordSchema,
    UnsupportedFieldType,
)
from .row_data import RowData
from .sheet_range import RangeAddress, integer_to_letters, letters_to_integer

__all__ = [
    # Ranges
    "RangeAddress",
    "integer_to_letters",
    "letters_to_integer",
    # Field metadata
    "DEFAULT_FORMAT_PATTERNS",
    "FieldSchema",
    "FieldType",
    "MarshalError",
    "RecordSchema",
    "UnsupportedFieldType",
    # Cells
    "CellValue",
    "CellValueKind",
    "FormatType",
    "NumberFormat",
    # Results
    "ConversionResult",
    "ErrorRecord",
    "RowData",
]
