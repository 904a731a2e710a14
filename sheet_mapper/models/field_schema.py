from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import MISSING, dataclass, field, fields as dataclass_fields, is_dataclass
from enum import Enum
from typing import Any

"""Declarative field metadata for record types.

A FieldSchema describes one record field: which attribute it fills, which
sheet column it lives in, its semantic type and the number format used when
writing it back. A RecordSchema is the ordered, read-only collection of
FieldSchema entries for one record type, built once at a single registration
point (a module-level constant or the YAML config loader).
"""

__all__ = [
    "DEFAULT_FORMAT_PATTERNS",
    "FieldSchema",
    "FieldType",
    "MarshalError",
    "RecordSchema",
    "UnsupportedFieldType",
    "read_field_value",
]


class MarshalError(Exception):
    """Base class for record marshaling errors."""


class UnsupportedFieldType(MarshalError):
    """Raised when a field type is outside the supported set."""

    def __init__(self, field_type: Any) -> None:
        self.field_type = field_type
        super().__init__(f"{field_type} is not a supported field type")


class FieldType(Enum):
    STRING = "String"
    NUMBER = "Number"
    INTEGER = "Integer"
    CURRENCY = "Currency"
    PHONE_NUMBER = "PhoneNumber"
    DATE_TIME = "DateTime"
    BOOLEAN = "Boolean"

    @classmethod
    def parse(cls, value: str | FieldType) -> FieldType:
        """Resolve a declared type name (e.g. "PhoneNumber") to a FieldType.

        Raises:
            UnsupportedFieldType: for any name outside the enumerated set
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnsupportedFieldType(value) from None


# Google Sheets number format patterns applied when a field has no override
DEFAULT_FORMAT_PATTERNS: dict[FieldType, str] = {
    FieldType.STRING: "",
    FieldType.NUMBER: "#,##0.00",
    FieldType.PHONE_NUMBER: "(###) ###-####",
    FieldType.DATE_TIME: "M/d/yyyy H:mm:ss",
    FieldType.CURRENCY: "$#,##0.00",
    FieldType.BOOLEAN: "#",
    FieldType.INTEGER: "0",
}


@dataclass(frozen=True)
class FieldSchema:
    """Metadata for one record field.

    display_name must match the sheet header cell exactly. column_id is
    1-based (column A is 1).
    """
    attribute: str  # record attribute / mapping key
    display_name: str
    column_id: int
    field_type: FieldType
    format_pattern: str | None = None  # None -> type default

    def __post_init__(self) -> None:
        if self.column_id < 1:
            raise ValueError(f"field '{self.attribute}': column_id must be >= 1, got {self.column_id}")
        if not isinstance(self.field_type, FieldType):
            object.__setattr__(self, "field_type", FieldType.parse(self.field_type))
        if self.format_pattern is None:
            object.__setattr__(self, "format_pattern", DEFAULT_FORMAT_PATTERNS[self.field_type])


@dataclass(frozen=True)
class RecordSchema:
    """Ordered field schemas for one record type.

    Fields are kept sorted by column_id so header and row generation are
    deterministic. factory builds a record from keyword values; it is called
    with only the fields that were populated, so a dataclass factory must
    give every init field a default.
    """
    name: str
    fields: tuple[FieldSchema, ...]
    factory: Callable[..., Any] = dict
    _by_attribute: dict[str, FieldSchema] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        ordered = tuple(sorted(self.fields, key=lambda f: f.column_id))
        if not ordered:
            raise ValueError(f"record '{self.name}' declares no fields")

        seen_columns: dict[int, str] = {}
        by_attribute: dict[str, FieldSchema] = {}
        for f in ordered:
            if f.column_id in seen_columns:
                raise ValueError(
                    f"record '{self.name}': column {f.column_id} used by both "
                    f"'{seen_columns[f.column_id]}' and '{f.attribute}'"
                )
            if f.attribute in by_attribute:
                raise ValueError(f"record '{self.name}': duplicate attribute '{f.attribute}'")
            seen_columns[f.column_id] = f.attribute
            by_attribute[f.attribute] = f

        if isinstance(self.factory, type) and is_dataclass(self.factory):
            self._check_dataclass_factory(by_attribute)

        object.__setattr__(self, "fields", ordered)
        object.__setattr__(self, "_by_attribute", by_attribute)

    def _check_dataclass_factory(self, by_attribute: dict[str, FieldSchema]) -> None:
        # populate() passes only the fields it could fill, so every init field needs a default
        init_fields = {f.name: f for f in dataclass_fields(self.factory) if f.init}
        for attribute in by_attribute:
            if attribute not in init_fields:
                raise ValueError(
                    f"record '{self.name}': factory {self.factory.__name__} has no field '{attribute}'"
                )
        for f in init_fields.values():
            if f.default is MISSING and f.default_factory is MISSING:
                raise ValueError(
                    f"record '{self.name}': factory field '{f.name}' needs a default"
                )

    @classmethod
    def of(cls, name: str, fields: Iterable[FieldSchema], factory: Callable[..., Any] = dict) -> RecordSchema:
        return cls(name=name, fields=tuple(fields), factory=factory)

    @property
    def min_column_id(self) -> int:
        return self.fields[0].column_id

    @property
    def max_column_id(self) -> int:
        return self.fields[-1].column_id

    def header(self) -> list[str]:
        return [f.display_name for f in self.fields]

    def field_for(self, attribute: str) -> FieldSchema:
        try:
            return self._by_attribute[attribute]
        except KeyError:
            raise KeyError(f"record '{self.name}' has no field '{attribute}'") from None

    def column_id(self, attribute: str) -> int:
        return self.field_for(attribute).column_id

    def value_of(self, record: Any, schema_field: FieldSchema) -> Any:
        return read_field_value(record, schema_field)


def read_field_value(record: Any, schema_field: FieldSchema) -> Any:
    """Read a field value from a mapping record or an attribute record."""
    if isinstance(record, Mapping):
        return record.get(schema_field.attribute)
    return getattr(record, schema_field.attribute, None)
