from __future__ import annotations

from dataclasses import dataclass

import pytest

from sheet_mapper.models.field_schema import (
    DEFAULT_FORMAT_PATTERNS,
    FieldSchema,
    FieldType,
    RecordSchema,
    UnsupportedFieldType,
)
from sheet_mapper.services.marshaler import populate


@pytest.mark.parametrize(
    "field_type,pattern",
    [
        (FieldType.STRING, ""),
        (FieldType.NUMBER, "#,##0.00"),
        (FieldType.PHONE_NUMBER, "(###) ###-####"),
        (FieldType.DATE_TIME, "M/d/yyyy H:mm:ss"),
        (FieldType.CURRENCY, "$#,##0.00"),
        (FieldType.BOOLEAN, "#"),
        (FieldType.INTEGER, "0"),
    ],
)
def test_default_format_patterns(field_type, pattern):
    assert DEFAULT_FORMAT_PATTERNS[field_type] == pattern
    assert FieldSchema("x", "X", 1, field_type).format_pattern == pattern


def test_format_pattern_override():
    f = FieldSchema("total", "Total", 2, FieldType.CURRENCY, format_pattern="#,##0.00 [$EUR]")
    assert f.format_pattern == "#,##0.00 [$EUR]"


def test_field_type_names_resolve():
    assert FieldType.parse("PhoneNumber") is FieldType.PHONE_NUMBER
    assert FieldType.parse(FieldType.BOOLEAN) is FieldType.BOOLEAN
    assert FieldSchema("d", "Date", 1, "DateTime").field_type is FieldType.DATE_TIME  # type: ignore[arg-type]


def test_unknown_field_type_is_unsupported():
    with pytest.raises(UnsupportedFieldType) as e:
        FieldType.parse("Percent")
    assert e.value.field_type == "Percent"
    with pytest.raises(UnsupportedFieldType):
        FieldSchema("p", "Pct", 1, "Percent")  # type: ignore[arg-type]


def test_column_id_must_be_positive():
    with pytest.raises(ValueError):
        FieldSchema("a", "A", 0, FieldType.STRING)


def test_record_schema_orders_fields_by_column_id():
    schema = RecordSchema.of(
        "R",
        [
            FieldSchema("c", "C", 3, FieldType.STRING),
            FieldSchema("a", "A", 1, FieldType.STRING),
            FieldSchema("b", "B", 2, FieldType.STRING),
        ],
    )
    assert [f.column_id for f in schema.fields] == [1, 2, 3]
    assert schema.header() == ["A", "B", "C"]
    assert schema.min_column_id == 1
    assert schema.max_column_id == 3


def test_record_schema_rejects_duplicate_columns():
    with pytest.raises(ValueError, match="column 1 used by both"):
        RecordSchema.of("R", [FieldSchema("a", "A", 1, FieldType.STRING), FieldSchema("b", "B", 1, FieldType.STRING)])


def test_record_schema_rejects_duplicate_attributes():
    with pytest.raises(ValueError, match="duplicate attribute"):
        RecordSchema.of("R", [FieldSchema("a", "A", 1, FieldType.STRING), FieldSchema("a", "B", 2, FieldType.STRING)])


def test_record_schema_rejects_empty_field_list():
    with pytest.raises(ValueError):
        RecordSchema.of("R", [])


def test_dataclass_factory_fields_need_defaults():
    @dataclass
    class Strict:
        a: str
        b: str | None = None

    with pytest.raises(ValueError, match="factory field 'a' needs a default"):
        RecordSchema.of("R", [FieldSchema("a", "A", 1, FieldType.STRING)], factory=Strict)


def test_dataclass_factory_must_declare_every_attribute():
    @dataclass
    class Small:
        a: str | None = None

    with pytest.raises(ValueError, match="has no field 'b'"):
        RecordSchema.of(
            "R",
            [FieldSchema("a", "A", 1, FieldType.STRING), FieldSchema("b", "B", 2, FieldType.STRING)],
            factory=Small,
        )


def test_dataclass_factory_with_defaults_builds_partial_records():
    @dataclass
    class Loose:
        a: str | None = None
        b: str | None = None

    schema = RecordSchema.of(
        "R",
        [FieldSchema("a", "A", 1, FieldType.STRING), FieldSchema("b", "B", 2, FieldType.STRING)],
        factory=Loose,
    )
    assert populate(schema, ["x"]) == Loose(a="x")


def test_column_id_lookup(contact_schema):
    assert contact_schema.column_id("price_amount") == 3
    assert contact_schema.field_for("name").display_name == "Name"
    with pytest.raises(KeyError):
        contact_schema.column_id("missing")


def test_value_of_reads_mappings_and_attributes(contact_schema, contact_type):
    name_field = contact_schema.field_for("name")
    assert contact_schema.value_of({"name": "Alice"}, name_field) == "Alice"
    assert contact_schema.value_of({}, name_field) is None
    assert contact_schema.value_of(contact_type(name="Bob"), name_field) == "Bob"


def test_schemas_are_hashable_and_frozen(contact_schema):
    f = contact_schema.fields[0]
    assert hash(f) == hash(FieldSchema("name", "Name", 1, FieldType.STRING))
    with pytest.raises(AttributeError):
        f.column_id = 9  # type: ignore[misc]
