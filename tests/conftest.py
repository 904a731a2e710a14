# Shared pytest fixtures
from __future__ import annotations

import tempfile
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from pathlib import Path

import pytest

from sheet_mapper.models.field_schema import FieldSchema, FieldType, RecordSchema


@dataclass
class Contact:
    name: str | None = None
    phone_number: int | None = None
    price_amount: Decimal | None = None
    date_time: datetime | None = None
    quantity: float | None = None
    active: bool | None = None
    visits: int | None = None


CONTACT_SCHEMA = RecordSchema.of(
    "Contact",
    [
        FieldSchema("name", "Name", 1, FieldType.STRING),
        FieldSchema("phone_number", "Number", 2, FieldType.PHONE_NUMBER),
        FieldSchema("price_amount", "Price Amount", 3, FieldType.CURRENCY),
        FieldSchema("date_time", "Date", 4, FieldType.DATE_TIME),
        FieldSchema("quantity", "Quantity", 5, FieldType.NUMBER),
        FieldSchema("active", "Active", 6, FieldType.BOOLEAN),
        FieldSchema("visits", "Visits", 7, FieldType.INTEGER),
    ],
    factory=Contact,
)

CONTACT_HEADER = ["Name", "Number", "Price Amount", "Date", "Quantity", "Active", "Visits"]


@pytest.fixture()
def contact_schema() -> RecordSchema:
    return CONTACT_SCHEMA


@pytest.fixture()
def contact_type() -> type:
    return Contact


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """tab_name: Contacts
header_row: 1
min_column_id: 1
strict: false
records:
  Contact:
    fields:
      - {attribute: name, display_name: Name, column_id: 1, field_type: String}
      - {attribute: phone_number, display_name: Number, column_id: 2, field_type: PhoneNumber}
      - {attribute: price_amount, display_name: Price Amount, column_id: 3, field_type: Currency}
      - {attribute: date_time, display_name: Date, column_id: 4, field_type: DateTime}
      - {attribute: quantity, display_name: Quantity, column_id: 5, field_type: Number}
      - {attribute: active, display_name: Active, column_id: 6, field_type: Boolean}
      - {attribute: visits, display_name: Visits, column_id: 7, field_type: Integer}
  Order:
    tab_name: Orders
    fields:
      - {attribute: order_id, display_name: Order, column_id: 1, field_type: Integer}
      - attribute: total
        display_name: Total
        column_id: 2
        field_type: Currency
        format_pattern: "#,##0.00 [$EUR]"
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "records.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def sample_csv_text() -> str:
    return (
        "Name,Number,Price Amount,Date,Quantity,Active,Visits\n"
        'Alice,+1(703)111-2222,"$1,234.50",44941.4375,2.5,TRUE,3\n'
        "Bob,(703)111-3333\n"
        ",,,,,,\n"
        'Carol,,"$10.00",,,maybe,\n'
    )


@pytest.fixture()
def write_csv(temp_workdir: Path, sample_csv_text: str) -> Path:
    path = temp_workdir / "data" / "contacts.csv"
    path.write_text(sample_csv_text, encoding="utf-8")
    return path
