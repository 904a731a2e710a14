from __future__ import annotations

import re
from datetime import date, datetime, timedelta
from decimal import Decimal

"""Value conversion helpers for sheet cells.

- phone numbers: strip the US country code and formatting characters
- currency: strip symbols and thousands separators, parse as Decimal
- booleans: common truthy / falsy tokens
- dates: spreadsheet serial numbers (days since 1899-12-30, the fractional
  part being the time of day)

All parse helpers raise ValueError on malformed input; the marshaler turns
that into FieldParseError with the column context attached.
"""

__all__ = [
    "SERIAL_EPOCH",
    "datetime_to_serial",
    "parse_boolean",
    "parse_currency",
    "remove_extra_phone_characters",
    "remove_us_country_code",
    "serial_to_datetime",
]

SERIAL_EPOCH = datetime(1899, 12, 30)
_DAY = timedelta(days=1)
_MS_PER_DAY = 86_400_000

_NON_DIGIT_RE = re.compile(r"\D")
# currency symbols, thousands separators and whitespace; nothing else is dropped
_CURRENCY_STRIP_RE = re.compile(r"[\s,$€£¥₹₩₽¢]")
_AMOUNT_RE = re.compile(r"-?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)")

TRUE_TOKENS = frozenset({"true", "t", "yes", "y", "1", "on"})
FALSE_TOKENS = frozenset({"false", "f", "no", "n", "0", "off"})


def remove_extra_phone_characters(value: str) -> str:
    """Keep digits only: "(703)111-2222" -> "7031112222"."""
    return _NON_DIGIT_RE.sub("", value or "")


def remove_us_country_code(value: str) -> str:
    """Strip a leading +1 / 1 country code and all formatting characters.

    A bare leading 1 is only treated as the country code when the number has
    eleven digits, so a ten digit local number starting with 1 is kept.
    """
    text = (value or "").strip()
    if text.startswith("+1"):
        return remove_extra_phone_characters(text[2:])
    digits = remove_extra_phone_characters(text)
    if len(digits) == 11 and digits.startswith("1"):
        return digits[1:]
    return digits


def parse_currency(value: str) -> Decimal:
    """Parse "$1,234.50", "(12.00)" or "-3 €" into a Decimal."""
    text = value.strip()
    negative = text.startswith("(") and text.endswith(")")
    if negative:
        text = text[1:-1]
    cleaned = _CURRENCY_STRIP_RE.sub("", text)
    if not _AMOUNT_RE.fullmatch(cleaned):
        raise ValueError(f"invalid currency amount '{value}'")
    amount = Decimal(cleaned)
    return -amount if negative else amount


def parse_boolean(value: str) -> bool:
    token = value.strip().lower()
    if token in TRUE_TOKENS:
        return True
    if token in FALSE_TOKENS:
        return False
    raise ValueError(f"not a boolean token: '{value}'")


def serial_to_datetime(serial: float) -> datetime:
    """Convert a spreadsheet serial number to a naive datetime.

    The result is rounded to the millisecond.
    """
    return SERIAL_EPOCH + timedelta(milliseconds=round(serial * _MS_PER_DAY))


def datetime_to_serial(value: datetime | date) -> float:
    """Convert a datetime (a plain date counts as midnight) to a serial number.

    Timezone-aware values are converted using their wall-clock time.
    """
    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)
    if value.tzinfo is not None:
        value = value.replace(tzinfo=None)
    return (value - SERIAL_EPOCH) / _DAY
