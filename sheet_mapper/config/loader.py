from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.field_schema import FieldSchema, RecordSchema, UnsupportedFieldType

"""Record configuration loader.

Responsibilities:
- Load the YAML record declarations (default config/records.yml)
- Validate them against the bundled JSON schema (config_schema.json)
- Apply defaults (tab_name="", header_row=1, min_column_id=1, strict=False)
- Build one RecordSchema per declared record; this is the single
  registration point for config-declared record types
"""

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "MapperConfig",
    "SCHEMA_PATH",
    "load_config",
]

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/records.yml")


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class MapperConfig:
    records: dict[str, RecordSchema]
    tab_name: str = ""  # default tab for records without their own
    header_row: int = 1  # 1-based row holding display names
    min_column_id: int = 1  # column id of the first cell in each row
    strict: bool = False  # missing trailing cells raise SchemaMismatch
    record_tabs: dict[str, str] = field(default_factory=dict)

    def record(self, name: str) -> RecordSchema:
        try:
            return self.records[name]
        except KeyError:
            known = ", ".join(sorted(self.records)) or "none"
            raise ConfigError(f"unknown record '{name}' (known: {known})") from None

    def tab_for(self, name: str) -> str:
        return self.record_tabs.get(name, self.tab_name)


def _validate_config_schema(data: Any) -> None:
    """Validate config data against the bundled JSON schema.

    Raises:
        ConfigError: if the schema file is missing or unreadable, or the
            data violates it (missing keys, wrong types, unknown keys)
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        location = "/".join(str(p) for p in e.absolute_path) or "<root>"
        raise ConfigError(f"config validation failed at {location}: {e.message}") from e


def _build_record(name: str, raw: dict[str, Any]) -> RecordSchema:
    try:
        fields = [
            FieldSchema(
                attribute=f["attribute"],
                display_name=f["display_name"],
                column_id=f["column_id"],
                field_type=f["field_type"],
                format_pattern=f.get("format_pattern"),
            )
            for f in raw["fields"]
        ]
        return RecordSchema.of(name, fields)
    except (UnsupportedFieldType, ValueError) as e:
        raise ConfigError(f"record '{name}': {e}") from e


def load_config(path: Path) -> MapperConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e

    _validate_config_schema(data)

    records = {name: _build_record(name, raw) for name, raw in data["records"].items()}
    record_tabs = {
        name: raw["tab_name"] for name, raw in data["records"].items() if "tab_name" in raw
    }
    return MapperConfig(
        records=records,
        tab_name=data.get("tab_name", ""),
        header_row=data.get("header_row", 1),
        min_column_id=data.get("min_column_id", 1),
        strict=data.get("strict", False),
        record_tabs=record_tabs,
    )
