from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from ..logging.error_log import ErrorLogBuffer
from ..logging.init import log_summary, setup_logging
from ..services.converter import ConversionError, convert_rows
from ..services.marshaler import FieldParseError, SchemaMismatch
from ..services.range_parser import InvalidRangeFormat, parse_range
from ..services.summary import render_summary_line
from ..sheet.reader import SheetHeaderError, UnsupportedSourceError, read_sheet

"""CLI entrypoint.

Commands:
- range VALUE: parse a range in either notation and print both renderings
- convert INPUT --record NAME: convert a CSV / XLSX export into JSON Lines of
  cell payloads, one line per parsed row, then log a SUMMARY line

Config path resolution: --config, then $SHEET_MAPPER_CONFIG (after loading
.env), then config/records.yml.
"""

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_PARTIAL_FAILURE = 2

CONFIG_ENV_VAR = "SHEET_MAPPER_CONFIG"


def _load_env_file(path: Path, override: bool = False) -> None:
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="sheet-mapper", description="Spreadsheet range and record mapping tools")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="command", required=True)

    r = sub.add_parser("range", help="Parse a range and print both notations")
    r.add_argument("value", help="Range in letter (Sheet1!A1:B2) or numeric (Sheet1!R1C1:R2C2) notation")

    c = sub.add_parser("convert", help="Convert sheet rows into records and cell payloads")
    c.add_argument("input", type=Path, help="CSV or XLSX export")
    c.add_argument("--record", required=True, help="Record name declared in the config")
    c.add_argument("--config", type=Path, default=None, help="Record config YAML")
    c.add_argument("--tab", default=None, help="Tab name (overrides config)")
    c.add_argument("--output", type=Path, default=None, help="Write JSON Lines here instead of stdout")
    c.add_argument("--fail-fast", action="store_true", help="Stop at the first bad row")
    return p.parse_args(argv)


def _run_range(value: str) -> int:
    logger = setup_logging()
    try:
        address = parse_range(value)
    except InvalidRangeFormat as e:
        logger.error(f"range: {e}")
        return EXIT_FATAL
    end = (
        f"{address.end_column},{address.end_row}"
        if address.end_column is not None or address.end_row is not None
        else "-"
    )
    print(
        f"tab={address.tab_name or '-'} "
        f"start={address.start_column},{address.start_row} "
        f"end={end} "
        f"a1={address.letter_notation or '-'} "
        f"r1c1={address.numeric_notation}"
    )
    return EXIT_SUCCESS_ALL


def _resolve_config_path(arg: Path | None) -> Path:
    if arg is not None:
        return arg
    env = os.getenv(CONFIG_ENV_VAR)
    return Path(env) if env else DEFAULT_CONFIG_PATH


def _run_convert(args: argparse.Namespace) -> int:
    logger = setup_logging()
    config_path = _resolve_config_path(args.config)
    try:
        cfg = load_config(config_path)
        schema = cfg.record(args.record)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if not args.input.exists():
        logger.error(f"input not found: {args.input}")
        return EXIT_FATAL

    tab = args.tab if args.tab is not None else cfg.tab_for(args.record)
    try:
        sheet = read_sheet(args.input, tab_name=tab or None, header_row=cfg.header_row)
    except (SheetHeaderError, UnsupportedSourceError) as e:
        logger.error(f"input: {e}")
        return EXIT_FATAL
    if tab and not sheet.tab_name:
        sheet.tab_name = tab

    logger.info(f"Converting {len(sheet.rows)} rows from: {args.input} as {schema.name}")
    try:
        result = convert_rows(
            schema,
            sheet,
            source=args.input.name,
            min_column_id=cfg.min_column_id,
            strict=cfg.strict,
            fail_fast=args.fail_fast,
            error_buffer=ErrorLogBuffer(),
        )
    except ConversionError as e:
        logger.error(f"convert: {e}")
        return EXIT_FATAL
    except (FieldParseError, SchemaMismatch) as e:
        logger.error(f"convert (fail-fast): {e}")
        return EXIT_FATAL

    lines = [json.dumps(row.to_dict(), ensure_ascii=False) for row in result.rows]
    if args.output is not None:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text("".join(line + "\n" for line in lines), encoding="utf-8")
        logger.info(f"wrote {len(lines)} rows to {args.output}")
    else:
        for line in lines:
            print(line)

    # render_summary_line includes the label; log_summary adds it again
    log_summary(render_summary_line(result)[len("SUMMARY "):])

    if result.has_failures:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    # Only read sys.argv when argv is None; an explicit [] must stay empty
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    setup_logging(debug=args.debug)
    _load_env_file(Path(".env"))

    if args.command == "range":
        return _run_range(args.value)
    return _run_convert(args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
