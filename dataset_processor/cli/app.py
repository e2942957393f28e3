from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import ConfigError, resolve_config
from ..logging.init import log_summary, set_debug, setup_logging
from ..models.row_data import RowData
from ..services.orchestrator import PROGRAMS, ProcessingError, process_program
from ..services.summary import render_summary_line
from ..tabular.reader import (
    REQUIRED_COLUMNS,
    MissingColumnsError,
    TableReadError,
    normalize_table,
    read_program_rows,
    read_table,
)
from . import prompts

"""CLI entrypoint.

Flow:
- Load .env, then the YAML config
- Collect rows from ``--input`` (CSV / XLSX) or interactive prompts
- Run the program, print the report, emit the SUMMARY line

Exit codes: 0 all records accepted, 2 some records rejected or failed, 1 fatal.
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1


def _load_env_file(path: Path, override: bool = False) -> None:
    """Load .env via python-dotenv; existing environment variables win unless ``override``."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="dataset-processor",
        description="Collect a small dataset, run reducers over it and print a report",
    )
    p.add_argument("program", choices=PROGRAMS, help="Exercise to run")
    p.add_argument("--input", type=Path, default=None, help="CSV / XLSX input file (default: interactive prompts)")
    p.add_argument("--config", type=Path, default=None, help="YAML config file (default: config/processor.yml)")
    p.add_argument("--payment", default=None, help="Payment method for the cart program in file mode")
    p.add_argument("--inspect-data", action="store_true", help="Print input columns & first rows then exit")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def _inspect_data(path: Path, program: str) -> int:
    try:
        df = read_table(path)
    except TableReadError as e:
        print(f"inspect: {e}")
        return EXIT_FATAL
    columns = [str(c).strip().lower() for c in df.columns]
    missing = [c for c in REQUIRED_COLUMNS[program] if c not in columns]
    print(f"FILE: {path.name} rows={len(df)} cols={columns}")
    if missing:
        print(f"  missing_columns={missing}")
    for row in normalize_table(df.head(3)):
        print(f"  row {row.row_number}: {row.values}")
    return EXIT_SUCCESS_ALL


def _collect_interactive(program: str) -> tuple[list[RowData] | None, str | None]:
    if program == "grades":
        return prompts.collect_students(input), None
    if program == "cart":
        return prompts.collect_cart(input)
    if program == "devices":
        return prompts.collect_devices(input), None
    # collections は設定のマッピングを使う (入力なし)
    return None, None


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみシステム引数を読む ([] はテストから明示的に渡される)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)

    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    _load_env_file(Path(".env"))
    try:
        cfg = resolve_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.inspect_data:
        if args.input is None:
            logger.error("inspect: --input is required")
            return EXIT_FATAL
        return _inspect_data(args.input, args.program)

    rows: list[RowData] | None
    payment = args.payment
    if args.input is not None:
        try:
            rows = read_program_rows(args.input, args.program)
        except (TableReadError, MissingColumnsError) as e:
            logger.error(f"input: {e}")
            return EXIT_FATAL
        logger.info(f"Processing {args.program} from: {args.input}")
    else:
        try:
            rows, payment = _collect_interactive(args.program)
        except EOFError:
            logger.error("input: unexpected end of input")
            return EXIT_FATAL
        print()

    try:
        result = process_program(args.program, rows, cfg, payment_method=payment)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    for line in result.report_lines:
        print(line)
    print()

    summary_line = render_summary_line(result)
    log_summary(summary_line[len("SUMMARY "):])

    if result.has_failures:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL
