from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from roster_import.config.loader import ConfigError, load_config_or_default
from roster_import.logging.error_log import ErrorLogBuffer
from roster_import.logging.init import enable_debug, log_summary, setup_logging
from roster_import.mappings.entities import ENTITY_SPECS, UnknownEntityTypeError, get_entity_spec
from roster_import.services.batch import run_import
from roster_import.services.dry_run import DryRunCreator
from roster_import.services.normalizer import resolve_fields
from roster_import.services.summary import render_summary_line
from roster_import.services.templates import generate_template
from roster_import.sources.reader import read_rows, uploaded_files

"""CLI entrypoint.

    python -m roster_import.cli parents parents.csv more_parents.xlsx

Reads each file, runs the import pipeline against a dry-run create
capability and prints a SUMMARY line. Exit codes:

- 0: every row of every file was created
- 2: partial failure (skipped rows or unreadable files)
- 1: fatal (bad config, unknown entity type, no input)
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1

MAX_LOGGED_ERRORS = 50


def _load_env_file(path: Path) -> None:
    if path.exists():
        load_dotenv(dotenv_path=path, override=False)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="roster-import",
        description="Bulk import parents, drivers, vehicles or staff from CSV/Excel files",
    )
    p.add_argument(
        "entity_type", nargs="?", help=f"Record type to import ({', '.join(sorted(ENTITY_SPECS))})"
    )
    p.add_argument("files", nargs="*", type=Path, help="CSV or Excel files")
    p.add_argument("--config", type=Path, default=None, help="Config file (default: config/import.yml if present)")
    p.add_argument("--output", type=Path, default=None, help="Append created records as JSON Lines to this file")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print resolved fields of the first rows and exit")
    p.add_argument("--template", action="store_true", help="Print a CSV template for the entity type and exit")
    return p.parse_args(argv)


def _inspect_data(entity_type: str, files: list[Path], aliases: dict) -> int:
    spec = get_entity_spec(entity_type, aliases)
    for f in files:
        print(f"FILE: {f.name}")
        try:
            rows = read_rows(f)
        except Exception as e:
            print(f"  read_error: {e}")
            continue
        if rows:
            print(f"  headers={list(rows[0].values.keys())}")
        for row in rows[:3]:
            resolved = {k: v for k, v in resolve_fields(row, spec).items() if v is not None}
            print(f"  row {row.row_number}: {resolved}")
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # Only read sys.argv when no argument list is given ([] is a valid list)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"))

    if args.debug:
        enable_debug()
        logger.debug("debug mode enabled")

    try:
        cfg = load_config_or_default(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    entity_type = args.entity_type or cfg.entity_type
    if entity_type is None:
        logger.error("no entity type given (argument or entity_type in config)")
        return EXIT_FATAL

    try:
        if args.template:
            sys.stdout.write(generate_template(entity_type, cfg.school_id))
            return EXIT_SUCCESS_ALL

        if not args.files:
            logger.error("no input files given")
            return EXIT_FATAL

        if args.inspect_data:
            return _inspect_data(entity_type, args.files, cfg.aliases)

        error_log = ErrorLogBuffer(os.getenv("ROSTER_ERROR_LOG_DIR", cfg.error_log_dir))
        report = run_import(
            uploaded_files(args.files),
            entity_type,
            DryRunCreator(args.output),
            config=cfg,
            error_log=error_log,
            show_progress=True,
        )
    except UnknownEntityTypeError as e:
        logger.error(str(e))
        return EXIT_FATAL

    for message in report.all_errors[:MAX_LOGGED_ERRORS]:
        logger.warning(message)
    if len(report.all_errors) > MAX_LOGGED_ERRORS:
        logger.warning(f"... {len(report.all_errors) - MAX_LOGGED_ERRORS} more errors")

    log_path = error_log.flush()
    if log_path is not None:
        logger.info(f"error log written to {log_path}")

    # log_summary adds the "SUMMARY " label itself
    log_summary(render_summary_line(report)[len("SUMMARY "):])

    if report.has_failures:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
