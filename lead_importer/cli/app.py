from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from ..excel.reader import ParseError, parse_workbook
from ..logging.error_log import ErrorLogBuffer
from ..logging.init import log_summary, setup_logging
from ..models.error_record import ErrorRecord
from ..models.import_result import ImportResult
from ..services.commit import JsonLinesCommitter
from ..services.field_mapper import MappingError, ValidationError
from ..services.operators import FileOperatorDirectory
from ..services.pipeline import ImportPipeline
from ..services.state_machine import (
    AssignmentChosen,
    Confirmed,
    MappingChanged,
    MappingConfirmed,
)
from ..services.summary import render_summary_line

"""CLI entrypoint: drives one import session from a config file.

Flow:
- Load .env, then the YAML config (--config > LEAD_IMPORT_CONFIG > config/import.yml)
- Open the pipeline (operator list), load the workbook
- Apply the configured column mapping on top of the auto-mapping
- Choose the assignment, show the preview, confirm and commit
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_IMPORT_FAILED = 2

CONFIG_ENV_VAR = "LEAD_IMPORT_CONFIG"


def _load_env_file(path: Path, override: bool = False) -> None:
    """Load .env using python-dotenv (existing environment wins by default)."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Spreadsheet -> CRM lead importer")
    p.add_argument("--config", help=f"Config file (default: ${CONFIG_ENV_VAR} or {DEFAULT_CONFIG_PATH})")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print sheet header & first rows then exit")
    p.add_argument("--dry-run", action="store_true", help="Stop at the preview step, commit nothing")
    return p.parse_args(argv)


def _inspect_data(source: Path) -> int:
    try:
        sheet = parse_workbook(source.read_bytes())
    except ParseError as e:
        print(f"inspect: {e}")
        return EXIT_IMPORT_FAILED
    print(f"FILE: {source.name}")
    print(f"  SHEET: {sheet.sheet_name} cols={list(sheet.columns)} rows={len(sheet.rows)}")
    for row in sheet.rows[:3]:
        print(f"    row {row.row_number}: {dict(row.values)}")
    return EXIT_SUCCESS


def _log_preview(logger, result: ImportResult) -> None:
    for record in result.preview():
        logger.info(
            f"preview: name={record.name} phone={record.phone} "
            f"email={record.email or '-'} city={record.city or '-'}"
        )
    remaining = result.imported_count - len(result.preview())
    if remaining > 0:
        logger.info(f"preview: ... and {remaining} more")


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # only read sys.argv when no list was given (tests call main([]))
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"))

    config_path = Path(args.config or os.getenv(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH)
    try:
        cfg = load_config(config_path)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.debug:
        for h in logger.handlers:
            h.setLevel("DEBUG")
        logger.setLevel("DEBUG")
        logger.debug("debug mode enabled")

    source = Path(cfg.source_file)
    if not source.is_file():
        logger.error(f"source file not found: {source}")
        return EXIT_FATAL

    if args.inspect_data:
        return _inspect_data(source)

    logger.info(f"Importing leads from: {source}")

    operators = FileOperatorDirectory(Path(cfg.operators_file)) if cfg.operators_file else None
    pipeline = ImportPipeline(JsonLinesCommitter(Path(cfg.output_file)), operators)
    error_log = ErrorLogBuffer(Path(cfg.logs_dir))

    pipeline.open()
    try:
        pipeline.load_file(source)
        for field_key, column in cfg.column_mapping.items():
            pipeline.dispatch(MappingChanged(field_key, column))
        pipeline.dispatch(MappingConfirmed())
        session = pipeline.dispatch(AssignmentChosen(cfg.assignment.mode, cfg.assignment.operator_id))
    except ParseError as e:
        return _fail(logger, error_log, pipeline, source, "PARSE_ERROR", f"parse: {e}")
    except ValidationError as e:
        return _fail(logger, error_log, pipeline, source, "VALIDATION_ERROR", f"validation: {e}")
    except MappingError as e:
        return _fail(logger, error_log, pipeline, source, "MAPPING_ERROR", f"mapping: {e}")

    result = session.result  # always set once preview is reached
    logger.info(f"mapping: {dict(session.mapping)}")
    _log_preview(logger, result)
    log_summary(render_summary_line(result, session.assignment).removeprefix("SUMMARY "))

    if args.dry_run:
        logger.info("dry run: nothing committed")
        pipeline.close()
        return EXIT_SUCCESS

    pipeline.dispatch(Confirmed())
    logger.info(f"committed {pipeline.committed_count} leads to {cfg.output_file}")
    pipeline.close()
    return EXIT_SUCCESS


def _fail(logger, error_log: ErrorLogBuffer, pipeline: ImportPipeline, source: Path, error_type: str, message: str) -> int:
    logger.error(message)
    error_log.append(
        ErrorRecord.create(
            file=source.name,
            step=pipeline.session.step.value,
            error_type=error_type,
            message=message,
        )
    )
    written = error_log.flush()
    if written is not None:
        logger.info(f"error log: {written}")
    pipeline.close()
    return EXIT_IMPORT_FAILED
