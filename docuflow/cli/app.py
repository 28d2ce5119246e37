from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import load_config, resolve_config_path
from ..exceptions import ConfigError, DocuFlowError, ProcessingError
from ..excel.reader import read_workbook
from ..logging.init import log_summary, setup_logging
from ..models.config_models import DocuFlowConfig
from ..models.processing_result import DocumentKind
from ..pdf.extractor import extract_pages
from ..services.column_inference import select_sheet
from ..services.orchestrator import process_all, scan_documents
from ..services.opening_balance import infer_workbook_import
from ..services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load .env (override mode) so DOCUFLOW_CONFIG and friends can be set there
- Load and validate the YAML config
- Process every PDF / spreadsheet in source_directory, or just describe them
  with --inspect-data
- Print the SUMMARY line and exit with 0 (all ok), 2 (some failed) or 1 (fatal)
"""

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_PARTIAL_FAILURE = 2


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env using python-dotenv; a missing file is not an error."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="docuflow",
        description="Reconstruct PDF text and import opening-balance spreadsheets",
    )
    p.add_argument("--config", help="Path to the YAML config (default: config/docuflow.yml)")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument(
        "--inspect-data",
        action="store_true",
        help="Print detected sheets, header rows and column roles, then exit",
    )
    return p.parse_args(argv)


def _inspect_data(cfg: DocuFlowConfig) -> int:
    try:
        paths = scan_documents(Path(cfg.source_directory))
    except ProcessingError as e:
        print(f"inspect: {e}")
        return EXIT_FATAL
    if not paths:
        print("inspect: no documents")
        return EXIT_SUCCESS_ALL
    for path in paths:
        print(f"FILE: {path.name}")
        try:
            if DocumentKind.for_path(path) is DocumentKind.PDF:
                pages = extract_pages(path)
                print(f"  pages={len(pages)} fragments={[len(p) for p in pages]}")
                continue
            workbook = read_workbook(path)
        except DocuFlowError as e:
            print(f"  read_error: {e}")
            continue
        candidate = select_sheet(
            workbook,
            scan_rows=cfg.excel.header_scan_rows,
            preferred_keyword=cfg.excel.preferred_sheet_keyword,
        )
        if candidate is None:
            print("  no non-empty sheets")
            continue
        result = infer_workbook_import(workbook, cfg.excel)
        print(
            f"  SHEET: {candidate.sheet_name} header_row={candidate.header_index} "
            f"score={candidate.score} columns={result.columns.to_dict()}"
        )
        print(f"    entries={len(result.entries)} skipped={result.skipped}")
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # Only read sys.argv when called without arguments (tests pass [])
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    if args.debug:
        for h in logger.handlers:
            h.setLevel(logging.DEBUG)
        logger.setLevel(logging.DEBUG)
        logger.debug("debug mode enabled")

    config_path = resolve_config_path(args.config)
    try:
        cfg = load_config(config_path)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    directory = Path(cfg.source_directory)
    if not directory.exists():
        logger.error(f"directory not found: {directory}")
        return EXIT_FATAL

    if args.inspect_data:
        return _inspect_data(cfg)

    logger.info(f"Processing documents from: {directory}")
    try:
        result = process_all(cfg)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    # render_summary_line includes the label; log_summary adds it again
    log_summary(render_summary_line(result).removeprefix("SUMMARY "))

    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL
