from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from pathlib import Path

from ..exceptions import DocumentReadError, LibraryUnavailableError, ProcessingError
from ..logging.error_log import FILE_LEVEL_SHEET, ErrorLogBuffer, ErrorRecord, skipped_row_records
from ..models.config_models import DocuFlowConfig
from ..models.processing_result import DocumentKind, FileStat, FileStatus, ProcessingResult
from ..pdf.extractor import pdf_to_text
from .opening_balance import import_opening_balances
from .progress import ProgressTracker

"""Batch orchestration over a directory of documents.

Each document is processed independently: PDFs are reconstructed to plain
text (``<stem>.txt``), spreadsheets are imported as opening balances
(``<stem>.json``). A failing document is recorded and the batch moves on.
Skipped import rows and file failures are buffered and written to the error
log once at the end of the run.
"""

__all__ = [
    "ProcessingError",
    "scan_documents",
    "process_all",
]

logger = logging.getLogger(__name__)


def scan_documents(directory: Path) -> list[Path]:
    """List supported documents in ``directory`` (non-recursive), sorted by name.

    Raises:
        ProcessingError: If the directory doesn't exist or can't be read
    """
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")

    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")

    try:
        return sorted(
            (p for p in directory.iterdir() if p.is_file() and DocumentKind.for_path(p) is not None),
            key=lambda p: p.name,
        )
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e


def _process_pdf(path: Path, config: DocuFlowConfig, output_dir: Path) -> tuple[int, Path]:
    text, pages = pdf_to_text(
        path,
        tolerance=config.pdf.line_tolerance,
        separator=config.pdf.fragment_separator,
    )
    out = output_dir / f"{path.stem}.txt"
    out.write_text(text, encoding="utf-8")
    logger.info(f"{path.name}: pages={pages} -> {out}")
    return pages, out


def _process_spreadsheet(
    path: Path,
    config: DocuFlowConfig,
    output_dir: Path,
    error_log: ErrorLogBuffer,
) -> tuple[int, int, Path]:
    result = import_opening_balances(path, config.excel)
    payload = {"sheet": result.sheet_name, **result.to_dict()}
    out = output_dir / f"{path.stem}.json"
    out.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
    # only a written import reports its skipped rows
    error_log.extend(skipped_row_records(path.name, result.sheet_name, result.skipped_rows))
    logger.info(
        f"{path.name}: sheet={result.sheet_name} entries={len(result.entries)} "
        f"skipped={result.skipped} -> {out}"
    )
    return len(result.entries), result.skipped, out


def _process_single_file(
    path: Path,
    kind: DocumentKind,
    config: DocuFlowConfig,
    output_dir: Path,
    error_log: ErrorLogBuffer,
) -> FileStat:
    start = datetime.now(UTC)
    pages = entries = skipped = 0
    out: Path | None = None
    try:
        if kind is DocumentKind.PDF:
            pages, out = _process_pdf(path, config, output_dir)
        else:
            entries, skipped, out = _process_spreadsheet(path, config, output_dir, error_log)
    except (DocumentReadError, LibraryUnavailableError, OSError) as e:
        error_type = "LIBRARY_UNAVAILABLE" if isinstance(e, LibraryUnavailableError) else "DOCUMENT_READ_ERROR"
        logger.error(f"{path.name}: {e}")
        error_log.append(ErrorRecord.create(path.name, FILE_LEVEL_SHEET, -1, error_type, str(e)))
        return FileStat(
            file_name=path.name,
            kind=kind,
            status=FileStatus.FAILED,
            elapsed_seconds=(datetime.now(UTC) - start).total_seconds(),
            error=str(e),
        )
    return FileStat(
        file_name=path.name,
        kind=kind,
        status=FileStatus.SUCCESS,
        elapsed_seconds=(datetime.now(UTC) - start).total_seconds(),
        pages=pages,
        entries=entries,
        skipped=skipped,
        output_path=out,
    )


def process_all(config: DocuFlowConfig, error_log: ErrorLogBuffer | None = None) -> ProcessingResult:
    """Process every supported document in the configured source directory.

    Args:
        config: batch configuration
        error_log: buffer receiving skip and failure records (a fresh
            buffer writing to ./logs when omitted); flushed before returning

    Raises:
        ProcessingError: when the source directory is unusable, or the output
            directory or error log cannot be written
    """
    start_time = datetime.now(UTC)
    error_log = error_log if error_log is not None else ErrorLogBuffer()

    documents: list[tuple[Path, DocumentKind]] = []
    for path in scan_documents(Path(config.source_directory)):
        kind = DocumentKind.for_path(path)
        if kind is not None:
            documents.append((path, kind))
    output_dir = Path(config.output_directory)
    if documents:
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ProcessingError(f"cannot create output directory {output_dir}: {e}") from e

    file_stats: list[FileStat] = []
    with ProgressTracker(len(documents)) as progress:
        for path, kind in documents:
            progress.start_file(path)
            stat = _process_single_file(path, kind, config, output_dir, error_log)
            file_stats.append(stat)
            progress.finish_file()
            progress.set_postfix(
                success=sum(1 for s in file_stats if s.status is FileStatus.SUCCESS),
                failed=sum(1 for s in file_stats if s.status is FileStatus.FAILED),
            )

    try:
        log_path = error_log.flush()
    except OSError as e:
        raise ProcessingError(f"cannot write error log: {e}") from e
    if log_path is not None:
        logger.warning(f"error log written: {log_path}")

    end_time = datetime.now(UTC)
    succeeded = [s for s in file_stats if s.status is FileStatus.SUCCESS]
    return ProcessingResult(
        success_files=len(succeeded),
        failed_files=len(file_stats) - len(succeeded),
        total_pages=sum(s.pages for s in succeeded),
        total_entries=sum(s.entries for s in succeeded),
        total_skipped=sum(s.skipped for s in succeeded),
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        file_stats=file_stats,
    )
