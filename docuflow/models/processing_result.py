from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

"""Processing result models for a DocuFlow batch run.

FileStat carries per-document metrics; ProcessingResult aggregates them for
the SUMMARY line and the CLI exit code.
"""

__all__ = [
    "DocumentKind",
    "FileStatus",
    "FileStat",
    "ProcessingResult",
]

PDF_SUFFIXES = frozenset({".pdf"})
SHEET_SUFFIXES = frozenset({".xlsx", ".xlsm", ".xls", ".csv"})


class DocumentKind(Enum):
    PDF = "pdf"
    SPREADSHEET = "spreadsheet"

    @staticmethod
    def for_path(path: Path) -> DocumentKind | None:
        suffix = path.suffix.lower()
        if suffix in PDF_SUFFIXES:
            return DocumentKind.PDF
        if suffix in SHEET_SUFFIXES:
            return DocumentKind.SPREADSHEET
        return None


class FileStatus(Enum):
    """pending -> processing -> (success | failed)"""
    PENDING = "pending"
    PROCESSING = "processing"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class FileStat:
    """Per-file processing statistics."""
    file_name: str
    kind: DocumentKind
    status: FileStatus
    elapsed_seconds: float
    pages: int = 0  # PDFs only
    entries: int = 0  # spreadsheets only
    skipped: int = 0  # spreadsheets only
    output_path: Path | None = None
    error: str | None = None  # failure reason summary


@dataclass(frozen=True)
class ProcessingResult:
    """Aggregated results of one batch run."""
    success_files: int
    failed_files: int
    total_pages: int
    total_entries: int
    total_skipped: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    file_stats: list[FileStat] | None = None

    @property
    def total_files(self) -> int:
        return self.success_files + self.failed_files
