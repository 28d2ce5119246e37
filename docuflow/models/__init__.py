"""Domain models for DocuFlow.

Text models feed the PDF line reconstructor, balance models carry the
opening-balance import, and the remaining modules describe a batch run.
"""

from .balance import (
    Category,
    ColumnRole,
    ColumnRoleAssignment,
    ImportedBalanceRow,
    ImportResult,
    OpeningBalanceAccount,
    SkippedRow,
)
from .config_models import DocuFlowConfig, ExcelConfig, PdfConfig
from .error_record import ErrorRecord
from .processing_result import DocumentKind, FileStat, FileStatus, ProcessingResult
from .text import PageText, TextFragment, TextLine

__all__ = [
    # Text models
    "TextFragment",
    "TextLine",
    "PageText",
    # Balance import models
    "Category",
    "ColumnRole",
    "ColumnRoleAssignment",
    "OpeningBalanceAccount",
    "ImportedBalanceRow",
    "SkippedRow",
    "ImportResult",
    # Configuration models
    "DocuFlowConfig",
    "ExcelConfig",
    "PdfConfig",
    # Processing models
    "DocumentKind",
    "ErrorRecord",
    "FileStat",
    "FileStatus",
    "ProcessingResult",
]
