from __future__ import annotations

"""Exception hierarchy shared across DocuFlow services.

Row-level problems in an import are never raised; they are tallied on the
ImportResult. Only file-level and fatal conditions surface as exceptions.
"""

__all__ = [
    "DocuFlowError",
    "ConfigError",
    "LibraryUnavailableError",
    "DocumentReadError",
    "ProcessingError",
]


class DocuFlowError(Exception):
    """Base exception for DocuFlow."""


class ConfigError(DocuFlowError):
    pass


class LibraryUnavailableError(DocuFlowError):
    """Raised when a document-parsing library required for a format is missing."""


class DocumentReadError(DocuFlowError):
    """Raised when a PDF or workbook cannot be opened or decoded."""


class ProcessingError(DocuFlowError):
    """Fatal batch processing error (e.g. source directory missing)."""
