from __future__ import annotations

from dataclasses import dataclass, field

from .text import DEFAULT_SEPARATOR

"""Config dataclasses for the DocuFlow batch processor.

Separate from the loader in docuflow/config/loader.py: the loader handles
YAML parsing and schema validation, these classes carry the typed result.
"""

__all__ = [
    "PdfConfig",
    "ExcelConfig",
    "DocuFlowConfig",
]


@dataclass(frozen=True)
class PdfConfig:
    """Line reconstruction settings."""
    line_tolerance: float = 8.0  # max baseline gap, in PDF units, inside one line
    fragment_separator: str = DEFAULT_SEPARATOR


@dataclass(frozen=True)
class ExcelConfig:
    """Opening-balance spreadsheet inference settings."""
    header_scan_rows: int = 10  # rows per sheet examined for a header
    stats_sample_rows: int = 50  # data rows used by the content statistics pass
    preferred_sheet_keyword: str = "opening"  # tie-break for sheet selection


@dataclass(frozen=True)
class DocuFlowConfig:
    """Root configuration object for a batch run."""
    source_directory: str  # Directory scanned for PDFs and spreadsheets
    output_directory: str = "./output"
    pdf: PdfConfig = field(default_factory=PdfConfig)
    excel: ExcelConfig = field(default_factory=ExcelConfig)
