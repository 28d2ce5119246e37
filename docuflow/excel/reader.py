from __future__ import annotations

import logging
import zipfile
from pathlib import Path
from typing import Any

import pandas as pd

from ..exceptions import DocumentReadError, LibraryUnavailableError

"""Workbook reader for opening-balance imports.

Sheets are read headerless (header detection is the inferencer's job) into
plain 2-D lists of raw cell values. Empty cells become "" and integral floats
produced by pandas' NaN-aware columns are left as floats; the inferencer only
cares whether a cell is numeric.
"""

__all__ = [
    "SheetGrid",
    "Workbook",
    "read_workbook",
    "frame_to_grid",
]

logger = logging.getLogger(__name__)

SheetGrid = list[list[Any]]
Workbook = dict[str, SheetGrid]

EXCEL_SUFFIXES = frozenset({".xlsx", ".xlsm", ".xls"})
CSV_SUFFIX = ".csv"


def _clean_cell(value: Any) -> Any:
    if value is None or pd.isna(value):
        return ""
    return value


def frame_to_grid(df: pd.DataFrame) -> SheetGrid:
    """Convert a headerless DataFrame into rows of raw cell values.

    Trailing rows that are entirely empty are dropped.
    """
    grid: SheetGrid = [[_clean_cell(v) for v in row] for row in df.itertuples(index=False, name=None)]
    while grid and all(cell == "" for cell in grid[-1]):
        grid.pop()
    return grid


def read_workbook(path: Path) -> Workbook:
    """Read every sheet of a workbook (or the single table of a CSV).

    Cell text such as "NA" or "N/A" is kept verbatim rather than converted to
    NaN, since account names are free text.

    Raises:
        LibraryUnavailableError: the engine needed for this format is missing
        DocumentReadError: the file cannot be read
    """
    suffix = path.suffix.lower()
    try:
        if suffix == CSV_SUFFIX:
            df = pd.read_csv(path, header=None, keep_default_na=False, na_values=[""], dtype=object)
            return {path.stem: frame_to_grid(df)}
        if suffix not in EXCEL_SUFFIXES:
            raise DocumentReadError(f"unsupported spreadsheet type: {path.name}")
        workbook: Workbook = {}
        with pd.ExcelFile(path) as xls:
            for name in xls.sheet_names:
                df = xls.parse(name, header=None, keep_default_na=False, na_values=[""])
                workbook[str(name)] = frame_to_grid(df)
    except ImportError as e:
        raise LibraryUnavailableError(f"spreadsheet engine not available for {path.name}: {e}") from e
    except DocumentReadError:
        raise
    except (ValueError, OSError, zipfile.BadZipFile, pd.errors.ParserError) as e:
        raise DocumentReadError(f"cannot read spreadsheet {path.name}: {e}") from e
    logger.debug("read %d sheets from %s", len(workbook), path.name)
    return workbook
