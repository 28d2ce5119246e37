from __future__ import annotations

import logging
from pathlib import Path

import fitz  # PyMuPDF

from ..exceptions import DocumentReadError
from ..models.text import DEFAULT_SEPARATOR, TextFragment
from .lines import LINE_TOLERANCE, render_document

"""PyMuPDF adapter producing TextFragments per page.

One fragment per text span (a run of glyphs sharing font and baseline), so
the spaces inside a phrase survive and only gaps between runs get the line
separator. PyMuPDF reports span origins with y growing downward from the top
of the page; fragments use PDF baseline space instead (y grows upward), so the
origin is flipped against the page height.
"""

__all__ = [
    "extract_pages",
    "pdf_to_text",
]

logger = logging.getLogger(__name__)


def _page_fragments(page: fitz.Page) -> list[TextFragment]:
    height = page.rect.height
    fragments: list[TextFragment] = []
    for block in page.get_text("dict").get("blocks", []):
        for line in block.get("lines", []):
            for span in line.get("spans", []):
                text = span.get("text", "").strip()
                if not text:
                    continue
                x, y = span["origin"]
                fragments.append(TextFragment(text=text, x=float(x), y=float(height - y)))
    return fragments


def extract_pages(path: Path) -> list[list[TextFragment]]:
    """Return one fragment list per page, in page order.

    Raises:
        DocumentReadError: when the document cannot be opened or decoded
    """
    try:
        with fitz.open(path) as doc:
            pages = [_page_fragments(page) for page in doc]
    except (fitz.FileDataError, RuntimeError, OSError) as e:
        raise DocumentReadError(f"cannot read pdf {path.name}: {e}") from e
    logger.debug("extracted %d pages from %s", len(pages), path.name)
    return pages


def pdf_to_text(
    path: Path,
    *,
    tolerance: float = LINE_TOLERANCE,
    separator: str = DEFAULT_SEPARATOR,
) -> tuple[str, int]:
    """Extract and reconstruct a PDF. Returns (text, page_count)."""
    pages = extract_pages(path)
    return render_document(pages, tolerance=tolerance, separator=separator), len(pages)
