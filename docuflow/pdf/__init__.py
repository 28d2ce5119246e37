"""PDF text extraction and line reconstruction."""

from .lines import reconstruct_lines, render_document, render_page

__all__ = [
    "reconstruct_lines",
    "render_page",
    "render_document",
]
