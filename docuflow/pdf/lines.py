from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from ..models.text import DEFAULT_SEPARATOR, PageText, TextFragment, TextLine

"""Reading-order line reconstruction from positioned PDF text fragments.

Fragments carry only a baseline y, so lines are inferred by greedy grouping:
a fragment joins the current line when its y is within ``tolerance`` of the
line's reference y, and the reference then moves to that fragment. The rolling
reference means a chain of fragments each within tolerance of the previous one
merges into a single line even when its endpoints are further apart. Output
text is consumed by downstream extraction prompts, so this drift is kept.

Multi-column layouts are not reconstructed correctly; inputs are expected to be
single-column tabular statements.
"""

__all__ = [
    "LINE_TOLERANCE",
    "reconstruct_lines",
    "render_page",
    "render_document",
]

logger = logging.getLogger(__name__)

LINE_TOLERANCE = 8.0


def _reading_order_key(fragment: TextFragment) -> tuple[float, float, str]:
    # y descending (top of page first), then x ascending; text makes the
    # order total so any input permutation yields the same output
    return (-fragment.y, fragment.x, fragment.text)


def _left_to_right_key(fragment: TextFragment) -> tuple[float, str]:
    return (fragment.x, fragment.text)


def reconstruct_lines(
    fragments: Iterable[TextFragment],
    *,
    tolerance: float = LINE_TOLERANCE,
    separator: str = DEFAULT_SEPARATOR,
) -> list[TextLine]:
    """Group fragments into top-to-bottom lines, each ordered left to right.

    Args:
        fragments: unordered fragments of a single page
        tolerance: largest y difference from the line's reference y that still
            joins the line
        separator: text placed between fragments when a line is rendered

    Returns:
        Lines in reading order. An empty input gives an empty list.
    """
    ordered = sorted(fragments, key=_reading_order_key)
    if not ordered:
        return []

    groups: list[list[TextFragment]] = []
    current: list[TextFragment] = []
    reference_y = ordered[0].y
    for fragment in ordered:
        if current and abs(fragment.y - reference_y) > tolerance:
            groups.append(current)
            current = []
        current.append(fragment)
        reference_y = fragment.y
    groups.append(current)

    logger.debug("reconstructed %d lines from %d fragments", len(groups), len(ordered))
    return [
        TextLine(fragments=tuple(sorted(group, key=_left_to_right_key)), separator=separator)
        for group in groups
    ]


def render_page(
    page_number: int,
    fragments: Iterable[TextFragment],
    *,
    tolerance: float = LINE_TOLERANCE,
    separator: str = DEFAULT_SEPARATOR,
) -> PageText:
    """Reconstruct one page; page_number is 1-indexed."""
    lines = reconstruct_lines(fragments, tolerance=tolerance, separator=separator)
    return PageText(page_number=page_number, lines=tuple(lines))


def render_document(
    pages: Sequence[Iterable[TextFragment]],
    *,
    tolerance: float = LINE_TOLERANCE,
    separator: str = DEFAULT_SEPARATOR,
) -> str:
    """Render all pages as one string, each block prefixed by ``--- Page N ---``.

    Page blocks are separated by a blank line.
    """
    blocks = [
        render_page(i, page, tolerance=tolerance, separator=separator).render()
        for i, page in enumerate(pages, start=1)
    ]
    return "\n\n".join(blocks)
