from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

"""Text models for PDF line reconstruction.

A TextFragment is one positioned glyph run taken from a PDF page. Coordinates
are baselines in PDF page space, where y grows upward (visually higher text
has the larger y). Fragments are ephemeral: produced per page and discarded
once lines are rebuilt.
"""

__all__ = [
    "DEFAULT_SEPARATOR",
    "TextFragment",
    "TextLine",
    "PageText",
]

# Two spaces approximate column gaps in tabular statements.
DEFAULT_SEPARATOR = "  "


def _coerce_coordinate(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


@dataclass(frozen=True)
class TextFragment:
    text: str
    x: float
    y: float

    @staticmethod
    def from_mapping(data: Mapping[str, Any]) -> TextFragment:
        """Build a fragment from a loose ``{text, x, y}`` mapping.

        Missing or non-numeric coordinates become 0.0 so malformed extractor
        output still sorts deterministically.
        """
        text = data.get("text")
        return TextFragment(
            text="" if text is None else str(text),
            x=_coerce_coordinate(data.get("x")),
            y=_coerce_coordinate(data.get("y")),
        )


@dataclass(frozen=True)
class TextLine:
    """Fragments sharing an inferred vertical position, ordered left to right."""

    fragments: tuple[TextFragment, ...]
    separator: str = DEFAULT_SEPARATOR

    @property
    def text(self) -> str:
        return self.separator.join(f.text for f in self.fragments)

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class PageText:
    page_number: int  # 1-indexed
    lines: tuple[TextLine, ...]

    @property
    def marker(self) -> str:
        return f"--- Page {self.page_number} ---"

    @property
    def body(self) -> str:
        return "\n".join(line.text for line in self.lines)

    def render(self) -> str:
        body = self.body
        if not body:
            return self.marker
        return f"{self.marker}\n{body}"
