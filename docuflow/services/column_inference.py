from __future__ import annotations

import logging
import numbers
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from ..models.balance import ColumnRole, ColumnRoleAssignment

"""Column role inference for opening-balance spreadsheets.

Imported spreadsheets come in any shape: trial balances with or without a
header, balance-sheet listings with a category column, two-column signed
balance dumps. Roles are resolved in three passes, each only filling roles the
previous pass left unassigned:

1. header keywords, when a header-like row was found
2. positional defaults conditioned on the widest of the first data rows
3. content statistics over the first data rows

A column is claimed by at most one role, so the account column can never
double as the category column.
"""

__all__ = [
    "SheetCandidate",
    "cell_text",
    "is_numeric_text",
    "header_score",
    "find_header_row",
    "select_sheet",
    "resolve_columns",
]

logger = logging.getLogger(__name__)

# Keyword hits used to score how header-like a row is
HEADER_WEIGHTS: Mapping[ColumnRole, int] = {
    ColumnRole.ACCOUNT: 3,
    ColumnRole.CATEGORY: 2,
    ColumnRole.DEBIT: 2,
    ColumnRole.CREDIT: 2,
    ColumnRole.BALANCE: 1,
}
SCORE_KEYWORDS: Mapping[ColumnRole, tuple[str, ...]] = {
    ColumnRole.ACCOUNT: ("account",),
    ColumnRole.CATEGORY: ("category", "heading", "type", "group"),
    ColumnRole.DEBIT: ("debit", "dr"),
    ColumnRole.CREDIT: ("credit", "cr"),
    ColumnRole.BALANCE: ("balance", "amount", "net"),
}

# Keywords used to bind header cells to roles, in resolution order
HEADER_KEYWORDS: Mapping[ColumnRole, tuple[str, ...]] = {
    ColumnRole.CATEGORY: ("category", "heading", "classification", "type", "group", "section"),
    ColumnRole.ACCOUNT: ("account", "account name", "ledger", "description"),
    ColumnRole.DEBIT: ("debit", "dr"),
    ColumnRole.CREDIT: ("credit", "cr"),
    ColumnRole.BALANCE: ("balance", "amount", "opening balance", "value", "net"),
}

_CATEGORY_HINT_RE = re.compile(r"(asset|liab|equity|income|expense|revenue|profit|loss)", re.IGNORECASE)
_DIGIT_RE = re.compile(r"[0-9]")
_LETTER_RE = re.compile(r"[a-zA-Z]")

WIDTH_SAMPLE_ROWS = 25


@dataclass(frozen=True)
class SheetCandidate:
    """Best header guess for one sheet."""
    sheet_name: str
    rows: list[list[Any]]
    header_index: int | None  # None when no row scored above zero
    score: int


@dataclass
class _ColumnStats:
    numeric: int = 0
    text: int = 0
    category: int = 0
    non_empty: int = 0


def cell_text(row: Sequence[Any], index: int | None) -> str:
    """Trimmed text of a cell; out-of-range or unassigned cells are ''."""
    if index is None or index < 0 or index >= len(row):
        return ""
    value = row[index]
    if value is None:
        return ""
    return str(value).strip()


def is_numeric_text(raw: str) -> bool:
    return bool(_DIGIT_RE.search(raw)) and not _LETTER_RE.search(raw)


def _is_numeric_cell(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, numbers.Number):
        return True
    return is_numeric_text(str(value).strip()) if value is not None else False


def normalize_header(value: Any) -> str:
    return ("" if value is None else str(value)).strip().lower()


def _keyword_matches(header: str, keyword: str) -> bool:
    # "dr"/"cr" would otherwise hit words like "address" or "description"
    if len(keyword) <= 2:
        return re.search(rf"\b{re.escape(keyword)}\b", header) is not None
    return keyword in header


def header_score(row: Sequence[Any]) -> int:
    """Weighted count of recognised column-header keywords in a row.

    Rows holding a numeric cell are data rows and score zero.
    """
    if any(_is_numeric_cell(cell) for cell in row):
        return 0
    headers = [normalize_header(cell) for cell in row]
    headers = [h for h in headers if h]
    score = 0
    for role, keywords in SCORE_KEYWORDS.items():
        if any(_keyword_matches(h, k) for h in headers for k in keywords):
            score += HEADER_WEIGHTS[role]
    return score


def find_header_row(rows: Sequence[Sequence[Any]], scan_rows: int = 10) -> tuple[int | None, int]:
    """Return (index, score) of the most header-like row among the first rows.

    The earliest row wins ties. The index is None when nothing scored.
    """
    best_index: int | None = None
    best_score = 0
    for idx, row in enumerate(rows[:scan_rows]):
        score = header_score(row)
        if score > best_score:
            best_index, best_score = idx, score
    return best_index, best_score


def select_sheet(
    workbook: Mapping[str, list[list[Any]]],
    *,
    scan_rows: int = 10,
    preferred_keyword: str = "opening",
) -> SheetCandidate | None:
    """Pick the sheet whose best header row scores highest.

    Ties go to a sheet whose name contains ``preferred_keyword`` over one that
    does not; otherwise the earlier sheet wins. Empty sheets are ignored.
    """
    keyword = preferred_keyword.lower()
    best: SheetCandidate | None = None
    for name, rows in workbook.items():
        if not rows:
            continue
        index, score = find_header_row(rows, scan_rows)
        candidate = SheetCandidate(sheet_name=name, rows=rows, header_index=index, score=score)
        if best is None or score > best.score:
            best = candidate
        elif (
            score == best.score
            and keyword
            and keyword in name.lower()
            and keyword not in best.sheet_name.lower()
        ):
            best = candidate
    if best is not None:
        logger.debug(
            "selected sheet=%s header_index=%s score=%d", best.sheet_name, best.header_index, best.score
        )
    return best


def _trimmed_width(row: Sequence[Any]) -> int:
    width = len(row)
    while width > 0 and cell_text(row, width - 1) == "":
        width -= 1
    return width


def _sample_width(data_rows: Sequence[Sequence[Any]], header_row: Sequence[Any]) -> int:
    """Sheet width seen by the data: the widest sampled row, trailing blanks ignored.

    A single row is not enough since a debit-only line ends before the credit
    column.
    """
    widths = [_trimmed_width(row) for row in data_rows[:WIDTH_SAMPLE_ROWS]]
    return max(widths, default=0) or _trimmed_width(header_row)


def _match_header(assignment: ColumnRoleAssignment, header_row: Sequence[Any]) -> None:
    headers = [normalize_header(cell) for cell in header_row]
    for role, keywords in HEADER_KEYWORDS.items():
        claimed = assignment.claimed()
        for idx, header in enumerate(headers):
            if not header or idx in claimed:
                continue
            if any(_keyword_matches(header, k) for k in keywords):
                assignment.set(role, idx)
                break


def _apply_positional_defaults(assignment: ColumnRoleAssignment, width: int) -> None:
    if assignment.category is None and width >= 4 and 0 not in assignment.claimed():
        assignment.category = 0

    if assignment.account is None:
        candidate = 1 if assignment.category == 0 else 0
        if candidate not in assignment.claimed():
            assignment.account = candidate

    if assignment.balance is None and (assignment.debit is None or assignment.credit is None):
        pair: tuple[int, int] | None = None
        if width >= 4:
            pair = (width - 2, width - 1)
        elif width == 3:
            pair = (1, 2)
        # the pair assumes the name sits left of it
        if pair is not None and not {assignment.account, assignment.category}.intersection(pair):
            for role, idx in zip((ColumnRole.DEBIT, ColumnRole.CREDIT), pair, strict=True):
                if assignment.get(role) is None and idx not in assignment.claimed():
                    assignment.set(role, idx)

    if (
        assignment.balance is None
        and assignment.debit is None
        and assignment.credit is None
        and width == 2
        and 1 not in assignment.claimed()
    ):
        # a lone amount column beside the name is a signed balance
        assignment.balance = 1


def _collect_stats(rows: Sequence[Sequence[Any]], column_count: int) -> list[_ColumnStats]:
    stats = [_ColumnStats() for _ in range(column_count)]
    for row in rows:
        for idx in range(column_count):
            raw = cell_text(row, idx)
            if not raw:
                continue
            s = stats[idx]
            s.non_empty += 1
            if is_numeric_text(raw):
                s.numeric += 1
            if _LETTER_RE.search(raw):
                s.text += 1
            if _CATEGORY_HINT_RE.search(raw):
                s.category += 1
    return stats


def _apply_content_statistics(
    assignment: ColumnRoleAssignment,
    header_row: Sequence[Any],
    data_rows: Sequence[Sequence[Any]],
    sample_rows: int,
) -> None:
    widths = [len(row) for row in data_rows[:WIDTH_SAMPLE_ROWS]]
    column_count = max([len(header_row), *widths])
    if column_count == 0:
        return

    # indices beyond the sheet's width are as good as unassigned
    for role in ColumnRole:
        idx = assignment.get(role)
        if idx is not None and idx >= column_count:
            assignment.set(role, None)

    stats = _collect_stats(data_rows[:sample_rows], column_count)

    if assignment.account is None:
        claimed = assignment.claimed()
        free = [i for i in range(column_count) if i not in claimed]
        if free:
            assignment.account = max(free, key=lambda i: stats[i].text)

    if assignment.category is None:
        claimed = assignment.claimed()
        ranked = sorted(range(column_count), key=lambda i: stats[i].category, reverse=True)
        pick = next((i for i in ranked if stats[i].category > 0 and i not in claimed), None)
        if pick is not None:
            assignment.category = pick

    if assignment.balance is None and (assignment.debit is None or assignment.credit is None):
        claimed = assignment.claimed()
        numeric_columns = [i for i in range(column_count) if stats[i].numeric > 0 and i not in claimed]
        if assignment.debit is None and assignment.credit is None:
            if len(numeric_columns) >= 2:
                assignment.debit, assignment.credit = numeric_columns[0], numeric_columns[1]
            elif len(numeric_columns) == 1:
                assignment.balance = numeric_columns[0]
        elif numeric_columns:
            missing = ColumnRole.DEBIT if assignment.debit is None else ColumnRole.CREDIT
            assignment.set(missing, numeric_columns[0])


def resolve_columns(
    rows: Sequence[Sequence[Any]],
    header_index: int | None,
    *,
    stats_sample_rows: int = 50,
) -> ColumnRoleAssignment:
    """Infer which column holds each role for the rows below ``header_index``.

    Args:
        rows: the full sheet grid
        header_index: header row index, or None for a headerless sheet
        stats_sample_rows: data rows examined by the content statistics pass
    """
    assignment = ColumnRoleAssignment()
    if header_index is not None:
        header_row: Sequence[Any] = rows[header_index]
        data_rows = rows[header_index + 1:]
        _match_header(assignment, header_row)
    else:
        header_row = rows[0] if rows else []
        data_rows = rows

    _apply_positional_defaults(assignment, _sample_width(data_rows, header_row))
    _apply_content_statistics(assignment, header_row, data_rows, stats_sample_rows)
    logger.debug("resolved columns %s", assignment.to_dict())
    return assignment
