from __future__ import annotations

import logging
import math
import numbers
import re
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from ..excel.chart_of_accounts import ACCOUNT_LOOKUP, AccountLookupEntry, normalize_account_name
from ..excel.reader import read_workbook
from ..models.balance import (
    IMPORTED_SUB_CATEGORY,
    Category,
    ColumnRoleAssignment,
    ImportedBalanceRow,
    ImportResult,
    OpeningBalanceAccount,
    SkippedRow,
)
from ..models.config_models import ExcelConfig
from .column_inference import cell_text, find_header_row, resolve_columns, select_sheet

"""Opening-balance import from arbitrary accounting spreadsheets.

The import never raises for a malformed row. Header echoes, subtotal lines and
rows whose category cannot be resolved are dropped and tallied in
``ImportResult.skipped`` (with detail in ``skipped_rows``); that tally is the
only row-level error signal handed back to the caller.
"""

__all__ = [
    "SKIP_BLANK_ACCOUNT",
    "SKIP_NON_ACCOUNT_ROW",
    "SKIP_UNRESOLVED_CATEGORY",
    "parse_amount",
    "normalize_category",
    "infer_category_from_account_name",
    "resolve_opening_balance_category",
    "infer_import",
    "infer_workbook_import",
    "import_opening_balances",
]

logger = logging.getLogger(__name__)

SKIP_BLANK_ACCOUNT = "BLANK_ACCOUNT"
SKIP_NON_ACCOUNT_ROW = "NON_ACCOUNT_ROW"
SKIP_UNRESOLVED_CATEGORY = "UNRESOLVED_CATEGORY"

# Normalized account texts that label headers or totals, not accounts
STOP_LIST = frozenset({
    "account",
    "account name",
    "total",
    "totals",
    "profit loss",
    "profit and loss",
    "balance sheet",
    "statement of financial position",
    "statement of profit or loss",
    "trial balance",
    "common trial balance accounts",
})
TOP_LEVEL_NAMES = frozenset(c.value.lower() for c in Category)

_AMOUNT_STRIP_RE = re.compile(r"[^0-9.\-]")
_CR_RE = re.compile(r"\bcr\b")
_DR_RE = re.compile(r"\bdr\b")
_SPACES_RE = re.compile(r"\s+")

# Category-cell synonyms, checked in order
_CATEGORY_SYNONYMS: tuple[tuple[Category, tuple[str, ...]], ...] = (
    (Category.INCOME, ("revenue", "income", "gain", "dividend", "profit")),
    (Category.EXPENSES, (
        "expense", "cost", "loss", "depreciation", "amortization", "impairment", "finance cost",
    )),
    (Category.ASSETS, ("asset",)),
    (Category.LIABILITIES, ("liabilit", "payable", "overdraft", "loan", "debenture")),
    (Category.EQUITY, ("equity", "shareholder", "capital", "owner")),
)
_STATEMENT_LABELS = frozenset({"profit & loss", "profit and loss", "balance sheet"})

# Account-name keywords, checked in order
_ACCOUNT_NAME_HINTS: tuple[tuple[Category, tuple[str, ...]], ...] = (
    (Category.EQUITY, ("equity", "capital", "retained earnings", "owner", "shareholder")),
    (Category.LIABILITIES, (
        "payable", "liabilit", "loan", "overdraft", "debenture", "bond", "lease", "deferred tax",
    )),
    (Category.EXPENSES, (
        "expense", "cost", "loss", "depreciation", "amortization", "impairment", "freight",
        "shipping", "warehouse", "marketing", "advertising", "salary", "wage", "rent",
        "bank charge",
    )),
    (Category.INCOME, ("revenue", "income", "gain", "profit", "dividend", "interest income")),
    (Category.ASSETS, (
        "asset", "cash", "bank account", "receivable", "inventory", "prepaid", "deposit",
        "bill receivable", "marketable",
    )),
)


def parse_amount(value: Any) -> float:
    """Parse a spreadsheet amount; anything unparseable is 0.

    Thousands separators and currency symbols are ignored and ``(123)`` is
    read as -123.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, numbers.Real):
        number = float(value)
        return 0.0 if math.isnan(number) else number
    raw = str(value).strip()
    if not raw:
        return 0.0
    negative = raw.startswith("(") and raw.endswith(")")
    cleaned = _AMOUNT_STRIP_RE.sub("", raw)
    if not cleaned:
        return 0.0
    try:
        number = float(cleaned)
    except ValueError:
        return 0.0
    return -abs(number) if negative else number


def _parse_balance(value: Any) -> float:
    balance = parse_amount(value)
    if isinstance(value, str):
        lower = value.lower()
        has_cr = _CR_RE.search(lower) is not None
        has_dr = _DR_RE.search(lower) is not None
        if has_cr and not has_dr:
            balance = -abs(balance)
        elif has_dr and not has_cr:
            balance = abs(balance)
    return balance


def normalize_category(value: Any) -> Category | None:
    """Map a free-text category cell onto a ledger category.

    Statement labels ("Profit & Loss", "Balance Sheet") on their own say
    nothing about the side of the ledger and give None.
    """
    if value is None:
        return None
    text = _SPACES_RE.sub(" ", str(value).lower()).strip()
    if not text or text in _STATEMENT_LABELS:
        return None
    for category, keywords in _CATEGORY_SYNONYMS:
        if any(k in text for k in keywords):
            return category
    return None


def infer_category_from_account_name(account_name: str) -> Category | None:
    lower = account_name.lower()
    for category, keywords in _ACCOUNT_NAME_HINTS:
        if any(k in lower for k in keywords):
            return category
    return None


def resolve_opening_balance_category(account_name: str) -> AccountLookupEntry | None:
    """Chart-of-accounts lookup, falling back to keyword inference."""
    entry = ACCOUNT_LOOKUP.get(normalize_account_name(account_name))
    if entry is not None:
        return entry
    inferred = infer_category_from_account_name(account_name)
    if inferred is not None:
        return AccountLookupEntry(inferred)
    return None


def _split_sides(debit: float, credit: float, balance: float, category: Category) -> tuple[float, float]:
    """Return non-negative (debit, credit) for one row."""
    if debit < 0 and credit == 0:
        debit, credit = 0.0, abs(debit)
    if credit < 0 and debit == 0:
        debit, credit = abs(credit), 0.0
    if debit == 0 and credit == 0 and balance != 0:
        amount = abs(balance)
        if category.debit_normal and balance > 0:
            debit = amount
        else:
            # negative figures are credits; credit-normal categories state
            # positive balances in their own (credit) direction
            credit = amount
    return abs(debit), abs(credit)


def _cell(row: Sequence[Any], index: int | None) -> Any:
    if index is None or index < 0 or index >= len(row):
        return None
    return row[index]


def _is_non_account_label(key: str) -> bool:
    return key in STOP_LIST or key.startswith("step") or key in TOP_LEVEL_NAMES


def _materialize(
    rows: Sequence[Sequence[Any]],
    first_data_index: int,
    columns: ColumnRoleAssignment,
) -> tuple[list[ImportedBalanceRow], list[SkippedRow]]:
    entries: list[ImportedBalanceRow] = []
    skipped: list[SkippedRow] = []

    for offset, row in enumerate(rows[first_data_index:]):
        row_number = first_data_index + offset + 1
        if all(cell_text(row, i) == "" for i in range(len(row))):
            continue

        raw_account = cell_text(row, columns.account)
        if not raw_account:
            skipped.append(SkippedRow(row_number, raw_account, SKIP_BLANK_ACCOUNT))
            continue
        key = normalize_account_name(raw_account)
        if _is_non_account_label(key):
            skipped.append(SkippedRow(row_number, raw_account, SKIP_NON_ACCOUNT_ROW))
            continue

        raw_debit = parse_amount(_cell(row, columns.debit))
        raw_credit = parse_amount(_cell(row, columns.credit))
        raw_balance = _parse_balance(_cell(row, columns.balance))

        lookup = ACCOUNT_LOOKUP.get(key)
        category = (
            normalize_category(cell_text(row, columns.category))
            or (lookup.category if lookup is not None else None)
            or infer_category_from_account_name(raw_account)
        )
        if category is None:
            net = raw_balance or (raw_debit - raw_credit)
            if net != 0:
                category = Category.ASSETS if net >= 0 else Category.LIABILITIES
        if category is None:
            skipped.append(SkippedRow(row_number, raw_account, SKIP_UNRESOLVED_CATEGORY))
            continue

        debit, credit = _split_sides(raw_debit, raw_credit, raw_balance, category)

        if raw_debit == 0 and raw_credit == 0 and raw_balance == 0 and "," in raw_account:
            # category header cells sometimes list several accounts inline
            names = [name.strip() for name in raw_account.split(",") if name.strip()]
        else:
            names = [raw_account]

        sub_category = lookup.sub_category if lookup is not None and lookup.sub_category else IMPORTED_SUB_CATEGORY
        for name in names:
            entries.append(
                ImportedBalanceRow(
                    category=category,
                    account=OpeningBalanceAccount(
                        name=name,
                        debit=debit,
                        credit=credit,
                        sub_category=sub_category,
                    ),
                )
            )
    return entries, skipped


def infer_import(
    grid: Sequence[Sequence[Any]],
    *,
    sheet_name: str | None = None,
    header_scan_rows: int = 10,
    stats_sample_rows: int = 50,
) -> ImportResult:
    """Import opening balances from a single sheet grid.

    Returns:
        ImportResult with one entry per materialized account and the number of
        rows that were dropped.
    """
    if not grid:
        return ImportResult(entries=[], skipped=0, sheet_name=sheet_name)
    header_index, _score = find_header_row(grid, header_scan_rows)
    return _import_rows(grid, header_index, sheet_name, stats_sample_rows)


def _import_rows(
    rows: Sequence[Sequence[Any]],
    header_index: int | None,
    sheet_name: str | None,
    stats_sample_rows: int,
) -> ImportResult:
    columns = resolve_columns(rows, header_index, stats_sample_rows=stats_sample_rows)
    first_data_index = 0 if header_index is None else header_index + 1
    entries, skipped_rows = _materialize(rows, first_data_index, columns)
    logger.debug(
        "sheet=%s entries=%d skipped=%d", sheet_name, len(entries), len(skipped_rows)
    )
    return ImportResult(
        entries=entries,
        skipped=len(skipped_rows),
        sheet_name=sheet_name,
        header_row=header_index,
        columns=columns,
        skipped_rows=skipped_rows,
    )


def infer_workbook_import(
    workbook: Mapping[str, list[list[Any]]],
    config: ExcelConfig | None = None,
) -> ImportResult:
    """Select the most header-like sheet of a workbook and import it."""
    cfg = config or ExcelConfig()
    candidate = select_sheet(
        workbook,
        scan_rows=cfg.header_scan_rows,
        preferred_keyword=cfg.preferred_sheet_keyword,
    )
    if candidate is None:
        return ImportResult(entries=[], skipped=0)
    return _import_rows(candidate.rows, candidate.header_index, candidate.sheet_name, cfg.stats_sample_rows)


def import_opening_balances(path: Path, config: ExcelConfig | None = None) -> ImportResult:
    """Read a workbook from disk and import its opening balances.

    Raises:
        LibraryUnavailableError: the spreadsheet engine for this format is missing
        DocumentReadError: the file cannot be read
    """
    return infer_workbook_import(read_workbook(path), config)
