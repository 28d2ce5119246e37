from __future__ import annotations

import pytest

from docuflow.models.balance import ColumnRoleAssignment
from docuflow.services.column_inference import (
    find_header_row,
    header_score,
    is_numeric_text,
    resolve_columns,
    select_sheet,
)


@pytest.mark.parametrize("row,expected", [
    (["Account", "Category", "Debit", "Credit"], 9),
    (["Account Name", "Dr", "Cr"], 7),
    (["Ledger", "Group", "Net"], 3),
    (["Account", "Balance"], 4),
    (["Description", "Address"], 0),  # no whole-word dr/cr
    (["", None, "notes"], 0),
])
def test_header_score_weights(row, expected):
    assert header_score(row) == expected


def test_header_score_rejects_rows_with_numbers():
    assert header_score(["Accounts Payable", "(500)"]) == 0
    assert header_score(["Account", 100]) == 0


@pytest.mark.parametrize("raw,expected", [
    ("1,234.50", True),
    ("(500)", True),
    ("AED 100", False),
    ("", False),
    ("-", False),
])
def test_is_numeric_text(raw, expected):
    assert is_numeric_text(raw) is expected


def test_find_header_row_skips_title_rows():
    rows = [
        ["ACME Trading LLC"],
        ["Trial balance"],
        ["Account", "Debit", "Credit"],
        ["Cash", 10, 0],
    ]
    assert find_header_row(rows) == (2, 7)


def test_find_header_row_none_when_headerless():
    assert find_header_row([["Cash", 10], ["Rent", 5]]) == (None, 0)


def test_find_header_row_only_scans_leading_rows():
    rows = [["x"]] * 10 + [["Account", "Debit", "Credit"]]
    assert find_header_row(rows, scan_rows=10) == (None, 0)


def test_select_sheet_highest_score_wins():
    workbook = {
        "Notes": [["Prepared by finance"]],
        "TB": [["Account", "Debit", "Credit"], ["Cash", 1, 0]],
    }
    best = select_sheet(workbook)
    assert best is not None
    assert best.sheet_name == "TB"
    assert best.header_index == 0


def test_select_sheet_tie_prefers_opening_sheet():
    rows = [["Account", "Debit", "Credit"], ["Cash", 1, 0]]
    best = select_sheet({"Sheet1": rows, "Opening Balances": rows})
    assert best is not None
    assert best.sheet_name == "Opening Balances"


def test_select_sheet_tie_keeps_first_without_keyword():
    rows = [["Account", "Debit", "Credit"]]
    best = select_sheet({"A": rows, "B": rows})
    assert best.sheet_name == "A"


def test_select_sheet_ignores_empty_sheets():
    assert select_sheet({"Empty": []}) is None


def test_resolve_columns_from_header():
    rows = [["Account", "Category", "Debit", "Credit"], ["Cash", "Assets", "100", "0"]]
    cols = resolve_columns(rows, 0)
    assert cols == ColumnRoleAssignment(account=0, category=1, debit=2, credit=3, balance=None)


def test_resolve_columns_account_never_reuses_category_column():
    rows = [["Account Type", "Account Name", "Dr", "Cr"], ["Assets", "Cash", 5, 0]]
    cols = resolve_columns(rows, 0)
    assert cols.category == 0
    assert cols.account == 1
    assert (cols.debit, cols.credit) == (2, 3)


def test_resolve_columns_description_does_not_match_cr():
    rows = [["Description", "Debit", "Credit"], ["Cash", 5, 0]]
    cols = resolve_columns(rows, 0)
    assert (cols.account, cols.debit, cols.credit) == (0, 1, 2)


def test_resolve_columns_debit_balance_headers_do_not_claim_balance():
    rows = [["Account", "Debit Balance", "Credit Balance"], ["Cash", 5, 0]]
    cols = resolve_columns(rows, 0)
    assert (cols.debit, cols.credit, cols.balance) == (1, 2, None)


def test_positional_defaults_width_four_headerless():
    rows = [["Assets", "Cash", 100, 0], ["Liabilities", "Loan", 0, 50]]
    cols = resolve_columns(rows, None)
    assert cols == ColumnRoleAssignment(account=1, category=0, debit=2, credit=3, balance=None)


def test_positional_defaults_width_three_headerless():
    rows = [["Cash", 100, 0]]
    cols = resolve_columns(rows, None)
    assert (cols.account, cols.debit, cols.credit, cols.balance) == (0, 1, 2, None)
    assert cols.category is None


def test_positional_defaults_width_two_is_signed_balance():
    cols = resolve_columns([["Accounts Payable", "(500)"]], None)
    assert (cols.account, cols.balance) == (0, 1)
    assert cols.debit is None and cols.credit is None


def test_width_ignores_trailing_empty_cells():
    cols = resolve_columns([["Accounts Payable", "(500)", "", ""]], None)
    assert cols.balance == 1
    assert cols.category is None


def test_statistics_pick_account_and_category_columns():
    rows = [
        ["Account", "Amount", "Notes"],
        ["Cash", 100, "current assets"],
        ["Rent", 20, "operating expense"],
    ]
    cols = resolve_columns(rows, 0)
    assert cols.account == 0
    assert cols.balance == 1
    assert cols.category == 2


def test_statistics_pick_numeric_columns_when_header_has_no_amounts():
    rows = [
        ["Code", "Account", "Opening", "Movement"],
        ["", "Cash", "100", ""],
        ["", "Loan", "", "50"],
    ]
    cols = resolve_columns(rows, 0)
    assert cols.account == 1
    assert (cols.debit, cols.credit) == (2, 3)


def test_width_is_widest_data_row_not_first():
    # the first row has no credit figure, so it ends one column early
    cols = resolve_columns([["Cash", 1000, ""], ["Capital", "", 1000]], None)
    assert (cols.account, cols.debit, cols.credit, cols.balance) == (0, 1, 2, None)

    cols = resolve_columns([["Assets", "Cash", 1000, ""], ["Equity", "Capital", "", 1000]], None)
    assert cols == ColumnRoleAssignment(account=1, category=0, debit=2, credit=3, balance=None)
