from __future__ import annotations

import pytest

from docuflow.excel.chart_of_accounts import (
    ACCOUNT_LOOKUP,
    CHART_OF_ACCOUNTS,
    AccountLookupEntry,
    normalize_account_name,
)
from docuflow.models.balance import Category


@pytest.mark.parametrize("raw,expected", [
    ("Cash on Hand", "cash on hand"),
    ("  Salaries &  Wages ", "salaries wages"),
    ("Share Capital / Owner’s Equity", "share capital owner s equity"),
    ("Direct Cost (COGS)", "direct cost cogs"),
    (None, ""),
])
def test_normalize_account_name(raw, expected):
    assert normalize_account_name(raw) == expected


def test_lookup_keys_are_normalized():
    assert all(key == normalize_account_name(key) for key in ACCOUNT_LOOKUP)


def test_lookup_covers_every_chart_account():
    count = 0
    for section in CHART_OF_ACCOUNTS.values():
        if isinstance(section, tuple):
            count += len(section)
        else:
            count += sum(len(accounts) for accounts in section.values())
    assert len(ACCOUNT_LOOKUP) == count


def test_lookup_entries():
    assert ACCOUNT_LOOKUP["accounts receivable"] == AccountLookupEntry(Category.ASSETS, "CurrentAssets")
    assert ACCOUNT_LOOKUP["retained earnings"] == AccountLookupEntry(Category.EQUITY)
    assert ACCOUNT_LOOKUP["bank charges"].category is Category.EXPENSES


def test_lookup_is_read_only():
    with pytest.raises(TypeError):
        ACCOUNT_LOOKUP["new account"] = AccountLookupEntry(Category.ASSETS)  # type: ignore[index]
