from __future__ import annotations

import re
from types import MappingProxyType
from typing import NamedTuple

from ..models.balance import Category

"""Static chart of accounts used to categorize imported opening balances.

CHART_OF_ACCOUNTS maps each top-level category either to sub-groups of
account names or, for Equity, directly to a flat list. ACCOUNT_LOOKUP is the
read-only normalized-name index built from it once at import time.
"""

__all__ = [
    "CHART_OF_ACCOUNTS",
    "ACCOUNT_LOOKUP",
    "AccountLookupEntry",
    "normalize_account_name",
]

CHART_OF_ACCOUNTS: MappingProxyType[str, object] = MappingProxyType({
    "Assets": {
        "CurrentAssets": (
            "Cash on Hand",
            "Bank Accounts",
            "Accounts Receivable",
            "Due from related Parties",
            "Advances to Suppliers",
            "Prepaid Expenses",
            "Deposits",
            "Inventory – Goods",
            "Work-in-Progress – Services",
            "VAT Recoverable (Input VAT)",
        ),
        "NonCurrentAssets": (
            "Furniture & Equipment",
            "Vehicles",
            "Intangibles (Software, Patents)",
            "Loans to related parties",
        ),
        "ContraAccounts": ("Accumulated Depreciation",),
    },
    "Liabilities": {
        "CurrentLiabilities": (
            "Accounts Payable",
            "Due to Related Parties",
            "Accrued Expenses",
            "Advances from Customers",
            "Short-Term Loans",
            "VAT Payable (Output VAT)",
            "Corporate Tax Payable",
        ),
        "Long-TermLiabilities": (
            "Long-Term Loans",
            "Loans from Related Parties",
            "Employee End-of-Service Benefits Provision",
        ),
    },
    "Equity": (
        "Share Capital / Owner’s Equity",
        "Retained Earnings",
        "Current Year Profit/Loss",
        "Dividends / Owner’s Drawings",
        "Owner's Current Account",
        "Investments in Subsidiaries / Associates",
    ),
    "Income": {
        "OperatingIncome": ("Sales Revenue", "Sales to related Parties"),
        "OtherIncome": (
            "Other Operating Income",
            "Interest Income",
            "Miscellaneous Income",
            "Interest from Related Parties",
        ),
    },
    "Expenses": {
        "DirectCosts": ("Direct Cost (COGS)", "Purchases from Related Parties"),
        "OtherExpense": (
            "Salaries & Wages",
            "Staff Benefits",
            "Training & Development",
            "Rent Expense",
            "Utility - Electricity & Water",
            "Utility - Telephone & Internet",
            "Office Supplies & Stationery",
            "Repairs & Maintenance",
            "Insurance Expense",
            "Marketing & Advertising",
            "Travel & Entertainment",
            "Professional Fees",
            "Legal Fees",
            "IT & Software Subscriptions",
            "Fuel Expenses",
            "Transportation & Logistics",
            "Interest Expense",
            "Interest to Related Parties",
            "Bank Charges",
            "VAT Expense (non-recoverable)",
            "Corporate Tax Expense",
            "Government Fees & Licenses",
            "Depreciation",
            "Amortization – Intangibles",
            "Bad Debt Expense",
            "Miscellaneous Expense",
        ),
    },
})

_PUNCTUATION_RE = re.compile(r"[^\w\s]", re.ASCII)
_WHITESPACE_RE = re.compile(r"\s+")


class AccountLookupEntry(NamedTuple):
    category: Category
    sub_category: str | None = None


def normalize_account_name(value: object) -> str:
    """Lower-case, punctuation to spaces, collapsed whitespace."""
    text = "" if value is None else str(value)
    text = _PUNCTUATION_RE.sub(" ", text.lower())
    return _WHITESPACE_RE.sub(" ", text).strip()


def _build_account_lookup() -> MappingProxyType[str, AccountLookupEntry]:
    lookup: dict[str, AccountLookupEntry] = {}
    for main, section in CHART_OF_ACCOUNTS.items():
        category = Category(main)
        if isinstance(section, tuple):
            for account in section:
                lookup[normalize_account_name(account)] = AccountLookupEntry(category)
        else:
            for sub, accounts in section.items():
                for account in accounts:
                    lookup[normalize_account_name(account)] = AccountLookupEntry(category, sub)
    return MappingProxyType(lookup)


ACCOUNT_LOOKUP = _build_account_lookup()
