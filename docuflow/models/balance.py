from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any

"""Opening-balance import models.

ImportedBalanceRow is created from one spreadsheet data row, handed to the
opening-balance form and never mutated afterwards. ImportResult aggregates the
entries of one imported sheet together with the skip tally.
"""

__all__ = [
    "Category",
    "ColumnRole",
    "ColumnRoleAssignment",
    "OpeningBalanceAccount",
    "ImportedBalanceRow",
    "SkippedRow",
    "ImportResult",
    "IMPORTED_SUB_CATEGORY",
]

IMPORTED_SUB_CATEGORY = "Imported"


class Category(Enum):
    """Top-level ledger category.

    Assets and Expenses increase on the debit side (debit-normal); the others
    increase on the credit side (credit-normal).
    """
    ASSETS = "Assets"
    LIABILITIES = "Liabilities"
    EQUITY = "Equity"
    INCOME = "Income"
    EXPENSES = "Expenses"

    @property
    def debit_normal(self) -> bool:
        return self in (Category.ASSETS, Category.EXPENSES)


class ColumnRole(Enum):
    ACCOUNT = "account"
    CATEGORY = "category"
    DEBIT = "debit"
    CREDIT = "credit"
    BALANCE = "balance"


@dataclass
class ColumnRoleAssignment:
    """Column index per logical role; None means unassigned.

    Mutable while roles are being resolved, then treated as read-only.
    """
    account: int | None = None
    category: int | None = None
    debit: int | None = None
    credit: int | None = None
    balance: int | None = None

    def get(self, role: ColumnRole) -> int | None:
        return getattr(self, role.value)

    def set(self, role: ColumnRole, index: int | None) -> None:
        setattr(self, role.value, index)

    def claimed(self) -> set[int]:
        return {i for i in asdict(self).values() if i is not None}

    def to_dict(self) -> dict[str, int | None]:
        return asdict(self)


@dataclass(frozen=True)
class OpeningBalanceAccount:
    name: str
    debit: float = 0.0  # always >= 0
    credit: float = 0.0  # always >= 0
    sub_category: str = IMPORTED_SUB_CATEGORY
    is_new: bool = True


@dataclass(frozen=True)
class ImportedBalanceRow:
    category: Category
    account: OpeningBalanceAccount

    def to_dict(self) -> dict[str, Any]:
        # camelCase keys match what the opening-balance form consumes
        return {
            "category": self.category.value,
            "account": {
                "name": self.account.name,
                "debit": self.account.debit,
                "credit": self.account.credit,
                "subCategory": self.account.sub_category,
                "isNew": self.account.is_new,
            },
        }


@dataclass(frozen=True)
class SkippedRow:
    row: int  # 1-based sheet row number
    account: str
    reason: str  # UPPER_SNAKE


@dataclass(frozen=True)
class ImportResult:
    entries: list[ImportedBalanceRow]
    skipped: int
    sheet_name: str | None = None
    header_row: int | None = None  # 0-based index into the sheet grid
    columns: ColumnRoleAssignment = field(default_factory=ColumnRoleAssignment)
    skipped_rows: list[SkippedRow] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "entries": [e.to_dict() for e in self.entries],
            "skipped": self.skipped,
        }
