"""Data models for the expense tracker domain."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional

from .validators import format_amount

__all__ = ["AddResult", "AddStatus", "CategoryTotal", "Expense", "Summary"]


@dataclass(frozen=True)
class Expense:
    date: str
    amount: Decimal
    category: str
    description: str

    def to_dict(self) -> Dict[str, Any]:
        """Serialise the expense to JSON-friendly natives."""
        return {
            "date": self.date,
            "amount": format_amount(self.amount),
            "category": self.category,
            "description": self.description,
        }


@dataclass(frozen=True)
class CategoryTotal:
    category: str
    total: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return {"category": self.category, "total": format_amount(self.total)}


@dataclass(frozen=True)
class Summary:
    """Per-category breakdown in first-seen order plus the grand total.

    Categories past the store's cap are listed in ``dropped_categories``; their
    amounts are still part of ``grand_total``.
    """

    categories: List[CategoryTotal] = field(default_factory=list)
    grand_total: Decimal = Decimal("0")
    dropped_categories: List[str] = field(default_factory=list)

    @property
    def capped(self) -> bool:
        return bool(self.dropped_categories)

    def __iter__(self) -> Iterator[Any]:
        # Allows ``categories, total = store.summary()``.
        yield self.categories
        yield self.grand_total

    def to_dict(self) -> Dict[str, Any]:
        return {
            "categories": [item.to_dict() for item in self.categories],
            "total": format_amount(self.grand_total),
            "dropped_categories": list(self.dropped_categories),
        }


class AddStatus(str, Enum):
    ADDED = "added"
    REJECTED = "rejected"
    ALLOCATION_FAILED = "allocation_failed"


@dataclass(frozen=True)
class AddResult:
    """Outcome of ``ExpenseStore.add``; truthy only when the expense was stored."""

    status: AddStatus
    expense: Optional[Expense] = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is AddStatus.ADDED

    def __bool__(self) -> bool:
        return self.ok
