"""In-memory expense store and its query operations."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from .config import DEFAULT_MAX_CATEGORIES
from .exceptions import ValidationError
from .models import AddResult, AddStatus, CategoryTotal, Expense, Summary
from .validators import parse_amount, validate_date, validate_required_str

logger = logging.getLogger(__name__)


class ExpenseStore:
    """Owns expense records in insertion order; records are never removed."""

    def __init__(self, max_categories: int = DEFAULT_MAX_CATEGORIES) -> None:
        if max_categories < 1:
            raise ValidationError("max_categories must be at least 1")
        self._max_categories = max_categories
        self._expenses: List[Expense] = []

    # Public API -----------------------------------------------------------
    def add(self, date: object, amount: object, category: object, description: object) -> AddResult:
        try:
            expense = Expense(**self._validate_payload(date, amount, category, description))
        except ValidationError as exc:
            logger.info("Rejected expense: %s", exc)
            return AddResult(AddStatus.REJECTED, reason=str(exc))

        try:
            self._expenses.append(expense)
        except MemoryError:
            logger.error("Memory allocation failed while storing expense dated %s", expense.date)
            return AddResult(
                AddStatus.ALLOCATION_FAILED,
                reason="Memory allocation failed. Cannot add expense.",
            )

        logger.debug("Stored expense #%d: %s %s", len(self._expenses), expense.date, expense.category)
        return AddResult(AddStatus.ADDED, expense=expense)

    def all(self) -> List[Expense]:
        return list(self._expenses)

    def by_date_range(self, start: object, end: object) -> List[Expense]:
        """Return expenses dated within ``[start, end]``; reversed bounds are swapped."""
        start = validate_date(start, "start")
        end = validate_date(end, "end")
        if start > end:
            logger.warning("Start date %s is after end date %s; swapping", start, end)
            start, end = end, start
        return list(self._apply_filters(self._expenses, start=start, end=end))

    def by_category(self, category: str) -> List[Expense]:
        if not isinstance(category, str):
            raise ValidationError("category must be a string")
        return list(self._apply_filters(self._expenses, category=category))

    def summary(self) -> Summary:
        totals: Dict[str, Decimal] = {}
        dropped: List[str] = []
        grand_total = Decimal("0")

        for expense in self._expenses:
            if expense.category in totals:
                totals[expense.category] += expense.amount
            elif len(totals) < self._max_categories:
                totals[expense.category] = expense.amount
            elif expense.category not in dropped:
                logger.warning(
                    "Maximum of %d categories exceeded; omitting %r from the breakdown",
                    self._max_categories,
                    expense.category,
                )
                dropped.append(expense.category)
            grand_total += expense.amount

        return Summary(
            categories=[CategoryTotal(name, total) for name, total in totals.items()],
            grand_total=grand_total,
            dropped_categories=dropped,
        )

    @property
    def max_categories(self) -> int:
        return self._max_categories

    def __len__(self) -> int:
        return len(self._expenses)

    # Internal helpers -----------------------------------------------------
    def _validate_payload(
        self, date: object, amount: object, category: object, description: object
    ) -> Dict[str, object]:
        return {
            "date": validate_date(date, "date"),
            "amount": parse_amount(amount, "amount"),
            "category": validate_required_str(category, "category"),
            "description": validate_required_str(description, "description"),
        }

    def _apply_filters(
        self,
        records: Iterable[Expense],
        *,
        category: Optional[str] = None,
        start: Optional[str] = None,
        end: Optional[str] = None,
    ) -> Iterable[Expense]:
        def matches(expense: Expense) -> bool:
            if category is not None and expense.category != category:
                return False
            if start is not None and expense.date < start:
                return False
            if end is not None and expense.date > end:
                return False
            return True

        return filter(matches, records)
