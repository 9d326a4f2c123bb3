"""Core business logic package for the expense tracker."""

from .config import Settings
from .exceptions import ValidationError
from .models import AddResult, AddStatus, CategoryTotal, Expense, Summary
from .services import ExpenseStore
from .validators import format_amount, is_valid_date

__all__ = [
    "AddResult",
    "AddStatus",
    "CategoryTotal",
    "Expense",
    "ExpenseStore",
    "Settings",
    "Summary",
    "ValidationError",
    "format_amount",
    "is_valid_date",
]
