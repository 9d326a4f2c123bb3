"""Console interface for the expense tracker."""

from __future__ import annotations

import argparse
import logging
import sys
from decimal import Decimal
from typing import Callable, List, Optional, TextIO

from expense_core.config import Settings, configure_logging, parse_log_level, parse_max_categories
from expense_core.exceptions import InvalidAmountError, NonPositiveAmountError, ValidationError
from expense_core.models import Expense
from expense_core.services import ExpenseStore
from expense_core.validators import format_amount, is_valid_date, parse_amount

logger = logging.getLogger(__name__)

BANNER = (
    "---------------------------------------------------------------\n"
    "||                                                           ||\n"
    "||     Welcome to your personal expense tracking system!     ||\n"
    "||                                                           ||\n"
    "---------------------------------------------------------------\n"
)

NO_EXPENSES = (
    "-------------------------------------------------------------------------\n"
    "||                                                                     ||\n"
    "||                         No Expenses Found!                          ||\n"
    "||                                                                     ||\n"
    "||  You haven't recorded any expenses yet.                             ||\n"
    "||  Use option 1 from the main menu to add your first expense.         ||\n"
    "||                                                                     ||\n"
    "-------------------------------------------------------------------------\n"
)

SUMMARY_HEADER = (
    "-------------------------------------------------------------------------\n"
    "||                                                                     ||\n"
    "||                          EXPENSE SUMMARY                            ||\n"
    "||                                                                     ||\n"
    "-------------------------------------------------------------------------\n"
)

MAIN_MENU = (
    "\n=== Expense Tracker Menu ===\n"
    "1. Add Expense\n"
    "2. View Expenses\n"
    "3. Get Summary\n"
    "4. Exit"
)

FILTER_MENU = (
    "\nFilter options:\n"
    "1. View all expenses\n"
    "2. Filter by date range\n"
    "3. Filter by category"
)


class Console:
    """Line-oriented input/output pair; swapped out in tests."""

    def __init__(self, read: Callable[[str], str] = input, out: TextIO = sys.stdout) -> None:
        self._read = read
        self._out = out

    def ask(self, prompt: str) -> str:
        return self._read(prompt)

    def say(self, text: str = "") -> None:
        print(text, file=self._out)


# Prompt helpers -----------------------------------------------------------
def prompt_choice(console: Console, prompt: str, low: int, high: int) -> int:
    message = prompt
    while True:
        raw = console.ask(message).strip()
        try:
            choice = int(raw)
        except ValueError:
            message = "Error: Please enter a valid number: "
            continue
        if low <= choice <= high:
            return choice
        message = f"Error: Please enter a number between {low} and {high}: "


def prompt_date(console: Console, prompt: str = "Enter date (YYYY-MM-DD): ") -> str:
    while True:
        value = console.ask(prompt).strip()
        if is_valid_date(value):
            return value
        console.say("Error: Invalid date format. Please use YYYY-MM-DD format.")


def prompt_amount(console: Console) -> Decimal:
    while True:
        raw = console.ask("Enter amount: ")
        try:
            return parse_amount(raw, "amount")
        except NonPositiveAmountError:
            console.say("Error: Amount must be positive. Please try again.")
        except InvalidAmountError:
            console.say("Error: Please enter a valid number.")


# Rendering ----------------------------------------------------------------
def _format_expense(expense: Expense, *, with_category: bool = True) -> str:
    parts = [f"Date: {expense.date}", f"Amount: ${format_amount(expense.amount)}"]
    if with_category:
        parts.append(f"Category: {expense.category}")
    parts.append(f"Description: {expense.description}")
    return ", ".join(parts)


def _print_expenses(console: Console, expenses: List[Expense], *, with_category: bool = True) -> None:
    for expense in expenses:
        console.say(_format_expense(expense, with_category=with_category))


# Menu handlers ------------------------------------------------------------
def handle_add(console: Console, store: ExpenseStore) -> None:
    date = prompt_date(console)
    amount = prompt_amount(console)
    category = console.ask("Enter category: ")
    description = console.ask("Enter description: ")

    result = store.add(date, amount, category, description)
    if result:
        console.say("\nExpense added successfully!")
    else:
        console.say(f"Error: {result.reason}")


def handle_view(console: Console, store: ExpenseStore) -> None:
    console.say(FILTER_MENU)
    choice = prompt_choice(console, "Enter filter choice (1-3): ", 1, 3)

    if not len(store):
        console.say(NO_EXPENSES)
        return

    if choice == 1:
        console.say("\n--- All Expenses ---")
        _print_expenses(console, store.all())
    elif choice == 2:
        start = prompt_date(console)
        end = prompt_date(console)
        if start > end:
            console.say("Warning: Start date is after end date. Swapping dates.")
            start, end = end, start
        console.say(f"\n--- Expenses from {start} to {end} ---")
        expenses = store.by_date_range(start, end)
        if not expenses:
            console.say("No expenses found in the specified date range.")
            return
        _print_expenses(console, expenses)
    else:
        category = console.ask("Enter category to filter by: ")
        if not category:
            console.say("Error: Category cannot be empty.")
            return
        console.say(f"\n--- Expenses in category: {category} ---")
        expenses = store.by_category(category)
        if not expenses:
            console.say(f"No expenses found in category: {category}")
            return
        _print_expenses(console, expenses, with_category=False)


def handle_summary(console: Console, store: ExpenseStore) -> None:
    if not len(store):
        console.say(NO_EXPENSES)
        return

    summary = store.summary()
    console.say(SUMMARY_HEADER)
    console.say("Category Breakdown")
    if summary.capped:
        console.say("Warning: Maximum categories exceeded. Some categories may not be displayed.")
    for item in summary.categories:
        console.say(f" - {item.category}: ${format_amount(item.total)}")
    console.say(f"\nTotal Expenses: ${format_amount(summary.grand_total)}")


def run(console: Console, store: ExpenseStore) -> int:
    console.say(BANNER)
    handlers = {1: handle_add, 2: handle_view, 3: handle_summary}
    try:
        while True:
            console.say(MAIN_MENU)
            choice = prompt_choice(console, "\nEnter your choice (1-4): ", 1, 4)
            if choice == 4:
                break
            handlers[choice](console, store)
    except EOFError:
        logger.debug("End of input reached; leaving the menu loop")
    console.say("Thanks for using Expense Tracker!")
    console.say("Goodbye!")
    return 0


def _max_categories_arg(value: str) -> int:
    try:
        return parse_max_categories(value)
    except ValidationError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _log_level_arg(value: str) -> str:
    try:
        return parse_log_level(value)
    except ValidationError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Expense Tracker CLI")
    parser.add_argument(
        "--max-categories",
        type=_max_categories_arg,
        help="Distinct categories shown in the summary (default: EXPENSE_TRACKER_MAX_CATEGORIES or 50)",
    )
    parser.add_argument(
        "--log-level",
        type=_log_level_arg,
        help="Logging level (default: EXPENSE_TRACKER_LOG_LEVEL or WARNING)",
    )
    return parser


def main(argv: Optional[List[str]] = None, console: Optional[Console] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = Settings.from_env()
    except ValidationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 1

    configure_logging(args.log_level or settings.log_level)
    store = ExpenseStore(max_categories=args.max_categories or settings.max_categories)
    return run(console or Console(), store)


if __name__ == "__main__":
    raise SystemExit(main())
