"""Shared fixtures for the expense tracker tests."""

import io
from decimal import Decimal
from typing import Iterable, List

import pytest

from expense_core.config import Settings
from expense_core.services import ExpenseStore
from expense_tracker.cli import Console


class ScriptedConsole(Console):
    """Console fed from a list of answers; raises EOFError when they run out."""

    def __init__(self, answers: Iterable[str]) -> None:
        self.prompts: List[str] = []
        self.buffer = io.StringIO()
        self._answers = iter(answers)
        super().__init__(read=self._next_answer, out=self.buffer)

    def _next_answer(self, prompt: str) -> str:
        self.prompts.append(prompt)
        try:
            return next(self._answers)
        except StopIteration:
            raise EOFError from None

    @property
    def output(self) -> str:
        return self.buffer.getvalue()


class ExplodingList(list):
    """List whose append fails as if the allocator ran out of memory."""

    def append(self, item):
        raise MemoryError


@pytest.fixture
def exploding_list():
    return ExplodingList


@pytest.fixture
def store():
    return ExpenseStore()


@pytest.fixture
def sample_store():
    """Store holding the Food/Transport/Food scenario."""
    store = ExpenseStore()
    store.add("2025-05-01", Decimal("15.99"), "Food", "Lunch")
    store.add("2025-05-02", Decimal("50.00"), "Transport", "Gas")
    store.add("2025-05-03", Decimal("25.50"), "Food", "Dinner")
    return store


@pytest.fixture
def scripted_console():
    return ScriptedConsole


@pytest.fixture
def settings():
    return Settings(env_name="dev")
