"""Tests for the Flask REST API."""

from decimal import Decimal

import pytest

from api.app import create_app
from expense_core.config import Settings
from expense_core.services import ExpenseStore


@pytest.fixture
def client(sample_store, settings):
    app = create_app(store=sample_store, settings=settings)
    app.config.update(TESTING=True)
    return app.test_client()


class TestListExpenses:

    def test_lists_all_in_insertion_order(self, client):
        response = client.get("/expenses")
        assert response.status_code == 200
        body = response.get_json()
        assert [item["description"] for item in body["items"]] == ["Lunch", "Gas", "Dinner"]
        assert body["total"] == "91.49"

    def test_filters_by_category(self, client):
        body = client.get("/expenses", query_string={"category": "Food"}).get_json()
        assert len(body["items"]) == 2
        assert body["total"] == "41.49"

    def test_filters_by_reversed_date_range(self, client):
        body = client.get(
            "/expenses", query_string={"start": "2025-05-02", "end": "2025-05-01"}
        ).get_json()
        assert [item["date"] for item in body["items"]] == ["2025-05-01", "2025-05-02"]

    def test_combines_range_and_category(self, client):
        body = client.get(
            "/expenses",
            query_string={"start": "2025-05-01", "end": "2025-05-02", "category": "Food"},
        ).get_json()
        assert [item["description"] for item in body["items"]] == ["Lunch"]

    def test_requires_both_bounds(self, client):
        response = client.get("/expenses", query_string={"start": "2025-05-01"})
        assert response.status_code == 400
        assert response.get_json()["error"] == "Validation error"

    def test_rejects_malformed_bound(self, client):
        response = client.get("/expenses", query_string={"start": "yesterday", "end": "2025-05-01"})
        assert response.status_code == 400


class TestCreateExpense:

    def test_creates_expense(self, client, sample_store):
        response = client.post(
            "/expenses",
            json={"date": "2025-05-04", "amount": "12.5", "category": "Books", "description": "Novel"},
        )
        assert response.status_code == 201
        assert response.get_json() == {
            "date": "2025-05-04",
            "amount": "12.50",
            "category": "Books",
            "description": "Novel",
        }
        assert sample_store.all()[-1].amount == Decimal("12.5")

    def test_half_way_amounts_round_up(self, client):
        """JSON amounts round the same way as the console."""
        created = client.post(
            "/expenses",
            json={"date": "2025-05-04", "amount": "0.125", "category": "Misc", "description": "Stamp"},
        )
        assert created.get_json()["amount"] == "0.13"

        listed = client.get("/expenses", query_string={"category": "Misc"}).get_json()
        assert listed["items"][0]["amount"] == "0.13"
        assert listed["total"] == "0.13"

        summary = client.get("/summary").get_json()
        assert {"category": "Misc", "total": "0.13"} in summary["categories"]
        assert summary["total"] == "91.62"

    def test_rejects_invalid_payload(self, client, sample_store):
        response = client.post(
            "/expenses",
            json={"date": "2025-05-04", "amount": -1, "category": "Books", "description": "Novel"},
        )
        assert response.status_code == 400
        assert response.get_json() == {"error": "rejected", "details": "amount must be greater than zero"}
        assert len(sample_store) == 3

    def test_requires_json(self, client):
        response = client.post("/expenses", data="date=2025-05-04")
        assert response.status_code == 400
        assert "application/json" in response.get_json()["details"]

    def test_reports_allocation_failure(self, client, sample_store, exploding_list):
        sample_store._expenses = exploding_list(sample_store.all())
        response = client.post(
            "/expenses",
            json={"date": "2025-05-04", "amount": 1, "category": "Books", "description": "Novel"},
        )
        assert response.status_code == 507
        assert response.get_json()["error"] == "allocation_failed"


class TestSummary:

    def test_summary_payload(self, client):
        body = client.get("/summary").get_json()
        assert body == {
            "categories": [
                {"category": "Food", "total": "41.49"},
                {"category": "Transport", "total": "50.00"},
            ],
            "total": "91.49",
            "dropped_categories": [],
        }

    def test_summary_reports_dropped_categories(self):
        store = ExpenseStore(max_categories=1)
        store.add("2025-05-01", "1", "A", "x")
        store.add("2025-05-01", "2", "B", "x")
        client = create_app(store=store, settings=Settings()).test_client()

        body = client.get("/summary").get_json()
        assert body["categories"] == [{"category": "A", "total": "1.00"}]
        assert body["dropped_categories"] == ["B"]
        assert body["total"] == "3.00"

    def test_builds_own_store_from_settings(self):
        client = create_app(settings=Settings(max_categories=3)).test_client()
        assert client.get("/expenses").get_json() == {"items": [], "total": "0.00"}
