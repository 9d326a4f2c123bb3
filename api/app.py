"""Flask REST API exposing the in-memory expense store."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Optional

from flask import Flask, jsonify, request
from flask_cors import CORS

from expense_core.config import Settings
from expense_core.exceptions import ValidationError
from expense_core.models import AddStatus
from expense_core.services import ExpenseStore
from expense_core.validators import format_amount

STATUS_CODES = {
    AddStatus.ADDED: 201,
    AddStatus.REJECTED: 400,
    AddStatus.ALLOCATION_FAILED: 507,
}


def create_app(store: Optional[ExpenseStore] = None, settings: Optional[Settings] = None) -> Flask:
    app = Flask(__name__)
    settings = settings or Settings.from_env()

    if settings.is_development:
        CORS(app, resources={r"/*": {"origins": "*"}}, supports_credentials=True)
    elif settings.allowed_origins:
        CORS(app, resources={r"/*": {"origins": settings.allowed_origins}}, supports_credentials=True)
    else:
        CORS(app)

    if store is None:
        store = ExpenseStore(max_categories=settings.max_categories)

    def _success(payload: Any, status: int = 200):
        return jsonify(payload), status

    def _handle_error(exc: Exception, status: int, message: str):
        app.logger.error("%s: %s", message, exc)
        return jsonify({"error": message, "details": str(exc)}), status

    @app.errorhandler(ValidationError)
    def handle_validation_error(exc: ValidationError):
        return _handle_error(exc, 400, "Validation error")

    def _json_body() -> Dict[str, Any]:
        if not request.is_json:
            raise ValidationError("Request content must be application/json")
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Malformed JSON body")
        return data

    @app.get("/expenses")
    def list_expenses():
        category = request.args.get("category")
        start = request.args.get("start")
        end = request.args.get("end")

        if (start is None) != (end is None):
            raise ValidationError("start and end must be supplied together")
        if start is not None:
            expenses = store.by_date_range(start, end)
            if category is not None:
                expenses = [expense for expense in expenses if expense.category == category]
        elif category is not None:
            expenses = store.by_category(category)
        else:
            expenses = store.all()

        total = sum((expense.amount for expense in expenses), start=Decimal("0"))
        return _success({
            "items": [expense.to_dict() for expense in expenses],
            "total": format_amount(total),
        })

    @app.post("/expenses")
    def create_expense():
        payload = _json_body()
        result = store.add(
            payload.get("date"),
            payload.get("amount"),
            payload.get("category"),
            payload.get("description"),
        )
        status = STATUS_CODES[result.status]
        if not result:
            app.logger.error("Expense not added (%s): %s", result.status.value, result.reason)
            return jsonify({"error": result.status.value, "details": result.reason}), status
        return _success(result.expense.to_dict(), status)

    @app.get("/summary")
    def summary():
        return _success(store.summary().to_dict())

    return app
