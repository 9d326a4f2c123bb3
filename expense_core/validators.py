"""Validation helpers shared across the store and its front ends."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from .exceptions import InvalidAmountError, NonPositiveAmountError, ValidationError

DATE_LENGTH = 10
DATE_DASH_POSITIONS = (4, 7)
ASCII_DIGITS = frozenset("0123456789")


def _quantize_two_decimals(amount: Decimal) -> Decimal:
    """Round the amount to two decimal places using HALF_UP rounding."""
    return amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def is_valid_date(value: object) -> bool:
    """Check the fixed-width YYYY-MM-DD shape; no calendar check is made."""
    if not isinstance(value, str) or len(value) != DATE_LENGTH:
        return False
    for index, char in enumerate(value):
        if index in DATE_DASH_POSITIONS:
            if char != "-":
                return False
        elif char not in ASCII_DIGITS:
            return False
    return True


def validate_date(value: object, field: str) -> str:
    if not is_valid_date(value):
        raise ValidationError(f"{field} must use the YYYY-MM-DD format")
    return value  # type: ignore[return-value]


def parse_amount(raw: object, field: str) -> Decimal:
    """Convert raw input to a positive Decimal, keeping its full precision."""
    if isinstance(raw, bool):
        raise InvalidAmountError(f"{field} must be a numeric value")
    try:
        amount = Decimal(str(raw).strip())
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise InvalidAmountError(f"{field} must be a numeric value") from exc

    if not amount.is_finite():
        raise InvalidAmountError(f"{field} must be a numeric value")
    if amount <= 0:
        raise NonPositiveAmountError(f"{field} must be greater than zero")
    return amount


def validate_required_str(value: object, field: str) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    if not value:
        raise ValidationError(f"{field} cannot be empty")
    return value


def format_amount(amount: Decimal) -> str:
    return f"{_quantize_two_decimals(amount):.2f}"
