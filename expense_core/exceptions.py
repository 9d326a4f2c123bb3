"""Domain-specific exceptions for the expense tracker core."""


class ValidationError(ValueError):
    """Raised when provided data does not meet validation requirements."""


class InvalidAmountError(ValidationError):
    """Raised when an amount is not a finite number."""


class NonPositiveAmountError(ValidationError):
    """Raised when an amount is zero or negative."""
