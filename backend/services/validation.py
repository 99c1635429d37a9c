"""Shared validation utilities for Masrofy services."""

import math


class ValidationError(ValueError):
    """Raised when a domain rule is violated."""

    pass


def validate_positive_amount(amount: float, what: str = "Amount") -> float:
    """
    Validate that an amount is strictly positive.

    Raises:
        ValidationError: If amount is zero, negative or not finite
    """
    if amount is None or not math.isfinite(amount) or amount <= 0:
        raise ValidationError(f"{what} must be greater than zero, got {amount}")
    return amount


def validate_month(year: int, month: int) -> None:
    """
    Validate a calendar month.

    Raises:
        ValidationError: If month is outside 1-12 or year is not positive
    """
    if month < 1 or month > 12:
        raise ValidationError("Month must be between 1 and 12")
    if year < 1:
        raise ValidationError(f"Invalid year: {year}")
