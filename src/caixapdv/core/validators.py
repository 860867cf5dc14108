"""Reusable validation utilities for input sanitization."""

import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from caixapdv.core.errors import ValidationError

# Largest value a NUMERIC(10, 2) column holds
MAX_CURRENCY = Decimal("99999999.99")


def validate_currency(value: Decimal | float | str, max_value: Decimal = MAX_CURRENCY) -> Decimal:
    """
    Validate currency input.

    Args:
        value: Currency value to validate
        max_value: Maximum allowed value (default matches NUMERIC(10, 2))

    Returns:
        Validated Decimal with max 2 decimal places

    Raises:
        ValueError: If value is negative, exceeds max, or has >2 decimals
    """
    try:
        decimal_value = Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise ValueError(f"Invalid currency format: {value}") from e

    if not decimal_value.is_finite():
        raise ValueError(f"Invalid currency format: {value}")

    if decimal_value < 0:
        raise ValueError("Currency value cannot be negative")

    if decimal_value > max_value:
        raise ValueError(f"Currency value exceeds maximum allowed: {max_value}")

    if decimal_value.as_tuple().exponent < -2:
        raise ValueError("Currency value cannot have more than 2 decimal places")

    return decimal_value


def sanitize_html(value: str | None) -> str | None:
    """
    Strip/escape HTML tags to prevent XSS.

    Args:
        value: Text that may contain HTML

    Returns:
        Sanitized text or None if empty
    """
    if not value:
        return None

    # Remove all HTML tags
    cleaned = re.sub(r"<[^>]+>", "", value)

    # Escape remaining special chars
    cleaned = (
        cleaned.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#x27;")
    )

    return cleaned.strip() if cleaned.strip() else None


def parse_date_param(value: str) -> date:
    """Parse a YYYY-MM-DD path parameter.

    Raises:
        ValidationError: If the value is not a calendar date
    """
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError as e:
        raise ValidationError(
            f"Invalid date '{value}', expected YYYY-MM-DD",
            details={"data": value},
        ) from e
