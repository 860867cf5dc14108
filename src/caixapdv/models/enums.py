"""
Enums for domain models.
Enums provide type safety and clarity. Validation for categorical fields.
"""

import enum


class SessionStatus(str, enum.Enum):
    """Register session lifecycle states."""

    OPEN = "OPEN"
    CLOSED = "CLOSED"


class PaymentType(str, enum.Enum):
    """Well-known payment types. Stored as free text, so others are accepted."""

    PENDING = "PENDING"
    CASH = "CASH"
    CARD = "CARD"
    PIX = "PIX"


DEFAULT_ORDER_TYPE = "other"
