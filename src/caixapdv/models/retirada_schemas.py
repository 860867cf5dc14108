"""Pydantic schemas for withdrawals."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from caixapdv.core.validators import sanitize_html, validate_currency


class RetiradaCreate(BaseModel):
    """Schema for recording a withdrawal."""

    valor: Decimal = Field(..., gt=0)
    observacao: str | None = Field(None, max_length=1000)
    caixa_abertura_id: UUID

    @field_validator("valor")
    @classmethod
    def validate_currency_fields(cls, v: Decimal) -> Decimal:
        """Validate currency values."""
        return validate_currency(v)

    @field_validator("observacao")
    @classmethod
    def validate_notes(cls, v: str | None) -> str | None:
        """Sanitize notes field."""
        return sanitize_html(v)


class RetiradaRead(BaseModel):
    """Schema for reading a withdrawal."""

    id: UUID
    data_retirada: datetime
    valor: Decimal
    observacao: str
    caixa_abertura_id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RetiradaComCaixaRead(RetiradaRead):
    """Withdrawal with its session's opening timestamp."""

    data_abertura: datetime | None = None
