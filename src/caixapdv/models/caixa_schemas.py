"""Pydantic schemas for register session API."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from caixapdv.core.validators import sanitize_html, validate_currency


class CaixaAbrir(BaseModel):
    """Schema for opening the register."""

    valor_inicial: Decimal = Field(..., ge=0, description="Cash in the drawer at opening")
    observacao: str | None = Field(None, max_length=1000)

    @field_validator("valor_inicial")
    @classmethod
    def validate_currency_fields(cls, v: Decimal) -> Decimal:
        """Validate currency values."""
        return validate_currency(v)

    @field_validator("observacao")
    @classmethod
    def validate_notes(cls, v: str | None) -> str | None:
        """Sanitize notes field."""
        return sanitize_html(v)


class CaixaFechar(BaseModel):
    """Schema for closing a register session."""

    caixa_abertura_id: UUID
    observacoes: str | None = Field(None, max_length=1000)

    @field_validator("observacoes")
    @classmethod
    def validate_notes(cls, v: str | None) -> str | None:
        """Sanitize notes field."""
        return sanitize_html(v)


class CaixaRead(BaseModel):
    """Schema for reading a register session."""

    id: UUID
    data_abertura: datetime
    valor_inicial: Decimal
    observacao: str
    status: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CaixaStatus(BaseModel):
    """Whether a session is open, and which one."""

    caixaAberto: bool
    caixaAtual: CaixaRead | None = None


class CaixaFechamentoRead(BaseModel):
    """Schema for reading a closing summary."""

    id: UUID
    data_fechamento: datetime
    valor_abertura: Decimal
    total_vendas: Decimal
    retiradas: Decimal
    saldo_final: Decimal
    observacoes: str
    caixa_abertura_id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ClosingTotals(BaseModel):
    """Totals of one register session at close time."""

    vendas_sistema: Decimal = Field(..., description="Sum of webhook sales")
    vendas_manuais: Decimal = Field(..., description="Sum of manual sales")
    total_vendas: Decimal
    total_retiradas: Decimal
    dinheiro_vendas_sistema: Decimal = Field(..., description="Webhook sales paid in cash")
    dinheiro_vendas_manuais: Decimal = Field(..., description="Manual sales paid in cash")
    total_dinheiro: Decimal
    saldo_final: Decimal = Field(..., description="Opening cash + cash sales - withdrawals")


class CaixaFechamentoResponse(BaseModel):
    """Close result: persisted summary plus the full breakdown."""

    success: bool = True
    data: CaixaFechamentoRead
    resumo: ClosingTotals
