"""Pydantic schemas for sales, manual sales and webhook orders."""

from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from caixapdv.core.validators import sanitize_html, validate_currency


class VendaRead(BaseModel):
    """Schema for reading a webhook sale."""

    id: UUID
    data_venda: datetime
    dados_pedido: dict[str, Any]
    tipo_pagamento: str
    valor_total: Decimal
    caixa_abertura_id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class VendaComCaixaRead(VendaRead):
    """Sale joined with its session's opening data."""

    valor_inicial: Decimal | None = None
    data_abertura: datetime | None = None


class VendaPagamentoUpdate(BaseModel):
    """Schema for setting the payment type of a sale."""

    tipo_pagamento: str = Field(..., min_length=1, max_length=50)

    @field_validator("tipo_pagamento")
    @classmethod
    def strip_payment_type(cls, v: str) -> str:
        cleaned = v.strip()
        if not cleaned:
            raise ValueError("tipo_pagamento cannot be empty")
        return cleaned


class VendaManualCreate(BaseModel):
    """Schema for entering a manual sale."""

    tipo_pagamento: str = Field(..., min_length=1, max_length=50)
    valor: Decimal = Field(..., gt=0)
    descricao: str | None = Field(None, max_length=1000)
    caixa_abertura_id: UUID

    @field_validator("tipo_pagamento")
    @classmethod
    def strip_payment_type(cls, v: str) -> str:
        cleaned = v.strip()
        if not cleaned:
            raise ValueError("tipo_pagamento cannot be empty")
        return cleaned

    @field_validator("valor")
    @classmethod
    def validate_currency_fields(cls, v: Decimal) -> Decimal:
        """Validate currency values."""
        return validate_currency(v)

    @field_validator("descricao")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        """Sanitize description field."""
        return sanitize_html(v)


class VendaManualRead(BaseModel):
    """Schema for reading a manual sale."""

    id: UUID
    data_venda: datetime
    tipo_pagamento: str
    valor: Decimal
    descricao: str
    caixa_abertura_id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class VendaDoDiaRead(BaseModel):
    """
    One entry of the merged daily sales list.

    Webhook sales carry dados_pedido/valor_total and manual=False;
    manual sales carry valor/descricao, manual=True and origem="manual".
    """

    id: UUID
    data_venda: datetime
    tipo_pagamento: str
    caixa_abertura_id: UUID
    created_at: datetime
    updated_at: datetime
    data_abertura: datetime | None = None
    manual: bool
    origem: str | None = None
    dados_pedido: dict[str, Any] | None = None
    valor_total: Decimal | None = None
    valor: Decimal | None = None
    descricao: str | None = None


# Webhook payloads


class ProdutoPedido(BaseModel):
    """Line item of an external order. Values are kept exactly as sent."""

    nome_produto: Any = None
    quantidade: Any = None
    valor: Any = None
    adicionais: Any = None
    complementos: Any = None


class PedidoWebhook(BaseModel):
    """Order as posted by the external ordering platform."""

    valor_total: Decimal = Field(..., gt=0)
    produtos: list[ProdutoPedido] = Field(..., min_length=1)
    # Only valor_total and produtos are checked; the rest is opaque
    nome_cliente: Any = None
    telefone_cliente: Any = None
    tipo_pedido: Any = None
    endereco_completo: Any = None
    data_hora_pedido: Any = None
    tipo_pagamento: Any = None

    @field_validator("valor_total")
    @classmethod
    def validate_currency_fields(cls, v: Decimal) -> Decimal:
        """Validate currency values."""
        return validate_currency(v)


class WebhookVendaResponse(BaseModel):
    """Webhook acknowledgement."""

    success: bool = True
    message: str
    venda_id: UUID
