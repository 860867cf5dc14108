"""Sale models: webhook orders and manually entered sales."""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import JSON, ForeignKey, Index, Numeric, String, Text, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from caixapdv.core.db import Base
from caixapdv.models.enums import PaymentType
from caixapdv.utils.datetime import now_utc


class Venda(Base):
    """
    A sale received from the external ordering system.

    Attributes:
        id: Unique identifier (UUID v4)
        data_venda: When the order was placed (falls back to receipt time)
        dados_pedido: Normalized order payload (customer, products, ...)
        tipo_pagamento: Payment type, PENDING until the operator sets it
        valor_total: Order total
        caixa_abertura_id: Session that was open when the order arrived
    """

    __tablename__ = "vendas"
    __table_args__ = (
        Index("idx_vendas_data", "data_venda"),
        Index("idx_vendas_caixa", "caixa_abertura_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    data_venda: Mapped[datetime] = mapped_column(nullable=False, default=now_utc)

    dados_pedido: Mapped[dict[str, Any]] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"),
        nullable=False,
    )

    tipo_pagamento: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default=PaymentType.PENDING.value,
    )

    valor_total: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=now_utc)
    updated_at: Mapped[datetime] = mapped_column(
        nullable=False,
        default=now_utc,
        onupdate=now_utc,
    )

    caixa_abertura_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("caixa_abertura.id", ondelete="CASCADE"),
        nullable=False,
    )

    def __repr__(self) -> str:
        return (
            f"<Venda(id={self.id}, valor_total={self.valor_total}, "
            f"tipo_pagamento={self.tipo_pagamento})>"
        )


class VendaManual(Base):
    """A sale typed in by the operator."""

    __tablename__ = "vendas_manuais"
    __table_args__ = (
        Index("idx_vendas_manuais_caixa", "caixa_abertura_id"),
        Index("idx_vendas_manuais_tipo", "tipo_pagamento"),
        Index("idx_vendas_manuais_data", "data_venda"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    data_venda: Mapped[datetime] = mapped_column(nullable=False, default=now_utc)

    tipo_pagamento: Mapped[str] = mapped_column(String(50), nullable=False)

    valor: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    descricao: Mapped[str] = mapped_column(Text, nullable=False, default="")

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=now_utc)
    updated_at: Mapped[datetime] = mapped_column(
        nullable=False,
        default=now_utc,
        onupdate=now_utc,
    )

    caixa_abertura_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("caixa_abertura.id", ondelete="CASCADE"),
        nullable=False,
    )

    def __repr__(self) -> str:
        return (
            f"<VendaManual(id={self.id}, valor={self.valor}, "
            f"tipo_pagamento={self.tipo_pagamento})>"
        )
