"""Cash withdrawal model."""

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import ForeignKey, Index, Numeric, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from caixapdv.core.db import Base
from caixapdv.utils.datetime import now_utc


class Retirada(Base):
    """Cash taken out of the register during a session."""

    __tablename__ = "retiradas"
    __table_args__ = (
        Index("idx_retiradas_caixa", "caixa_abertura_id"),
        Index("idx_retiradas_data", "data_retirada"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    data_retirada: Mapped[datetime] = mapped_column(nullable=False, default=now_utc)

    valor: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    observacao: Mapped[str] = mapped_column(Text, nullable=False, default="")

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=now_utc)
    updated_at: Mapped[datetime] = mapped_column(
        nullable=False,
        default=now_utc,
        onupdate=now_utc,
    )

    # No open-session check on insert, only the foreign key
    caixa_abertura_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("caixa_abertura.id", ondelete="CASCADE"),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Retirada(id={self.id}, valor={self.valor})>"
