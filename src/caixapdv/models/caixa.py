"""Register session (caixa) models: opening and closing records."""

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import ForeignKey, Index, Numeric, String, Text, Uuid, select, text
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Mapped, mapped_column

from caixapdv.core.db import Base
from caixapdv.models.enums import SessionStatus
from caixapdv.utils.datetime import now_utc


class CaixaAbertura(Base):
    """A register session, from opening until it is closed."""

    __tablename__ = "caixa_abertura"
    __table_args__ = (
        Index("idx_caixa_abertura_status", "status"),
        Index("idx_caixa_abertura_data", "data_abertura"),
        # At most one OPEN row; concurrent opens that both pass the
        # application check are rejected here.
        Index(
            "uq_caixa_abertura_one_open",
            "status",
            unique=True,
            postgresql_where=text("status = 'OPEN'"),
            sqlite_where=text("status = 'OPEN'"),
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    data_abertura: Mapped[datetime] = mapped_column(nullable=False, default=now_utc)

    valor_inicial: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    observacao: Mapped[str] = mapped_column(Text, nullable=False, default="")

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=SessionStatus.OPEN.value,
    )

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=now_utc)
    updated_at: Mapped[datetime] = mapped_column(
        nullable=False,
        default=now_utc,
        onupdate=now_utc,
    )

    @property
    def is_open(self) -> bool:
        return self.status == SessionStatus.OPEN.value

    @staticmethod
    async def get_open(db: AsyncSession) -> "CaixaAbertura | None":
        """Return the most recently opened OPEN session, if any."""
        stmt = (
            select(CaixaAbertura)
            .where(CaixaAbertura.status == SessionStatus.OPEN.value)
            .order_by(CaixaAbertura.data_abertura.desc())
            .limit(1)
        )
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    def __repr__(self) -> str:
        return (
            f"<CaixaAbertura(id={self.id}, status={self.status}, "
            f"valor_inicial={self.valor_inicial})>"
        )


class CaixaFechamento(Base):
    """Reconciliation snapshot written once when a session closes."""

    __tablename__ = "caixa_fechamento"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    data_fechamento: Mapped[datetime] = mapped_column(nullable=False, default=now_utc)

    valor_abertura: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    total_vendas: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    retiradas: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    saldo_final: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    observacoes: Mapped[str] = mapped_column(Text, nullable=False, default="")

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
        index=True,
    )

    def __repr__(self) -> str:
        return (
            f"<CaixaFechamento(id={self.id}, caixa_abertura_id={self.caixa_abertura_id}, "
            f"saldo_final={self.saldo_final})>"
        )
