"""Register session operations shared by the caixa and manual-sale endpoints."""

from decimal import Decimal
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from caixapdv.core.errors import ConflictError, InternalError, NotFoundError
from caixapdv.core.logging import get_logger
from caixapdv.core.reconciliation import reconcile
from caixapdv.models import (
    CaixaAbertura,
    CaixaFechamento,
    ClosingTotals,
    Retirada,
    Venda,
    VendaManual,
)
from caixapdv.models.enums import SessionStatus
from caixapdv.utils.datetime import now_utc

logger = get_logger(__name__)

ALREADY_OPEN_MESSAGE = "A register session is already open"


async def open_caixa(
    db: AsyncSession,
    valor_inicial: Decimal,
    observacao: str | None = None,
) -> CaixaAbertura:
    """Open a new register session.

    The application check catches the common case; the partial unique index
    on status catches two requests racing past it.

    Raises:
        ConflictError: A session is already OPEN
    """
    existing = await CaixaAbertura.get_open(db)
    if existing is not None:
        raise ConflictError(ALREADY_OPEN_MESSAGE, details={"caixa_abertura_id": str(existing.id)})

    caixa = CaixaAbertura(
        valor_inicial=valor_inicial,
        observacao=observacao or "",
        status=SessionStatus.OPEN.value,
    )
    db.add(caixa)
    try:
        await db.flush()
    except IntegrityError as e:
        await db.rollback()
        logger.warning("caixa.open_race", message="Concurrent open rejected by unique index")
        raise ConflictError(ALREADY_OPEN_MESSAGE) from e

    await db.refresh(caixa)

    logger.info(
        "caixa.opened",
        caixa_abertura_id=str(caixa.id),
        valor_inicial=str(caixa.valor_inicial),
    )
    return caixa


async def require_open_caixa(db: AsyncSession, caixa_id: UUID) -> CaixaAbertura:
    """Fetch a session that must be OPEN.

    Raises:
        ConflictError: Unknown session or already closed
    """
    stmt = select(CaixaAbertura).where(
        CaixaAbertura.id == caixa_id,
        CaixaAbertura.status == SessionStatus.OPEN.value,
    )
    caixa = (await db.execute(stmt)).scalar_one_or_none()
    if caixa is None:
        raise ConflictError(
            "Register session not found or already closed",
            details={"caixa_abertura_id": str(caixa_id)},
        )
    return caixa


async def close_caixa(
    db: AsyncSession,
    caixa_id: UUID,
    observacoes: str | None = None,
) -> tuple[CaixaFechamento, ClosingTotals]:
    """Close a session and persist its reconciliation, in one transaction.

    Raises:
        NotFoundError: Unknown session, or session already closed
        InternalError: Any database failure (transaction rolled back)
    """
    stmt = select(CaixaAbertura).where(CaixaAbertura.id == caixa_id).with_for_update()
    caixa = (await db.execute(stmt)).scalar_one_or_none()

    if caixa is None:
        raise NotFoundError("Caixa", str(caixa_id))
    if not caixa.is_open:
        raise NotFoundError(
            "Caixa",
            str(caixa_id),
            message=f"Open register session {caixa_id} not found; it is already closed",
        )

    try:
        vendas = (await db.scalars(select(Venda).where(Venda.caixa_abertura_id == caixa.id))).all()
        vendas_manuais = (
            await db.scalars(select(VendaManual).where(VendaManual.caixa_abertura_id == caixa.id))
        ).all()
        retiradas = (
            await db.scalars(select(Retirada).where(Retirada.caixa_abertura_id == caixa.id))
        ).all()

        totals = reconcile(caixa.valor_inicial, vendas, vendas_manuais, retiradas)

        fechamento = CaixaFechamento(
            valor_abertura=caixa.valor_inicial,
            total_vendas=totals.total_vendas,
            retiradas=totals.total_retiradas,
            saldo_final=totals.saldo_final,
            observacoes=observacoes or "",
            caixa_abertura_id=caixa.id,
        )
        db.add(fechamento)

        caixa.status = SessionStatus.CLOSED.value
        caixa.updated_at = now_utc()

        await db.flush()
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(
            "caixa.close_failed",
            caixa_abertura_id=str(caixa_id),
            error_type=type(e).__name__,
            exc_info=e,
        )
        raise InternalError(
            f"Failed to close register session: {type(e).__name__}",
            details={"caixa_abertura_id": str(caixa_id)},
        ) from e

    logger.info(
        "caixa.closed",
        caixa_abertura_id=str(caixa_id),
        caixa_fechamento_id=str(fechamento.id),
        vendas=len(vendas),
        vendas_manuais=len(vendas_manuais),
        retiradas=len(retiradas),
        saldo_final=str(totals.saldo_final),
    )
    return fechamento, totals
