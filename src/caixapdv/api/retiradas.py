"""Withdrawal endpoints (create, list per session, list per date)."""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from caixapdv.core.db import get_db
from caixapdv.core.logging import get_logger
from caixapdv.core.validators import parse_date_param
from caixapdv.models import CaixaAbertura, Retirada, RetiradaComCaixaRead, RetiradaCreate, RetiradaRead
from caixapdv.models.schemas import ApiResponse
from caixapdv.utils.datetime import day_bounds

logger = get_logger(__name__)

router = APIRouter(prefix="/retiradas", tags=["retiradas"])


@router.post("", response_model=ApiResponse[RetiradaRead])
async def create_retirada(
    payload: RetiradaCreate,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[RetiradaRead]:
    """
    Record a cash withdrawal.

    Unlike manual sales, the session is not required to be OPEN; only the
    foreign key ties it to an existing session.
    """
    retirada = Retirada(
        valor=payload.valor,
        observacao=payload.observacao or "",
        caixa_abertura_id=payload.caixa_abertura_id,
    )
    db.add(retirada)
    await db.flush()
    await db.refresh(retirada)

    logger.info(
        "retirada.created",
        retirada_id=str(retirada.id),
        caixa_abertura_id=str(retirada.caixa_abertura_id),
        valor=str(retirada.valor),
    )
    return ApiResponse(data=RetiradaRead.model_validate(retirada))


@router.get("/caixa/{caixa_id}", response_model=ApiResponse[list[RetiradaRead]])
async def list_retiradas_caixa(
    caixa_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[list[RetiradaRead]]:
    """Withdrawals of a session, newest first."""
    stmt = (
        select(Retirada)
        .where(Retirada.caixa_abertura_id == caixa_id)
        .order_by(Retirada.data_retirada.desc())
    )
    retiradas = (await db.scalars(stmt)).all()
    return ApiResponse(data=[RetiradaRead.model_validate(r) for r in retiradas])


@router.get("/data/{data}", response_model=ApiResponse[list[RetiradaComCaixaRead]])
async def retiradas_por_data(
    data: str,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[list[RetiradaComCaixaRead]]:
    """Withdrawals of a calendar date with their session's opening time."""
    start, end = day_bounds(parse_date_param(data))
    stmt = (
        select(Retirada, CaixaAbertura.data_abertura)
        .outerjoin(CaixaAbertura, Retirada.caixa_abertura_id == CaixaAbertura.id)
        .where(Retirada.data_retirada >= start, Retirada.data_retirada < end)
        .order_by(Retirada.data_retirada.desc())
    )
    rows = (await db.execute(stmt)).all()
    return ApiResponse(
        data=[
            RetiradaComCaixaRead.model_validate(retirada).model_copy(
                update={"data_abertura": data_abertura}
            )
            for retirada, data_abertura in rows
        ]
    )
