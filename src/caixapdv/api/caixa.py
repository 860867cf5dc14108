"""Register session endpoints (status, open, close, openings by date)."""

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from caixapdv.api.caixa_helpers import close_caixa, open_caixa
from caixapdv.core.db import get_db
from caixapdv.core.validators import parse_date_param
from caixapdv.models import (
    CaixaAbertura,
    CaixaAbrir,
    CaixaFechamentoRead,
    CaixaFechamentoResponse,
    CaixaFechar,
    CaixaRead,
    CaixaStatus,
)
from caixapdv.models.schemas import ApiResponse
from caixapdv.utils.datetime import day_bounds

router = APIRouter(prefix="/caixa", tags=["caixa"])


@router.get("/status", response_model=CaixaStatus)
async def caixa_status(db: AsyncSession = Depends(get_db)) -> CaixaStatus:
    """Report whether a session is open and return it."""
    caixa = await CaixaAbertura.get_open(db)
    return CaixaStatus(
        caixaAberto=caixa is not None,
        caixaAtual=CaixaRead.model_validate(caixa) if caixa else None,
    )


@router.post("/abrir", response_model=ApiResponse[CaixaRead])
async def abrir_caixa(
    payload: CaixaAbrir,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[CaixaRead]:
    """Open the register. 400 if a session is already open."""
    caixa = await open_caixa(db, payload.valor_inicial, payload.observacao)
    return ApiResponse(data=CaixaRead.model_validate(caixa))


@router.post("/fechar", response_model=CaixaFechamentoResponse)
async def fechar_caixa(
    payload: CaixaFechar,
    db: AsyncSession = Depends(get_db),
) -> CaixaFechamentoResponse:
    """Close a session, returning the closing summary and the totals breakdown."""
    fechamento, totals = await close_caixa(db, payload.caixa_abertura_id, payload.observacoes)
    return CaixaFechamentoResponse(
        data=CaixaFechamentoRead.model_validate(fechamento),
        resumo=totals,
    )


@router.get("/aberturas/data/{data}", response_model=ApiResponse[list[CaixaRead]])
async def aberturas_por_data(
    data: str,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[list[CaixaRead]]:
    """Sessions opened on a calendar date, newest first."""
    start, end = day_bounds(parse_date_param(data))
    stmt = (
        select(CaixaAbertura)
        .where(CaixaAbertura.data_abertura >= start, CaixaAbertura.data_abertura < end)
        .order_by(CaixaAbertura.data_abertura.desc())
    )
    caixas = (await db.scalars(stmt)).all()
    return ApiResponse(data=[CaixaRead.model_validate(c) for c in caixas])
