"""
Sale endpoints: listing, payment type update and daily listing.
Daily listing merges webhook sales with manual sales.
"""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from caixapdv.core.db import get_db
from caixapdv.core.errors import NotFoundError
from caixapdv.core.logging import get_logger
from caixapdv.core.validators import parse_date_param
from caixapdv.models import (
    CaixaAbertura,
    Venda,
    VendaComCaixaRead,
    VendaDoDiaRead,
    VendaManual,
    VendaPagamentoUpdate,
    VendaRead,
)
from caixapdv.models.schemas import ApiResponse
from caixapdv.utils.datetime import day_bounds, now_utc

logger = get_logger(__name__)

router = APIRouter(prefix="/vendas", tags=["vendas"])


@router.get("", response_model=ApiResponse[list[VendaComCaixaRead]])
async def list_vendas(db: AsyncSession = Depends(get_db)) -> ApiResponse[list[VendaComCaixaRead]]:
    """All webhook sales with their session's opening data, newest first."""
    stmt = (
        select(Venda, CaixaAbertura.valor_inicial, CaixaAbertura.data_abertura)
        .outerjoin(CaixaAbertura, Venda.caixa_abertura_id == CaixaAbertura.id)
        .order_by(Venda.data_venda.desc())
    )
    rows = (await db.execute(stmt)).all()

    return ApiResponse(
        data=[
            VendaComCaixaRead.model_validate(venda).model_copy(
                update={"valor_inicial": valor_inicial, "data_abertura": data_abertura}
            )
            for venda, valor_inicial, data_abertura in rows
        ]
    )


@router.get("/data/{data}", response_model=ApiResponse[list[VendaDoDiaRead]])
async def vendas_por_data(
    data: str,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[list[VendaDoDiaRead]]:
    """Webhook and manual sales of a calendar date merged, newest first."""
    start, end = day_bounds(parse_date_param(data))

    vendas_stmt = (
        select(Venda, CaixaAbertura.data_abertura)
        .outerjoin(CaixaAbertura, Venda.caixa_abertura_id == CaixaAbertura.id)
        .where(Venda.data_venda >= start, Venda.data_venda < end)
    )
    manuais_stmt = (
        select(VendaManual, CaixaAbertura.data_abertura)
        .outerjoin(CaixaAbertura, VendaManual.caixa_abertura_id == CaixaAbertura.id)
        .where(VendaManual.data_venda >= start, VendaManual.data_venda < end)
    )

    entries = [
        VendaDoDiaRead(
            id=venda.id,
            data_venda=venda.data_venda,
            tipo_pagamento=venda.tipo_pagamento,
            caixa_abertura_id=venda.caixa_abertura_id,
            created_at=venda.created_at,
            updated_at=venda.updated_at,
            data_abertura=data_abertura,
            manual=False,
            dados_pedido=venda.dados_pedido,
            valor_total=venda.valor_total,
        )
        for venda, data_abertura in (await db.execute(vendas_stmt)).all()
    ]
    entries.extend(
        VendaDoDiaRead(
            id=manual.id,
            data_venda=manual.data_venda,
            tipo_pagamento=manual.tipo_pagamento,
            caixa_abertura_id=manual.caixa_abertura_id,
            created_at=manual.created_at,
            updated_at=manual.updated_at,
            data_abertura=data_abertura,
            manual=True,
            origem="manual",
            valor=manual.valor,
            descricao=manual.descricao,
        )
        for manual, data_abertura in (await db.execute(manuais_stmt)).all()
    )

    entries.sort(key=lambda entry: entry.data_venda, reverse=True)
    return ApiResponse(data=entries)


@router.put("/{venda_id}", response_model=ApiResponse[VendaRead])
async def update_venda(
    venda_id: UUID,
    payload: VendaPagamentoUpdate,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[VendaRead]:
    """Set the payment type of a sale."""
    venda = await db.get(Venda, venda_id)
    if venda is None:
        raise NotFoundError("Venda", str(venda_id))

    previous = venda.tipo_pagamento
    venda.tipo_pagamento = payload.tipo_pagamento
    venda.updated_at = now_utc()
    await db.flush()
    await db.refresh(venda)

    logger.info(
        "venda.payment_updated",
        venda_id=str(venda_id),
        old=previous,
        new=venda.tipo_pagamento,
    )
    return ApiResponse(data=VendaRead.model_validate(venda))
