"""Manual sale endpoints (create, list per session, delete)."""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from caixapdv.api.caixa_helpers import require_open_caixa
from caixapdv.core.db import get_db
from caixapdv.core.errors import NotFoundError
from caixapdv.core.logging import get_logger
from caixapdv.models import VendaManual, VendaManualCreate, VendaManualRead
from caixapdv.models.schemas import ApiResponse, MessageResponse

logger = get_logger(__name__)

router = APIRouter(prefix="/vendas/manuais", tags=["vendas-manuais"])


@router.post("", response_model=ApiResponse[VendaManualRead])
async def create_venda_manual(
    payload: VendaManualCreate,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[VendaManualRead]:
    """Record a manual sale on an OPEN session."""
    caixa = await require_open_caixa(db, payload.caixa_abertura_id)

    venda = VendaManual(
        tipo_pagamento=payload.tipo_pagamento,
        valor=payload.valor,
        descricao=payload.descricao or "",
        caixa_abertura_id=caixa.id,
    )
    db.add(venda)
    await db.flush()
    await db.refresh(venda)

    logger.info(
        "venda_manual.created",
        venda_manual_id=str(venda.id),
        caixa_abertura_id=str(caixa.id),
        tipo_pagamento=venda.tipo_pagamento,
        valor=str(venda.valor),
    )
    return ApiResponse(data=VendaManualRead.model_validate(venda))


@router.get("/caixa/{caixa_id}", response_model=ApiResponse[list[VendaManualRead]])
async def list_vendas_manuais_caixa(
    caixa_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[list[VendaManualRead]]:
    """Manual sales of a session, newest first."""
    stmt = (
        select(VendaManual)
        .where(VendaManual.caixa_abertura_id == caixa_id)
        .order_by(VendaManual.data_venda.desc())
    )
    vendas = (await db.scalars(stmt)).all()
    return ApiResponse(data=[VendaManualRead.model_validate(v) for v in vendas])


@router.delete("/{venda_id}", response_model=MessageResponse[VendaManualRead])
async def delete_venda_manual(
    venda_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> MessageResponse[VendaManualRead]:
    """Delete a manual sale and return what was deleted."""
    venda = await db.get(VendaManual, venda_id)
    if venda is None:
        raise NotFoundError("VendaManual", str(venda_id))

    deleted = VendaManualRead.model_validate(venda)
    await db.delete(venda)
    await db.flush()

    logger.info(
        "venda_manual.deleted",
        venda_manual_id=str(venda_id),
        caixa_abertura_id=str(deleted.caixa_abertura_id),
    )
    return MessageResponse(message="Manual sale deleted", data=deleted)
