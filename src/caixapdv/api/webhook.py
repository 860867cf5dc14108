"""Webhook receiving orders from the external ordering platform."""

from typing import Any

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from caixapdv.core.db import get_db
from caixapdv.core.errors import ConflictError
from caixapdv.core.logging import get_logger
from caixapdv.core.orders import normalize_order, parse_order, payment_type, sale_timestamp
from caixapdv.models import CaixaAbertura, Venda, WebhookVendaResponse
from caixapdv.utils.datetime import now_utc

logger = get_logger(__name__)

router = APIRouter(prefix="/webhook", tags=["webhook"])


@router.post("/vendas", response_model=WebhookVendaResponse)
async def receber_venda(
    payload: Any = Body(None),
    db: AsyncSession = Depends(get_db),
) -> WebhookVendaResponse:
    """
    Ingest an external order as a sale on the open session.

    400 when valor_total/produtos are missing or no session is open.
    """
    logger.info("webhook.received")

    pedido = parse_order(payload)

    caixa = await CaixaAbertura.get_open(db)
    if caixa is None:
        raise ConflictError("Register is closed. Sales cannot be processed.")

    received_at = now_utc()
    venda = Venda(
        data_venda=sale_timestamp(pedido, received_at),
        dados_pedido=normalize_order(pedido, received_at),
        tipo_pagamento=payment_type(pedido),
        valor_total=pedido.valor_total,
        caixa_abertura_id=caixa.id,
    )
    db.add(venda)
    await db.flush()

    logger.info(
        "webhook.venda_saved",
        venda_id=str(venda.id),
        caixa_abertura_id=str(caixa.id),
        valor_total=str(venda.valor_total),
        produtos=len(pedido.produtos),
    )
    return WebhookVendaResponse(message="Order processed", venda_id=venda.id)
