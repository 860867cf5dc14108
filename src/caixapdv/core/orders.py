"""Webhook order validation and normalization."""

from datetime import datetime
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from caixapdv.core.errors import ValidationError
from caixapdv.models.enums import DEFAULT_ORDER_TYPE, PaymentType
from caixapdv.models.venda_schemas import PedidoWebhook
from caixapdv.utils.datetime import parse_iso_datetime, utc_isoformat

INVALID_ORDER_MESSAGE = "Invalid order data. valor_total and produtos are required."


def parse_order(raw: Any) -> PedidoWebhook:
    """Validate a raw webhook body.

    Raises:
        ValidationError: valor_total missing/non-positive or produtos missing/empty
    """
    if not isinstance(raw, dict):
        raise ValidationError(INVALID_ORDER_MESSAGE)
    try:
        return PedidoWebhook.model_validate(raw)
    except PydanticValidationError as e:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()})
        raise ValidationError(INVALID_ORDER_MESSAGE, details={"fields": fields}) from e


def normalize_order(pedido: PedidoWebhook, received_at: datetime) -> dict[str, Any]:
    """Build the stored order payload, filling defaults for optional fields.

    valor_total is kept as a decimal string so no precision is lost in JSON;
    customer fields and line items are stored as the platform sent them.
    """
    normalized = {
        "nome_cliente": pedido.nome_cliente or "",
        "telefone_cliente": pedido.telefone_cliente or "",
        "tipo_pedido": pedido.tipo_pedido or DEFAULT_ORDER_TYPE,
        "endereco_completo": pedido.endereco_completo or "",
        "data_hora_pedido": pedido.data_hora_pedido or utc_isoformat(received_at),
        "valor_total": pedido.valor_total,
        "produtos": [
            {
                "nome_produto": produto.nome_produto,
                "quantidade": produto.quantidade,
                "valor": produto.valor,
                "adicionais": produto.adicionais or [],
                "complementos": produto.complementos or [],
            }
            for produto in pedido.produtos
        ],
    }
    return _jsonable(normalized)


def sale_timestamp(pedido: PedidoWebhook, received_at: datetime) -> datetime:
    """Order time when given and parseable, else the time it was received."""
    return parse_iso_datetime(pedido.data_hora_pedido) or received_at


def payment_type(pedido: PedidoWebhook) -> str:
    if pedido.tipo_pagamento is None:
        return PaymentType.PENDING.value
    return str(pedido.tipo_pagamento).strip() or PaymentType.PENDING.value


def _jsonable(value: Any) -> Any:
    # Decimal -> str; everything else already JSON-native
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_jsonable(v) for v in value]
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    return str(value)
