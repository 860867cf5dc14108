"""Domain models package."""

from caixapdv.models.caixa import CaixaAbertura, CaixaFechamento
from caixapdv.models.caixa_schemas import (
    CaixaAbrir,
    CaixaFechamentoRead,
    CaixaFechamentoResponse,
    CaixaFechar,
    CaixaRead,
    CaixaStatus,
    ClosingTotals,
)
from caixapdv.models.enums import PaymentType, SessionStatus
from caixapdv.models.retirada import Retirada
from caixapdv.models.retirada_schemas import RetiradaComCaixaRead, RetiradaCreate, RetiradaRead
from caixapdv.models.venda import Venda, VendaManual
from caixapdv.models.venda_schemas import (
    PedidoWebhook,
    VendaComCaixaRead,
    VendaDoDiaRead,
    VendaManualCreate,
    VendaManualRead,
    VendaPagamentoUpdate,
    VendaRead,
    WebhookVendaResponse,
)

__all__ = [
    "CaixaAbertura",
    "CaixaAbrir",
    "CaixaFechamento",
    "CaixaFechamentoRead",
    "CaixaFechamentoResponse",
    "CaixaFechar",
    "CaixaRead",
    "CaixaStatus",
    "ClosingTotals",
    "PaymentType",
    "PedidoWebhook",
    "Retirada",
    "RetiradaComCaixaRead",
    "RetiradaCreate",
    "RetiradaRead",
    "SessionStatus",
    "Venda",
    "VendaComCaixaRead",
    "VendaDoDiaRead",
    "VendaManual",
    "VendaManualCreate",
    "VendaManualRead",
    "VendaPagamentoUpdate",
    "VendaRead",
    "WebhookVendaResponse",
]
