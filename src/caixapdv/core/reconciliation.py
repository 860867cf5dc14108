"""Closing reconciliation: session totals computed from its sales and withdrawals."""

from decimal import Decimal
from typing import Any, Iterable

from caixapdv.models.caixa_schemas import ClosingTotals
from caixapdv.models.enums import PaymentType

ZERO = Decimal("0.00")


def _sum(values: Iterable[Decimal]) -> Decimal:
    return sum(values, ZERO)


def _is_cash(payment_type: str | None) -> bool:
    return payment_type == PaymentType.CASH.value


def reconcile(
    valor_inicial: Decimal,
    vendas: Iterable[Any],
    vendas_manuais: Iterable[Any],
    retiradas: Iterable[Any],
) -> ClosingTotals:
    """Compute closing totals for a session.

    Args:
        valor_inicial: Cash in the register when the session opened
        vendas: Objects with ``valor_total`` and ``tipo_pagamento``
        vendas_manuais: Objects with ``valor`` and ``tipo_pagamento``
        retiradas: Objects with ``valor``

    Every sale counts towards total_vendas; only CASH sales change the
    drawer balance.
    """
    vendas = list(vendas)
    vendas_manuais = list(vendas_manuais)

    vendas_sistema = _sum(v.valor_total for v in vendas)
    manuais = _sum(v.valor for v in vendas_manuais)
    total_retiradas = _sum(r.valor for r in retiradas)

    dinheiro_sistema = _sum(v.valor_total for v in vendas if _is_cash(v.tipo_pagamento))
    dinheiro_manuais = _sum(v.valor for v in vendas_manuais if _is_cash(v.tipo_pagamento))
    total_dinheiro = dinheiro_sistema + dinheiro_manuais

    return ClosingTotals(
        vendas_sistema=vendas_sistema,
        vendas_manuais=manuais,
        total_vendas=vendas_sistema + manuais,
        total_retiradas=total_retiradas,
        dinheiro_vendas_sistema=dinheiro_sistema,
        dinheiro_vendas_manuais=dinheiro_manuais,
        total_dinheiro=total_dinheiro,
        saldo_final=Decimal(valor_inicial) + total_dinheiro - total_retiradas,
    )
