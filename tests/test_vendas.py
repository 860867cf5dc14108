# File: tests/test_vendas.py
"""Tests for sale listing and payment updates."""

import uuid
from datetime import datetime
from decimal import Decimal

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from tests.factories import CaixaFactory, VendaFactory, VendaManualFactory


class TestListVendas:
    """Test GET /vendas."""

    @pytest.mark.asyncio
    async def test_empty(self, client: AsyncClient):
        """No sales: empty list."""
        response = await client.get("/vendas")

        assert response.status_code == 200
        assert response.json() == {"success": True, "data": []}

    @pytest.mark.asyncio
    async def test_lists_newest_first_with_session_data(
        self, client: AsyncClient, db_session: AsyncSession
    ):
        """Each sale carries its session's opening cash and time."""
        caixa = await CaixaFactory.create(
            db_session,
            valor_inicial=Decimal("200.00"),
            data_abertura=datetime(2026, 10, 16, 7, 0),
        )
        older = await VendaFactory.create(
            db_session, caixa.id, data_venda=datetime(2026, 10, 16, 9, 0)
        )
        newer = await VendaFactory.create(
            db_session, caixa.id, data_venda=datetime(2026, 10, 16, 11, 0)
        )

        response = await client.get("/vendas")

        data = response.json()["data"]
        assert [v["id"] for v in data] == [str(newer.id), str(older.id)]
        assert Decimal(data[0]["valor_inicial"]) == Decimal("200.00")
        assert data[0]["data_abertura"].startswith("2026-10-16T07:00")
        assert data[0]["dados_pedido"]["nome_cliente"] == "Teste"

    @pytest.mark.asyncio
    async def test_manual_sales_not_listed(self, client: AsyncClient, db_session: AsyncSession):
        """GET /vendas only returns webhook sales."""
        caixa = await CaixaFactory.create(db_session)
        await VendaManualFactory.create(db_session, caixa.id)

        response = await client.get("/vendas")

        assert response.json()["data"] == []


class TestUpdateVenda:
    """Test PUT /vendas/{id}."""

    @pytest.mark.asyncio
    async def test_set_payment_type(self, client: AsyncClient, db_session: AsyncSession):
        """Payment type changes; everything else stays."""
        caixa = await CaixaFactory.create(db_session)
        venda = await VendaFactory.create(db_session, caixa.id, valor_total=Decimal("42.00"))

        response = await client.put(f"/vendas/{venda.id}", json={"tipo_pagamento": " CASH "})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["tipo_pagamento"] == "CASH"
        assert Decimal(data["valor_total"]) == Decimal("42.00")
        assert data["caixa_abertura_id"] == str(caixa.id)

    @pytest.mark.asyncio
    async def test_updated_payment_counts_as_cash_at_close(
        self, client: AsyncClient, db_session: AsyncSession
    ):
        """A PENDING sale marked CASH enters the drawer balance."""
        caixa = await CaixaFactory.create(db_session, valor_inicial=Decimal("10.00"))
        venda = await VendaFactory.create(db_session, caixa.id, valor_total=Decimal("15.00"))

        await client.put(f"/vendas/{venda.id}", json={"tipo_pagamento": "CASH"})
        response = await client.post("/caixa/fechar", json={"caixa_abertura_id": str(caixa.id)})

        assert Decimal(response.json()["data"]["saldo_final"]) == Decimal("25.00")

    @pytest.mark.asyncio
    async def test_unknown_sale(self, client: AsyncClient):
        """Unknown id is a 404."""
        response = await client.put(f"/vendas/{uuid.uuid4()}", json={"tipo_pagamento": "CARD"})

        assert response.status_code == 404
        body = response.json()
        assert body["success"] is False
        assert body["code"] == "NOT_FOUND"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [{}, {"tipo_pagamento": ""}, {"tipo_pagamento": "   "}])
    async def test_payment_type_required(
        self, client: AsyncClient, db_session: AsyncSession, payload: dict
    ):
        """Blank or missing payment type is a 400."""
        caixa = await CaixaFactory.create(db_session)
        venda = await VendaFactory.create(db_session, caixa.id)

        response = await client.put(f"/vendas/{venda.id}", json=payload)

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"


class TestVendasPorData:
    """Test GET /vendas/data/{data}."""

    @pytest.mark.asyncio
    async def test_merges_webhook_and_manual_sales(
        self, client: AsyncClient, db_session: AsyncSession
    ):
        """Both kinds of sale of the day, newest first, tagged by origin."""
        caixa = await CaixaFactory.create(db_session, data_abertura=datetime(2026, 10, 15, 7, 0))
        webhook = await VendaFactory.create(
            db_session, caixa.id, valor_total=Decimal("50.00"), data_venda=datetime(2026, 10, 15, 10, 0)
        )
        manual = await VendaManualFactory.create(
            db_session,
            caixa.id,
            valor=Decimal("12.50"),
            descricao="Agua",
            data_venda=datetime(2026, 10, 15, 12, 0),
        )
        await VendaFactory.create(db_session, caixa.id, data_venda=datetime(2026, 10, 16, 0, 0))
        await VendaManualFactory.create(db_session, caixa.id, data_venda=datetime(2026, 10, 14, 23, 59))

        response = await client.get("/vendas/data/2026-10-15")

        assert response.status_code == 200
        data = response.json()["data"]
        assert [entry["id"] for entry in data] == [str(manual.id), str(webhook.id)]

        manual_entry, webhook_entry = data
        assert manual_entry["manual"] is True
        assert manual_entry["origem"] == "manual"
        assert Decimal(manual_entry["valor"]) == Decimal("12.50")
        assert manual_entry["descricao"] == "Agua"
        assert manual_entry["data_abertura"].startswith("2026-10-15T07:00")

        assert webhook_entry["manual"] is False
        assert Decimal(webhook_entry["valor_total"]) == Decimal("50.00")
        assert webhook_entry["dados_pedido"] is not None

    @pytest.mark.asyncio
    async def test_invalid_date(self, client: AsyncClient):
        """Malformed date is a 400."""
        response = await client.get("/vendas/data/2026-02-30")

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"
