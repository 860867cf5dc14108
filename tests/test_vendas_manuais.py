# File: tests/test_vendas_manuais.py
"""Tests for manual sale endpoints."""

import uuid
from datetime import datetime
from decimal import Decimal

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from caixapdv.models import VendaManual
from tests.factories import CaixaFactory, VendaManualFactory


async def count_manuais(session: AsyncSession) -> int:
    return await session.scalar(select(func.count()).select_from(VendaManual))


class TestCreateVendaManual:
    """Test POST /vendas/manuais."""

    @pytest.mark.asyncio
    async def test_create_on_open_session(self, client: AsyncClient, db_session: AsyncSession):
        """Manual sale is recorded against the open session."""
        caixa = await CaixaFactory.create(db_session)

        response = await client.post(
            "/vendas/manuais",
            json={
                "caixa_abertura_id": str(caixa.id),
                "tipo_pagamento": "CASH",
                "valor": "30.00",
                "descricao": "Balcao",
            },
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["caixa_abertura_id"] == str(caixa.id)
        assert data["tipo_pagamento"] == "CASH"
        assert Decimal(data["valor"]) == Decimal("30.00")
        assert data["descricao"] == "Balcao"
        assert await count_manuais(db_session) == 1

    @pytest.mark.asyncio
    async def test_description_sanitized(self, client: AsyncClient, db_session: AsyncSession):
        """HTML is stripped from the description."""
        caixa = await CaixaFactory.create(db_session)

        response = await client.post(
            "/vendas/manuais",
            json={
                "caixa_abertura_id": str(caixa.id),
                "tipo_pagamento": "PIX",
                "valor": 5,
                "descricao": "<b>Bolo</b><script>x</script>",
            },
        )

        assert response.json()["data"]["descricao"] == "Bolox"

    @pytest.mark.asyncio
    async def test_closed_session_rejected(self, client: AsyncClient, db_session: AsyncSession):
        """Closed session: 400 and nothing stored."""
        caixa = await CaixaFactory.create(db_session, status="CLOSED")

        response = await client.post(
            "/vendas/manuais",
            json={"caixa_abertura_id": str(caixa.id), "tipo_pagamento": "CASH", "valor": 10},
        )

        assert response.status_code == 400
        assert response.json()["code"] == "CONFLICT"
        assert await count_manuais(db_session) == 0

    @pytest.mark.asyncio
    async def test_unknown_session_rejected(self, client: AsyncClient):
        """Unknown session is a 400."""
        response = await client.post(
            "/vendas/manuais",
            json={"caixa_abertura_id": str(uuid.uuid4()), "tipo_pagamento": "CASH", "valor": 10},
        )

        assert response.status_code == 400
        assert response.json()["code"] == "CONFLICT"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "overrides",
        [
            {"valor": 0},
            {"valor": -1},
            {"valor": None},
            {"tipo_pagamento": ""},
            {"tipo_pagamento": None},
            {"caixa_abertura_id": None},
        ],
    )
    async def test_invalid_fields(
        self, client: AsyncClient, db_session: AsyncSession, overrides: dict
    ):
        """Required fields are validated before the session lookup."""
        caixa = await CaixaFactory.create(db_session)
        payload = {"caixa_abertura_id": str(caixa.id), "tipo_pagamento": "CASH", "valor": 10}
        payload.update(overrides)

        response = await client.post("/vendas/manuais", json=payload)

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"


class TestListVendasManuais:
    """Test GET /vendas/manuais/caixa/{id}."""

    @pytest.mark.asyncio
    async def test_lists_session_sales_newest_first(
        self, client: AsyncClient, db_session: AsyncSession
    ):
        """Only the session's manual sales, newest first."""
        caixa = await CaixaFactory.create(db_session)
        other = await CaixaFactory.create(db_session, status="CLOSED")
        first = await VendaManualFactory.create(
            db_session, caixa.id, data_venda=datetime(2026, 10, 16, 9, 0)
        )
        second = await VendaManualFactory.create(
            db_session, caixa.id, data_venda=datetime(2026, 10, 16, 10, 0)
        )
        await VendaManualFactory.create(db_session, other.id)

        response = await client.get(f"/vendas/manuais/caixa/{caixa.id}")

        assert response.status_code == 200
        assert [v["id"] for v in response.json()["data"]] == [str(second.id), str(first.id)]

    @pytest.mark.asyncio
    async def test_unknown_session_is_empty(self, client: AsyncClient):
        """Unknown session: empty list, not an error."""
        response = await client.get(f"/vendas/manuais/caixa/{uuid.uuid4()}")

        assert response.status_code == 200
        assert response.json()["data"] == []


class TestDeleteVendaManual:
    """Test DELETE /vendas/manuais/{id}."""

    @pytest.mark.asyncio
    async def test_delete_returns_deleted_record(self, client: AsyncClient, db_session: AsyncSession):
        """Deleted sale is echoed back and gone from the database."""
        caixa = await CaixaFactory.create(db_session)
        venda = await VendaManualFactory.create(db_session, caixa.id, valor=Decimal("7.00"))

        response = await client.delete(f"/vendas/manuais/{venda.id}")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Manual sale deleted"
        assert body["data"]["id"] == str(venda.id)
        assert Decimal(body["data"]["valor"]) == Decimal("7.00")
        assert await count_manuais(db_session) == 0

    @pytest.mark.asyncio
    async def test_deleted_sale_excluded_from_close(
        self, client: AsyncClient, db_session: AsyncSession
    ):
        """Deleting a cash sale before closing removes it from the balance."""
        caixa = await CaixaFactory.create(db_session, valor_inicial=Decimal("50.00"))
        venda = await VendaManualFactory.create(db_session, caixa.id, valor=Decimal("20.00"))

        await client.delete(f"/vendas/manuais/{venda.id}")
        response = await client.post("/caixa/fechar", json={"caixa_abertura_id": str(caixa.id)})

        assert Decimal(response.json()["data"]["saldo_final"]) == Decimal("50.00")

    @pytest.mark.asyncio
    async def test_delete_unknown(self, client: AsyncClient):
        """Unknown id is a 404."""
        response = await client.delete(f"/vendas/manuais/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json()["code"] == "NOT_FOUND"
