"""Root endpoint listing what the API offers."""

from fastapi import APIRouter

from caixapdv.utils.datetime import now_utc, utc_isoformat

router = APIRouter(tags=["index"])

ENDPOINTS = {
    "webhook": "POST /webhook/vendas",
    "caixa": {
        "status": "GET /caixa/status",
        "abrir": "POST /caixa/abrir",
        "fechar": "POST /caixa/fechar",
        "aberturas_por_data": "GET /caixa/aberturas/data/{data}",
    },
    "vendas": {
        "listar": "GET /vendas",
        "atualizar": "PUT /vendas/{id}",
        "por_data": "GET /vendas/data/{data}",
    },
    "vendas_manuais": {
        "criar": "POST /vendas/manuais",
        "por_caixa": "GET /vendas/manuais/caixa/{id}",
        "excluir": "DELETE /vendas/manuais/{id}",
    },
    "retiradas": {
        "criar": "POST /retiradas",
        "por_caixa": "GET /retiradas/caixa/{id}",
        "por_data": "GET /retiradas/data/{data}",
    },
    "health": "GET /health",
}


@router.get("/")
async def index() -> dict:
    return {
        "message": "PDV server running",
        "endpoints": ENDPOINTS,
        "timestamp": utc_isoformat(now_utc()),
    }
