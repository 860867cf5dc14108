"""FastAPI application factory."""

import os
from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncIterator

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from caixapdv.core.logging import configure_logging, get_logger

configure_logging(os.getenv("LOG_LEVEL", "INFO"))
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan context manager for startup and shutdown events."""
    from caixapdv.api.health import set_app_start_time
    from caixapdv.core.db import dispose_engine, init_db

    start_time = datetime.now()
    logger.info("app.startup", message="PDV API starting up", timestamp=start_time.isoformat())
    set_app_start_time(start_time)

    try:
        await init_db()
    except (SQLAlchemyError, OSError) as e:
        # Keep serving; /health reports the database as disconnected
        logger.error("db.init_failed", error_type=type(e).__name__, exc_info=e)

    yield

    await dispose_engine()
    logger.info("app.shutdown", message="PDV API shutting down gracefully")


def _cors_origins() -> list[str]:
    raw = os.getenv("CORS_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()] or ["*"]


def _setup_middleware(app: FastAPI) -> None:
    """Configure all middleware in correct order."""
    # Last added = first executed: RequestIDMiddleware runs first
    from caixapdv.middleware.logging import RequestIDMiddleware
    from caixapdv.middleware.sentry import SentryContextMiddleware

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(SentryContextMiddleware)
    app.add_middleware(RequestIDMiddleware)


def _register_routers(app: FastAPI) -> None:
    """Register all API routers."""
    from caixapdv.api.caixa import router as caixa_router
    from caixapdv.api.health import router as health_router
    from caixapdv.api.index import router as index_router
    from caixapdv.api.retiradas import router as retiradas_router
    from caixapdv.api.vendas import router as vendas_router
    from caixapdv.api.vendas_manuais import router as vendas_manuais_router
    from caixapdv.api.webhook import router as webhook_router

    app.include_router(index_router)
    app.include_router(health_router)
    app.include_router(caixa_router)
    # Manual sales before /vendas so /vendas/{id} never shadows /vendas/manuais
    app.include_router(vendas_manuais_router)
    app.include_router(vendas_router)
    app.include_router(retiradas_router)
    app.include_router(webhook_router)


def create_app() -> FastAPI:
    """Application factory for the PDV API."""
    from caixapdv.core.exception_handlers import register_exception_handlers
    from caixapdv.core.sentry import init_sentry

    init_sentry()

    app = FastAPI(
        title="PDV API",
        description="Point-of-sale cash register backend",
        version="0.1.0",
        lifespan=lifespan,
    )

    register_exception_handlers(app)
    _setup_middleware(app)
    _register_routers(app)

    logger.info("app.configured", message="FastAPI application created successfully")

    return app


def run() -> None:
    """Development server entrypoint."""
    uvicorn.run(
        "caixapdv.main:create_app",
        factory=True,
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        reload=os.getenv("ENVIRONMENT", "development") == "development",
    )
