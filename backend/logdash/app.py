"""FastAPI application setup for logdash."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from logdash.api.dependencies import set_state_store
from logdash.api.routes_admin import router as admin_router
from logdash.api.routes_ingest import router as ingest_router
from logdash.core.logging import get_logger
from logdash.state.store import StateStore

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    logger.info("Ingestion endpoint ready")
    yield
    logger.info("Ingestion endpoint stopped")


def create_app(store: StateStore | None = None) -> FastAPI:
    """Build the ingestion app; ``store`` is shared with the render thread."""
    if store is not None:
        set_state_store(store)

    app = FastAPI(
        title="logdash",
        description="Live terminal dashboard for pushed log documents.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.include_router(ingest_router, tags=["ingest"])
    app.include_router(admin_router, tags=["admin"])
    return app

