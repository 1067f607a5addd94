"""Application lifespan: startup and shutdown.

Single place for startup/shutdown wiring: logging, the shared HTTP client
for the identity store, and the SQL engine dispose.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI

from campus.core.config import get_settings
from campus.infrastructure.persistence.database import dispose_engine
from campus.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit close the HTTP client and dispose the engine."""
    settings = get_settings()
    setup_logging()

    # ---- Startup ----
    # Shared HTTP client for identity store calls (connection reuse).
    app.state.identity_http_client = httpx.AsyncClient(
        timeout=settings.identity_store_timeout_seconds
    )
    logger.info("%s %s started", settings.app_name, settings.app_version)

    yield

    # ---- Shutdown ----
    if getattr(app.state, "identity_http_client", None) is not None:
        await app.state.identity_http_client.aclose()
        app.state.identity_http_client = None
        logger.info("Identity store HTTP client closed")

    await dispose_engine()
