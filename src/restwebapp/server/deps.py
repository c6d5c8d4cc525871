from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request

from ..config import AppConfig

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    App startup/shutdown:
      - log the configured endpoints
      - nothing to release on shutdown (the service holds no state)
    """
    config: AppConfig = app.state.config
    logger.info(
        "Serving %s, %s and %s on port %d (frontend dev server expected on port %d)",
        config.health_endpoint,
        config.info_endpoint,
        config.dummy_data_endpoint,
        config.http_port,
        config.frontend_port,
    )
    yield
    logger.info("Backend shutting down")


async def get_config(request: Request) -> AppConfig:
    """
    Dependency to retrieve the AppConfig from app.state.
    """
    config = getattr(request.app.state, "config", None)
    if config is None:
        raise RuntimeError("AppConfig not available on app.state (use create_app()).")
    return config
