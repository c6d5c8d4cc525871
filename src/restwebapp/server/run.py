from __future__ import annotations

from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..config import AppConfig
from .deps import lifespan
from .routers import SERVICE_NAME, SERVICE_VERSION, router

CORS_METHODS = ["GET", "POST", "OPTIONS"]
CORS_HEADERS = ["Authorization", "Content-Type", "X-Requested-With"]


def create_app(config: Optional[AppConfig] = None) -> FastAPI:
    config = config or AppConfig()

    app = FastAPI(
        title=SERVICE_NAME,
        version=SERVICE_VERSION,
        lifespan=lifespan,
    )
    app.state.config = config

    # Any origin with credentials: a regex makes Starlette echo the request
    # origin, since "*" is not allowed alongside credentials.
    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=".*",
        allow_credentials=True,
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
    )

    app.include_router(router, prefix=config.api_prefix)

    return app


# ASGI entrypoint (uvicorn restwebapp.server.run:app)
app = create_app()
