from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from .. import models
from ..config import AppConfig
from .deps import get_config
from .schemas import InfoOut, RecordOut

logger = logging.getLogger(__name__)

SERVICE_NAME = "KMP REST Web App Backend"
SERVICE_VERSION = "1.0.0"

router = APIRouter()


@router.get("/health", response_class=PlainTextResponse)
async def health() -> str:
    logger.debug("GET health")
    return "OK"


@router.get("/info", response_model=InfoOut)
async def info(config: AppConfig = Depends(get_config)) -> InfoOut:
    logger.debug("GET info")
    return InfoOut(
        name=SERVICE_NAME,
        version=SERVICE_VERSION,
        endpoints=[config.dummy_data_endpoint, config.health_endpoint],
    )


@router.get("/dummy-data", response_model=RecordOut)
async def dummy_data() -> RecordOut:
    record = models.create_sample_data()
    logger.debug("GET dummy-data -> %s", record.id)
    return RecordOut.from_record(record)
