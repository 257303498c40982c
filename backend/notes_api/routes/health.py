"""Liveness probe: 200 when the store answers SELECT 1, 503 otherwise."""

import logging
import time

from fastapi import APIRouter, Response, status
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from notes_api import __version__
from notes_api import database
from notes_api.schemas.note import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_started = time.monotonic()


async def _store_reachable() -> bool:
    try:
        async with database.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        logger.warning("Health check: store unreachable: %s", e)
        return False
    return True


@router.get("/health", response_model=HealthResponse, summary="Service health check")
async def health_check(response: Response) -> HealthResponse:
    reachable = await _store_reachable()
    if not reachable:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return HealthResponse(
        status="healthy" if reachable else "unhealthy",
        version=__version__,
        database="connected" if reachable else "disconnected",
        uptime_seconds=round(time.monotonic() - _started, 2),
    )
