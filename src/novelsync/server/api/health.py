"""Health check endpoints."""

import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from novelsync import __version__
from novelsync.data.database import get_session
from novelsync.server.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse, "description": "Sync store unreachable"}},
)
async def health_check(
    response: Response,
    session: AsyncSession = Depends(get_session),
) -> HealthResponse:
    """
    Health check endpoint.

    Reports the service version and whether the sync store answers a
    trivial query. Clients treat anything but 200 as offline.
    """
    try:
        await session.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning("Health check could not reach the sync store: %s", e)
        response.status_code = 503
        return HealthResponse(status="unhealthy", version=__version__, database="unavailable")

    return HealthResponse(status="healthy", version=__version__, database="ok")
