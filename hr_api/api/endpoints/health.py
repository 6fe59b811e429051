"""
Public health check.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from hr_api.api.deps import get_db
from hr_api.core.config import settings
from hr_api.schemas.common import ApiResponse

router = APIRouter(tags=["health"])
logger = logging.getLogger(__name__)


@router.get("/health", response_model=ApiResponse[dict[str, str]])
async def health(db: AsyncSession = Depends(get_db)) -> ApiResponse[dict[str, str]]:
    """Database connectivity check."""
    db_status = "ok"
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.warning("Health check DB failure: %s", exc)
        db_status = "unavailable"
    return ApiResponse[dict[str, str]].ok(
        {"status": "ok" if db_status == "ok" else "degraded", "db": db_status, "version": settings.VERSION},
        "Service is running",
    )
