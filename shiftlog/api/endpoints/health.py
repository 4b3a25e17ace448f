"""Public health check."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from shiftlog.api.deps import get_db
from shiftlog.core.config import settings
from shiftlog.schemas.common import Envelope, HealthStatus, ok

router = APIRouter(tags=["health"])
logger = logging.getLogger(__name__)


@router.get("/health", response_model=Envelope[HealthStatus])
async def health(db: AsyncSession = Depends(get_db)) -> Envelope:
    db_ok = False
    try:
        await db.execute(select(1))
        db_ok = True
    except Exception as e:
        logger.error("Health check DB failure: %s", e)

    return ok(
        HealthStatus(status="OK", version=settings.VERSION, db=db_ok),
        "Server is running",
    )
