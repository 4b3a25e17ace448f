"""
Production shift attendance log — application entry point.

This is the **only** file that assembles the app. Business logic lives in
the `api/`, `services/`, `repositories/` and `core/` packages.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shiftlog.api.api import api_router
from shiftlog.core.config import settings
from shiftlog.core.exceptions import register_exception_handlers
from shiftlog.core.security import get_password_hash
from shiftlog.db.base import Base
from shiftlog.db.session import async_session_factory, engine

# Ensure all models are imported so metadata.create_all can see them
from shiftlog.models.employee import Attendance, Employee  # noqa: F401
from shiftlog.models.user import User  # noqa: F401
from shiftlog.repositories.user import UserRepository

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


# ── Lifespan ────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(_app: FastAPI):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables initialised")

    # Seed default admin user on first run
    async with async_session_factory() as session:
        users = UserRepository(session)
        if await users.get_by_username(settings.FIRST_ADMIN_USERNAME) is None:
            await users.add(
                settings.FIRST_ADMIN_USERNAME,
                get_password_hash(settings.FIRST_ADMIN_PASSWORD),
                role="admin",
            )
            logger.info(
                "Default admin created: %s (password: <redacted>)",
                settings.FIRST_ADMIN_USERNAME,
            )

    logger.info("%s v%s started", settings.PROJECT_NAME, settings.VERSION)
    yield
    await engine.dispose()
    logger.info("Shutdown complete")


# ── App factory ─────────────────────────────────────────────────────
def create_app() -> FastAPI:
    application = FastAPI(
        title=settings.PROJECT_NAME,
        description="Attendance tracking for production shifts",
        version=settings.VERSION,
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    register_exception_handlers(application)

    application.include_router(api_router, prefix=settings.API_PREFIX)

    return application


app = create_app()


def run() -> None:
    """Serve the API with uvicorn on ``HOST``:``PORT``."""
    uvicorn.run("shiftlog.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
