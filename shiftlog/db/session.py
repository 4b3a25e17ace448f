"""
Async SQLAlchemy engine & session factory (aiomysql driver).
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from shiftlog.core.config import settings

engine_args = {
    "echo": False,
    "pool_pre_ping": True,
}

if settings.DATABASE_URL.startswith("mysql"):
    engine_args.update(
        {
            "pool_size": settings.DB_POOL_SIZE,
            "max_overflow": 0,
            "pool_recycle": 300,
        }
    )

engine = create_async_engine(
    settings.DATABASE_URL,
    **engine_args,
)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

