"""
FastAPI dependencies — database session, data-access handles and the
bearer-token guard.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from shiftlog.core.exceptions import AuthError
from shiftlog.core.security import decode_session_token
from shiftlog.db.session import async_session_factory
from shiftlog.repositories.attendance import AttendanceRepository
from shiftlog.repositories.employee import EmployeeRepository
from shiftlog.repositories.user import UserRepository
from shiftlog.schemas.auth import SessionUser
from shiftlog.services.reconciliation import AttendanceService

# auto_error=False so a missing header yields our own 401 envelope
bearer_scheme = HTTPBearer(auto_error=False)


# ── Database session ────────────────────────────────────────────────
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with async_session_factory() as session:
        try:
            yield session
        finally:
            await session.close()


# ── Data-access handles ─────────────────────────────────────────────
def get_attendance_repo(db: AsyncSession = Depends(get_db)) -> AttendanceRepository:
    return AttendanceRepository(db)


def get_employee_repo(db: AsyncSession = Depends(get_db)) -> EmployeeRepository:
    return EmployeeRepository(db)


def get_user_repo(db: AsyncSession = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


def get_attendance_service(
    attendance: AttendanceRepository = Depends(get_attendance_repo),
    employees: EmployeeRepository = Depends(get_employee_repo),
) -> AttendanceService:
    return AttendanceService(attendance, employees)


# ── Auth ────────────────────────────────────────────────────────────
async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> SessionUser:
    """Decode the bearer token. The user row is not looked up."""
    if credentials is None:
        raise AuthError("Please login first")
    return SessionUser(id=decode_session_token(credentials.credentials))
