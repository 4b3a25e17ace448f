"""
Data access for the ``attendance`` table.

One repository instance wraps one request-scoped ``AsyncSession``; it is
handed to route handlers through FastAPI dependencies.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import case, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shiftlog.models.employee import ATTENDANCE_STATUSES, Attendance


class AttendanceRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list_all(self) -> list[Attendance]:
        result = await self.session.execute(
            select(Attendance).order_by(Attendance.date.desc(), Attendance.shift.asc())
        )
        return list(result.scalars().all())

    async def get(self, record_id: int) -> Attendance | None:
        result = await self.session.execute(select(Attendance).where(Attendance.id == record_id))
        return result.scalar_one_or_none()

    async def list_between(self, start_date: str, end_date: str) -> list[Attendance]:
        """Rows whose date falls in ``[start_date, end_date]`` (inclusive)."""
        result = await self.session.execute(
            select(Attendance)
            .where(Attendance.date.between(start_date, end_date))
            .order_by(Attendance.date.desc(), Attendance.shift.asc())
        )
        return list(result.scalars().all())

    async def list_on(self, date_str: str) -> list[Attendance]:
        result = await self.session.execute(
            select(Attendance)
            .where(Attendance.date == date_str)
            .order_by(Attendance.shift.asc(), Attendance.employee_name.asc())
        )
        return list(result.scalars().all())

    async def add(self, fields: dict[str, Any]) -> Attendance:
        """Insert a row. Uniqueness violations propagate as IntegrityError."""
        record = Attendance(**fields)
        self.session.add(record)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise
        await self.session.refresh(record)
        return record

    async def update(self, record_id: int, fields: dict[str, Any]) -> Attendance | None:
        record = await self.get(record_id)
        if record is None:
            return None
        for field, value in fields.items():
            setattr(record, field, value)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise
        await self.session.refresh(record)
        return record

    async def delete(self, record_id: int) -> bool:
        record = await self.get(record_id)
        if record is None:
            return False
        await self.session.delete(record)
        await self.session.commit()
        return True

    async def status_counts(self) -> tuple[int, dict[str, int], float | None]:
        """Total rows, per-status counts and the raw average of hours worked."""
        per_status = [
            func.sum(case((Attendance.status == status, 1), else_=0))
            for status in ATTENDANCE_STATUSES
        ]
        result = await self.session.execute(
            select(func.count(Attendance.id), func.avg(Attendance.hours_worked), *per_status)
        )
        total, avg_hours, *counts = result.one()
        return (
            total or 0,
            {status: int(n or 0) for status, n in zip(ATTENDANCE_STATUSES, counts)},
            float(avg_hours) if avg_hours is not None else None,
        )
