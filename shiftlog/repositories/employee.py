"""
Data access for the ``employees`` table.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import case, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shiftlog.models.employee import Employee


class EmployeeRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list_all(self, status: str | None = None) -> list[Employee]:
        query = select(Employee).order_by(Employee.name.asc())
        if status:
            query = query.where(Employee.status == status)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get(self, employee_pk: int) -> Employee | None:
        result = await self.session.execute(select(Employee).where(Employee.id == employee_pk))
        return result.scalar_one_or_none()

    async def get_by_code(self, code: str) -> Employee | None:
        result = await self.session.execute(
            select(Employee).where(Employee.employee_code == code).limit(1)
        )
        return result.scalar_one_or_none()

    async def add(self, fields: dict[str, Any]) -> Employee:
        employee = Employee(**fields)
        self.session.add(employee)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise
        await self.session.refresh(employee)
        return employee

    async def update(self, employee_pk: int, fields: dict[str, Any]) -> Employee | None:
        employee = await self.get(employee_pk)
        if employee is None:
            return None
        for field, value in fields.items():
            setattr(employee, field, value)
        await self.session.commit()
        await self.session.refresh(employee)
        return employee

    async def deactivate(self, employee_pk: int) -> Employee | None:
        """Soft delete. Attendance history is untouched."""
        return await self.update(employee_pk, {"status": "Inactive"})

    async def summary_counts(self) -> dict[str, int]:
        def _count(column, value):
            return func.sum(case((column == value, 1), else_=0))

        result = await self.session.execute(
            select(
                func.count(Employee.id),
                _count(Employee.shift, "Morning"),
                _count(Employee.shift, "Afternoon"),
                _count(Employee.shift, "Night"),
                _count(Employee.status, "Active"),
                _count(Employee.status, "Inactive"),
            )
        )
        total, morning, afternoon, night, active, inactive = result.one()
        return {
            "total_employees": total or 0,
            "morning_shift": int(morning or 0),
            "afternoon_shift": int(afternoon or 0),
            "night_shift": int(night or 0),
            "active_employees": int(active or 0),
            "inactive_employees": int(inactive or 0),
        }
