"""
Attendance reconciliation.

A submitted attendance event names an employee by external code. Before it
is stored, the code is resolved against the employee master record, the
employee's name/shift fill any blanks, and defaults are applied. The
resolved values are a snapshot: they are never refreshed when the employee
record changes later.

There is no pre-check for duplicates and no transaction around the
read-then-write sequence; the (worker, date, shift) unique constraint
decides concurrent submissions and the loser gets ConflictError.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError

from shiftlog.core.exceptions import ConflictError, NotFoundError, ValidationError
from shiftlog.models.employee import Attendance, Employee
from shiftlog.repositories.attendance import AttendanceRepository
from shiftlog.repositories.employee import EmployeeRepository
from shiftlog.schemas.attendance import AttendanceWrite

logger = logging.getLogger(__name__)

DUPLICATE_MESSAGE = "Attendance record already exists for this employee, date, and shift"


def resolve_fields(payload: AttendanceWrite, employee: Employee) -> dict[str, Any]:
    """Column values for *payload* once *employee* has been resolved."""
    return {
        "employee_name": payload.employee_name or employee.name,
        "employee_code": employee.employee_code,
        "worker_id": employee.id,
        "shift": payload.shift or employee.shift,
        "date": payload.date,
        "status": payload.status,
        "check_in": payload.check_in or None,
        "check_out": payload.check_out or None,
        "hours_worked": payload.hours_worked if payload.hours_worked is not None else 0,
        "notes": payload.notes or "",
    }


class AttendanceService:
    def __init__(self, attendance: AttendanceRepository, employees: EmployeeRepository) -> None:
        self.attendance = attendance
        self.employees = employees

    async def _reconcile(self, payload: AttendanceWrite) -> dict[str, Any]:
        if not payload.employee_code:
            raise ValidationError("employee_id is required")
        if not payload.date or not payload.status:
            raise ValidationError("date and status are required")

        employee = await self.employees.get_by_code(payload.employee_code)
        if employee is None:
            raise NotFoundError("Employee not found")
        return resolve_fields(payload, employee)

    async def create(self, payload: AttendanceWrite) -> Attendance:
        fields = await self._reconcile(payload)
        try:
            record = await self.attendance.add(fields)
        except IntegrityError as exc:
            logger.info(
                "Duplicate attendance for %s on %s (%s)",
                fields["employee_code"],
                fields["date"],
                fields["shift"],
            )
            raise ConflictError(DUPLICATE_MESSAGE) from exc

        logger.info(
            "Recorded %s for %s on %s (%s shift)",
            record.status,
            record.employee_code,
            record.date,
            record.shift,
        )
        return record

    async def update(self, record_id: int, payload: AttendanceWrite) -> Attendance:
        fields = await self._reconcile(payload)
        try:
            record = await self.attendance.update(record_id, fields)
        except IntegrityError as exc:
            raise ConflictError(DUPLICATE_MESSAGE) from exc
        if record is None:
            raise NotFoundError("Record not found")

        logger.info("Updated attendance record %d", record_id)
        return record
