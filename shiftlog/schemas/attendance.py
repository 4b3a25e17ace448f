"""Pydantic schemas for attendance records and attendance statistics."""

from __future__ import annotations

from datetime import datetime

from pydantic import AliasChoices, BaseModel, Field


# ── Attendance write ────────────────────────────────────────────────
class AttendanceWrite(BaseModel):
    """Body of POST/PUT /attendance.

    Only presence is checked (in the reconciliation service); dates,
    statuses and clock times are stored as given.
    """

    employee_code: str | None = Field(
        default=None,
        validation_alias=AliasChoices("employee_code", "employee_id"),
    )
    employee_name: str | None = Field(
        default=None,
        validation_alias=AliasChoices("employee_name", "name"),
    )
    shift: str | None = None
    date: str | None = None
    status: str | None = None
    check_in: str | None = None
    check_out: str | None = None
    hours_worked: float | None = None
    notes: str | None = None


# ── Attendance read ─────────────────────────────────────────────────
class AttendanceRead(BaseModel):
    id: int
    employee_name: str
    employee_code: str
    worker_id: int
    shift: str
    date: str
    status: str
    check_in: str | None = None
    check_out: str | None = None
    hours_worked: float = 0.0
    notes: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


# ── Summary ─────────────────────────────────────────────────────────
class AttendanceSummary(BaseModel):
    total_records: int = 0
    present_count: int = 0
    absent_count: int = 0
    late_count: int = 0
    half_day_count: int = 0
    avg_hours: float = 0.0
    present_percent: float = 0.0
    absent_percent: float = 0.0
    late_percent: float = 0.0
    half_day_percent: float = 0.0


# ── Dashboard analytics ─────────────────────────────────────────────
class ShiftBreakdown(BaseModel):
    shift: str
    present: int
    absent: int
    total_hours: float


class TrendDay(BaseModel):
    date: str
    present: int
    absent: int
    total: int
    rate: float


class TrendResponse(BaseModel):
    start_date: str
    end_date: str
    days: list[TrendDay]


class EmployeeAttendanceRate(BaseModel):
    worker_id: int
    employee_code: str
    name: str
    present_count: int
    absent_count: int
    total_count: int
    attendance_rate: float


class EmployeeRatesResponse(BaseModel):
    employees: list[EmployeeAttendanceRate]
    most_present: EmployeeAttendanceRate | None = None
    least_present: EmployeeAttendanceRate | None = None


class Irregularity(BaseModel):
    employee_name: str
    employee_code: str
    issue: str  # Late Arrival | Early Departure
    time: str
    shift: str
