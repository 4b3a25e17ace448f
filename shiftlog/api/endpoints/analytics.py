"""
Dashboard analytics — shift breakdown, daily trend, per-employee rates and
late/early irregularities.

Each endpoint fetches its rows in one query and aggregates in Python.
"""

from __future__ import annotations

from datetime import date, timedelta

from fastapi import APIRouter, Depends, Query

from shiftlog.api.deps import (get_attendance_repo, get_current_user,
                               get_employee_repo)
from shiftlog.core.exceptions import ValidationError
from shiftlog.core.shifts import find_irregularities
from shiftlog.repositories.attendance import AttendanceRepository
from shiftlog.repositories.employee import EmployeeRepository
from shiftlog.schemas.attendance import (EmployeeRatesResponse, Irregularity,
                                         ShiftBreakdown, TrendResponse)
from shiftlog.schemas.common import Envelope, ok
from shiftlog.services import statistics

router = APIRouter(
    prefix="/attendance/stats",
    tags=["analytics"],
    dependencies=[Depends(get_current_user)],
)


def _parse_day(value: str | None, field: str) -> date:
    if not value:
        return date.today()
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise ValidationError(f"{field} must be YYYY-MM-DD") from exc


@router.get("/shifts", response_model=Envelope[list[ShiftBreakdown]])
async def shift_stats(
    date_str: str | None = Query(default=None, alias="date"),
    repo: AttendanceRepository = Depends(get_attendance_repo),
) -> Envelope:
    """Per-shift totals, for one day when ``date`` is given, else all time."""
    rows = await repo.list_on(date_str) if date_str else await repo.list_all()
    return ok(statistics.shift_breakdown(rows))


@router.get("/trend", response_model=Envelope[TrendResponse])
async def attendance_trend(
    days: int = Query(default=30, ge=1, le=366),
    end_date: str | None = None,
    repo: AttendanceRepository = Depends(get_attendance_repo),
) -> Envelope:
    """Daily present/absent counts for the ``days`` days ending at ``end_date``."""
    end = _parse_day(end_date, "end_date")
    start = end - timedelta(days=days - 1)
    rows = await repo.list_between(start.isoformat(), end.isoformat())
    return ok(
        TrendResponse(
            start_date=start.isoformat(),
            end_date=end.isoformat(),
            days=statistics.daily_trend(rows, start, end),
        )
    )


@router.get("/employees", response_model=Envelope[EmployeeRatesResponse])
async def employee_attendance_rates(
    attendance: AttendanceRepository = Depends(get_attendance_repo),
    employees: EmployeeRepository = Depends(get_employee_repo),
) -> Envelope:
    """Attendance rate per active employee, with the best and worst."""
    active = await employees.list_all(status="Active")
    rows = await attendance.list_all()
    return ok(statistics.employee_rates(active, rows))


@router.get("/irregularities", response_model=Envelope[list[Irregularity]])
async def irregularities(
    date_str: str | None = Query(default=None, alias="date"),
    repo: AttendanceRepository = Depends(get_attendance_repo),
) -> Envelope:
    """Late arrivals and early departures for one day (default today)."""
    day = _parse_day(date_str, "date")
    rows = await repo.list_on(day.isoformat())
    return ok([Irregularity(**item) for item in find_irregularities(rows)])
