"""
Count-based summaries over attendance rows.

Nothing here is cached or maintained incrementally: every call works on
rows or counts fetched for the current request.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from datetime import date, timedelta

from shiftlog.models.employee import SHIFTS, Attendance, Employee
from shiftlog.schemas.attendance import (AttendanceSummary,
                                         EmployeeAttendanceRate,
                                         EmployeeRatesResponse,
                                         ShiftBreakdown, TrendDay)


def percent(count: int, total: int) -> float:
    """``count / total`` as a percentage truncated to two decimals.

    Truncation keeps the sum of several percentages of the same total at
    or below 100.
    """
    if not total:
        return 0.0
    return (count * 10000 // total) / 100


def summarize(total: int, counts: dict[str, int], avg_hours: float | None) -> AttendanceSummary:
    present = counts.get("Present", 0)
    absent = counts.get("Absent", 0)
    late = counts.get("Late", 0)
    half_day = counts.get("Half Day", 0)
    return AttendanceSummary(
        total_records=total,
        present_count=present,
        absent_count=absent,
        late_count=late,
        half_day_count=half_day,
        avg_hours=round(avg_hours, 2) if avg_hours is not None else 0.0,
        present_percent=percent(present, total),
        absent_percent=percent(absent, total),
        late_percent=percent(late, total),
        half_day_percent=percent(half_day, total),
    )


def shift_breakdown(records: Iterable[Attendance]) -> list[ShiftBreakdown]:
    """Present/absent counts and Present hours for each shift."""
    present: dict[str, int] = defaultdict(int)
    absent: dict[str, int] = defaultdict(int)
    hours: dict[str, float] = defaultdict(float)
    for rec in records:
        if rec.status == "Present":
            present[rec.shift] += 1
            hours[rec.shift] += rec.hours_worked or 0.0
        elif rec.status == "Absent":
            absent[rec.shift] += 1
    return [
        ShiftBreakdown(
            shift=shift,
            present=present[shift],
            absent=absent[shift],
            total_hours=round(hours[shift], 2),
        )
        for shift in SHIFTS
    ]


def daily_trend(records: Iterable[Attendance], start: date, end: date) -> list[TrendDay]:
    """One entry per calendar day in ``[start, end]``, empty days included."""
    by_day: dict[str, list[Attendance]] = defaultdict(list)
    for rec in records:
        by_day[rec.date].append(rec)

    days = []
    current = start
    while current <= end:
        key = current.isoformat()
        day_records = by_day.get(key, [])
        present = sum(1 for r in day_records if r.status == "Present")
        absent = sum(1 for r in day_records if r.status == "Absent")
        total = len(day_records)
        days.append(
            TrendDay(
                date=key,
                present=present,
                absent=absent,
                total=total,
                rate=round(present / total * 100, 2) if total else 0.0,
            )
        )
        current += timedelta(days=1)
    return days


def employee_rates(
    employees: Iterable[Employee], records: Iterable[Attendance]
) -> EmployeeRatesResponse:
    """Attendance rate (Present / all records) for each employee."""
    totals: dict[int, int] = defaultdict(int)
    presents: dict[int, int] = defaultdict(int)
    for rec in records:
        totals[rec.worker_id] += 1
        if rec.status == "Present":
            presents[rec.worker_id] += 1

    rates = []
    for emp in employees:
        total = totals[emp.id]
        present = presents[emp.id]
        rates.append(
            EmployeeAttendanceRate(
                worker_id=emp.id,
                employee_code=emp.employee_code,
                name=emp.name,
                present_count=present,
                absent_count=total - present,
                total_count=total,
                attendance_rate=round(present / total * 100, 2) if total else 0.0,
            )
        )

    most = least = None
    for item in rates:
        if most is None or item.attendance_rate > most.attendance_rate:
            most = item
        if least is None or item.attendance_rate < least.attendance_rate:
            least = item

    return EmployeeRatesResponse(employees=rates, most_present=most, least_present=least)
