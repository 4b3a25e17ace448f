"""
Attendance CRUD endpoints.

All routes require a bearer token. Create and update run through the
reconciliation service; reads and deletes go straight to the repository.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query

from shiftlog.api.deps import (get_attendance_repo, get_attendance_service,
                               get_current_user)
from shiftlog.core.exceptions import NotFoundError, ValidationError
from shiftlog.repositories.attendance import AttendanceRepository
from shiftlog.schemas.attendance import (AttendanceRead, AttendanceSummary,
                                         AttendanceWrite)
from shiftlog.schemas.common import Envelope, ok
from shiftlog.services import statistics
from shiftlog.services.reconciliation import AttendanceService

router = APIRouter(
    prefix="/attendance",
    tags=["attendance"],
    dependencies=[Depends(get_current_user)],
)
logger = logging.getLogger(__name__)


def _read_all(rows) -> list[AttendanceRead]:
    return [AttendanceRead.model_validate(r) for r in rows]


@router.get("", response_model=Envelope[list[AttendanceRead]])
async def list_attendance(
    repo: AttendanceRepository = Depends(get_attendance_repo),
) -> Envelope:
    """All records, newest date first."""
    return ok(_read_all(await repo.list_all()))


async def _between(repo: AttendanceRepository, start: str | None, end: str | None) -> Envelope:
    if not start or not end:
        raise ValidationError("startDate and endDate are required")
    return ok(_read_all(await repo.list_between(start, end)))


@router.get("/date-range", response_model=Envelope[list[AttendanceRead]])
async def attendance_date_range(
    start_date: str | None = Query(default=None, alias="startDate"),
    end_date: str | None = Query(default=None, alias="endDate"),
    repo: AttendanceRepository = Depends(get_attendance_repo),
) -> Envelope:
    return await _between(repo, start_date, end_date)


@router.get("/filter/date-range", response_model=Envelope[list[AttendanceRead]])
async def attendance_date_range_legacy(
    start_date: str | None = Query(default=None, alias="startDate"),
    end_date: str | None = Query(default=None, alias="endDate"),
    repo: AttendanceRepository = Depends(get_attendance_repo),
) -> Envelope:
    """Older path for the date-range filter."""
    return await _between(repo, start_date, end_date)


@router.get("/stats/summary", response_model=Envelope[AttendanceSummary])
async def attendance_summary(
    repo: AttendanceRepository = Depends(get_attendance_repo),
) -> Envelope:
    """Status breakdown over the whole table. No date or employee filter."""
    total, counts, avg_hours = await repo.status_counts()
    return ok(statistics.summarize(total, counts, avg_hours))


@router.get("/{record_id}", response_model=Envelope[AttendanceRead])
async def get_attendance(
    record_id: int,
    repo: AttendanceRepository = Depends(get_attendance_repo),
) -> Envelope:
    record = await repo.get(record_id)
    if record is None:
        raise NotFoundError("Record not found")
    return ok(AttendanceRead.model_validate(record))


@router.post("", response_model=Envelope[AttendanceRead], status_code=201)
async def create_attendance(
    body: AttendanceWrite,
    service: AttendanceService = Depends(get_attendance_service),
) -> Envelope:
    record = await service.create(body)
    return ok(AttendanceRead.model_validate(record), "Attendance record created successfully")


@router.put("/{record_id}", response_model=Envelope[AttendanceRead])
async def update_attendance(
    record_id: int,
    body: AttendanceWrite,
    service: AttendanceService = Depends(get_attendance_service),
) -> Envelope:
    record = await service.update(record_id, body)
    return ok(AttendanceRead.model_validate(record), "Attendance record updated successfully")


@router.delete("/{record_id}", response_model=Envelope)
async def delete_attendance(
    record_id: int,
    repo: AttendanceRepository = Depends(get_attendance_repo),
) -> Envelope:
    """Physical delete."""
    if not await repo.delete(record_id):
        raise NotFoundError("Record not found")
    logger.info("Deleted attendance record %d", record_id)
    return ok(message="Attendance record deleted successfully")
