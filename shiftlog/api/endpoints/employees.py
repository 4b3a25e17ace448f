"""
Employee master-record endpoints.

All routes require a bearer token. DELETE is a soft delete: the employee is
marked Inactive and their attendance history stays as it was.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.exc import IntegrityError

from shiftlog.api.deps import get_current_user, get_employee_repo
from shiftlog.core.exceptions import ConflictError, NotFoundError, ValidationError
from shiftlog.repositories.employee import EmployeeRepository
from shiftlog.schemas.common import Envelope, ok
from shiftlog.schemas.employee import (EmployeeCreate, EmployeeRead,
                                       EmployeeSummary, EmployeeUpdate)

router = APIRouter(
    prefix="/employees",
    tags=["employees"],
    dependencies=[Depends(get_current_user)],
)
logger = logging.getLogger(__name__)

_NULLABLE_FIELDS = {"email", "phone"}


@router.get("", response_model=Envelope[list[EmployeeRead]])
async def list_employees(
    status: str | None = None,
    repo: EmployeeRepository = Depends(get_employee_repo),
) -> Envelope:
    """Every employee ordered by name, Inactive included unless filtered."""
    rows = await repo.list_all(status=status)
    return ok([EmployeeRead.model_validate(e) for e in rows])


@router.get("/stats/summary", response_model=Envelope[EmployeeSummary])
async def employee_summary(
    repo: EmployeeRepository = Depends(get_employee_repo),
) -> Envelope:
    return ok(EmployeeSummary(**await repo.summary_counts()))


@router.get("/employee-id/{code}", response_model=Envelope[EmployeeRead])
async def get_employee_by_code(
    code: str,
    repo: EmployeeRepository = Depends(get_employee_repo),
) -> Envelope:
    emp = await repo.get_by_code(code)
    if emp is None:
        raise NotFoundError("Employee not found")
    return ok(EmployeeRead.model_validate(emp))


@router.get("/{employee_pk}", response_model=Envelope[EmployeeRead])
async def get_employee(
    employee_pk: int,
    repo: EmployeeRepository = Depends(get_employee_repo),
) -> Envelope:
    emp = await repo.get(employee_pk)
    if emp is None:
        raise NotFoundError("Employee not found")
    return ok(EmployeeRead.model_validate(emp))


@router.post("", response_model=Envelope[EmployeeRead], status_code=201)
async def create_employee(
    body: EmployeeCreate,
    repo: EmployeeRepository = Depends(get_employee_repo),
) -> Envelope:
    if not body.employee_code or not body.name or not body.shift:
        raise ValidationError("Employee ID, name, and shift are required")

    if await repo.get_by_code(body.employee_code):
        raise ConflictError("Employee ID already exists")

    try:
        emp = await repo.add(
            {
                "employee_code": body.employee_code,
                "name": body.name,
                "shift": body.shift,
                "email": body.email or None,
                "phone": body.phone or None,
                "status": "Active",
            }
        )
    except IntegrityError as exc:
        # lost a race with a concurrent registration of the same code
        raise ConflictError("Employee ID already exists") from exc

    logger.info("Created employee %s (%s)", emp.name, emp.employee_code)
    return ok(EmployeeRead.model_validate(emp), "Employee created successfully")


@router.put("/{employee_pk}", response_model=Envelope[EmployeeRead])
async def update_employee(
    employee_pk: int,
    body: EmployeeUpdate,
    repo: EmployeeRepository = Depends(get_employee_repo),
) -> Envelope:
    """Partial update; attendance snapshots keep the old name and shift."""
    fields = {
        k: v
        for k, v in body.model_dump(exclude_unset=True).items()
        if v is not None or k in _NULLABLE_FIELDS
    }
    emp = await repo.update(employee_pk, fields)
    if emp is None:
        raise NotFoundError("Employee not found")
    logger.info("Updated employee %d", employee_pk)
    return ok(EmployeeRead.model_validate(emp), "Employee updated successfully")


@router.delete("/{employee_pk}", response_model=Envelope)
async def delete_employee(
    employee_pk: int,
    repo: EmployeeRepository = Depends(get_employee_repo),
) -> Envelope:
    emp = await repo.deactivate(employee_pk)
    if emp is None:
        raise NotFoundError("Employee not found")
    logger.info("Soft-deleted employee %d (%s)", employee_pk, emp.name)
    return ok(message="Employee deleted successfully")
