"""Unit tests for attendance reconciliation, without HTTP."""

from types import SimpleNamespace

import pytest

from shiftlog.core.exceptions import ConflictError, NotFoundError, ValidationError
from shiftlog.repositories.attendance import AttendanceRepository
from shiftlog.repositories.employee import EmployeeRepository
from shiftlog.schemas.attendance import AttendanceWrite
from shiftlog.services.reconciliation import AttendanceService, resolve_fields

EMPLOYEE = SimpleNamespace(id=3, employee_code="EMP-3", name="Meera Iyer", shift="Afternoon")


def test_resolve_fills_blanks_from_employee():
    payload = AttendanceWrite(employee_code="EMP-3", date="2025-03-10", status="Present")
    fields = resolve_fields(payload, EMPLOYEE)
    assert fields == {
        "employee_name": "Meera Iyer",
        "employee_code": "EMP-3",
        "worker_id": 3,
        "shift": "Afternoon",
        "date": "2025-03-10",
        "status": "Present",
        "check_in": None,
        "check_out": None,
        "hours_worked": 0,
        "notes": "",
    }


def test_resolve_prefers_supplied_values():
    payload = AttendanceWrite(
        employee_id="EMP-3",
        name="M. Iyer",
        shift="Night",
        date="2025-03-10",
        status="Half Day",
        check_in="22:00",
        hours_worked=4,
        notes="left for clinic",
    )
    fields = resolve_fields(payload, EMPLOYEE)
    assert fields["employee_name"] == "M. Iyer"
    assert fields["shift"] == "Night"
    assert fields["check_in"] == "22:00"
    assert fields["hours_worked"] == 4
    assert fields["notes"] == "left for clinic"


def test_resolve_keeps_explicit_zero_hours():
    payload = AttendanceWrite(employee_code="EMP-3", date="d", status="s", hours_worked=0)
    assert resolve_fields(payload, EMPLOYEE)["hours_worked"] == 0


def test_status_is_not_validated():
    payload = AttendanceWrite(employee_code="EMP-3", date="yesterday", status="On Leave")
    fields = resolve_fields(payload, EMPLOYEE)
    assert fields["status"] == "On Leave"
    assert fields["date"] == "yesterday"


@pytest.fixture
async def service(db_session):
    return AttendanceService(AttendanceRepository(db_session), EmployeeRepository(db_session))


@pytest.fixture
async def employee(db_session):
    return await EmployeeRepository(db_session).add(
        {"employee_code": "EMP-3", "name": "Meera Iyer", "shift": "Afternoon"}
    )


@pytest.mark.asyncio
async def test_service_requires_code(service):
    with pytest.raises(ValidationError):
        await service.create(AttendanceWrite(employee_code="", date="2025-03-10", status="Present"))


@pytest.mark.asyncio
async def test_service_unknown_employee(service):
    with pytest.raises(NotFoundError):
        await service.create(AttendanceWrite(employee_code="X", date="2025-03-10", status="Present"))


@pytest.mark.asyncio
async def test_service_conflict_then_recovers(service, employee):
    payload = AttendanceWrite(employee_code="EMP-3", date="2025-03-10", status="Present")
    first = await service.create(payload)
    assert first.worker_id == employee.id
    first_id = first.id

    with pytest.raises(ConflictError):
        await service.create(payload)

    # the session is still usable after the rollback
    other = await service.create(
        AttendanceWrite(employee_code="EMP-3", date="2025-03-11", status="Absent")
    )
    assert other.id != first_id


@pytest.mark.asyncio
async def test_service_update_missing_row(service, employee):
    with pytest.raises(NotFoundError):
        await service.update(
            404, AttendanceWrite(employee_code="EMP-3", date="2025-03-10", status="Present")
        )
