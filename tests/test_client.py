"""Tests for the Python API client, run against the app in-process."""

import pytest

from shiftlog.client import DEV_TOKEN, ShiftLogClient
from shiftlog.core.config import settings
from shiftlog.core.exceptions import AuthError, ConflictError, NotFoundError


def test_build_record_derives_overnight_hours():
    body = ShiftLogClient.build_record(
        "EMP-1", "2025-03-10", "Present", check_in="22:00", check_out="06:00"
    )
    assert body["hours_worked"] == 8.0
    assert body["employee_id"] == "EMP-1"


def test_build_record_keeps_explicit_hours():
    body = ShiftLogClient.build_record(
        "EMP-1", "2025-03-10", "Present", check_in="06:15", check_out="14:00", hours_worked=6
    )
    assert body["hours_worked"] == 6


def test_build_record_drops_times_when_not_present():
    body = ShiftLogClient.build_record(
        "EMP-1", "2025-03-10", "Absent", check_in="06:00", check_out="14:00"
    )
    assert body["check_in"] is None
    assert body["check_out"] is None
    assert body["hours_worked"] == 0


@pytest.mark.asyncio
async def test_record_and_fetch(api: ShiftLogClient):
    emp = await api.create_employee("EMP-9", "Kiran Das", "Morning")
    created = await api.record_attendance(
        "EMP-9", "2025-03-10", "Present", check_in="06:15", check_out="14:00"
    )
    assert created["hours_worked"] == 7.75
    assert created["employee_name"] == "Kiran Das"
    assert created["worker_id"] == emp["id"]

    assert await api.get_attendance(created["id"]) == created
    assert [r["id"] for r in await api.list_attendance()] == [created["id"]]
    ranged = await api.attendance_between("2025-03-01", "2025-03-31")
    assert len(ranged) == 1


@pytest.mark.asyncio
async def test_update_and_delete(api: ShiftLogClient):
    await api.create_employee("EMP-9", "Kiran Das", "Night")
    created = await api.record_attendance("EMP-9", "2025-03-10", "Present")
    updated = await api.update_attendance(
        created["id"], "EMP-9", "2025-03-10", "Present", check_in="22:00", check_out="06:00"
    )
    assert updated["hours_worked"] == 8.0

    await api.delete_attendance(created["id"])
    with pytest.raises(NotFoundError):
        await api.get_attendance(created["id"])


@pytest.mark.asyncio
async def test_errors_map_to_taxonomy(api: ShiftLogClient):
    with pytest.raises(NotFoundError):
        await api.record_attendance("NOBODY", "2025-03-10", "Present")

    await api.create_employee("EMP-1", "One", "Morning")
    with pytest.raises(ConflictError):
        await api.create_employee("EMP-1", "Again", "Morning")


@pytest.mark.asyncio
async def test_auth_error_clears_token(api: ShiftLogClient):
    api.token = "not-a-token"
    with pytest.raises(AuthError):
        await api.list_employees()
    assert api.token is None
    # falls back to the development token
    assert await api.list_employees() == []


@pytest.mark.asyncio
async def test_login_stores_token(api: ShiftLogClient):
    await api.register("lead", "s3cret")
    user = await api.login("lead", "s3cret")
    assert user["username"] == "lead"
    assert api.token

    summary = await api.employee_summary()
    assert summary["total_employees"] == 0

    await api.logout()
    assert api.token is None


@pytest.mark.asyncio
async def test_summaries_and_health(api: ShiftLogClient):
    await api.create_employee("EMP-2", "Two", "Afternoon")
    await api.record_attendance("EMP-2", "2025-03-10", "Absent")

    summary = await api.attendance_summary()
    assert summary["absent_count"] == 1
    assert summary["absent_percent"] == 100.0

    shifts = await api.shift_stats("2025-03-10")
    assert {s["shift"] for s in shifts} == {"Morning", "Afternoon", "Night"}

    health = await api.health()
    assert health["status"] == "OK"


@pytest.mark.asyncio
async def test_dashboard_analytics(api: ShiftLogClient):
    await api.create_employee("EMP-3", "Three", "Morning")
    await api.create_employee("EMP-4", "Four", "Morning")
    await api.record_attendance("EMP-3", "2025-03-10", "Present", check_in="07:05", check_out="14:00")
    await api.record_attendance("EMP-4", "2025-03-10", "Absent")

    trend = await api.attendance_trend(days=3, end_date="2025-03-10")
    assert trend["start_date"] == "2025-03-08"
    assert [d["date"] for d in trend["days"]] == ["2025-03-08", "2025-03-09", "2025-03-10"]
    assert trend["days"][-1] == {
        "date": "2025-03-10", "present": 1, "absent": 1, "total": 2, "rate": 50.0,
    }

    rates = await api.employee_rates()
    assert rates["most_present"]["employee_code"] == "EMP-3"
    assert rates["least_present"]["employee_code"] == "EMP-4"

    issues = await api.irregularities("2025-03-10")
    assert [(i["employee_code"], i["issue"]) for i in issues] == [("EMP-3", "Late Arrival")]


def test_dev_token_follows_settings():
    assert DEV_TOKEN == settings.DEV_BYPASS_TOKEN
