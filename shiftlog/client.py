"""
Async HTTP client for the attendance API.

Unwraps the ``{success, data, message}`` envelope and raises the same
error classes the server uses. Working hours for a Present submission are
derived from check-in/check-out here, before the record is sent, exactly as
the attendance entry form does.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from shiftlog.core.config import settings
from shiftlog.core.exceptions import AuthError, error_for_status
from shiftlog.core.shifts import working_hours

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:5001/api"
DEV_TOKEN = settings.DEV_BYPASS_TOKEN


class ShiftLogClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.token = token
        self._http = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            transport=transport,
            timeout=timeout,
            headers={"Content-Type": "application/json"},
        )

    async def __aenter__(self) -> "ShiftLogClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        headers = {"Authorization": f"Bearer {self.token or DEV_TOKEN}"}
        resp = await self._http.request(method, path, headers=headers, **kwargs)
        try:
            payload = resp.json()
        except ValueError:
            payload = {"success": False, "message": resp.text}

        if resp.is_error or not payload.get("success", False):
            err = error_for_status(resp.status_code, payload.get("message") or resp.reason_phrase)
            if isinstance(err, AuthError):
                # stale or rejected token: fall back to logged-out state
                self.token = None
            logger.debug("%s %s failed: %s", method, path, err.message)
            raise err
        return payload.get("data")

    # ── Attendance ──────────────────────────────────────────────────
    async def list_attendance(self) -> list[dict]:
        return await self._request("GET", "/attendance")

    async def get_attendance(self, record_id: int) -> dict:
        return await self._request("GET", f"/attendance/{record_id}")

    async def attendance_between(self, start_date: str, end_date: str) -> list[dict]:
        return await self._request(
            "GET",
            "/attendance/date-range",
            params={"startDate": start_date, "endDate": end_date},
        )

    @staticmethod
    def build_record(
        employee_code: str,
        date: str,
        status: str,
        *,
        employee_name: str | None = None,
        shift: str | None = None,
        check_in: str | None = None,
        check_out: str | None = None,
        hours_worked: float | None = None,
        notes: str | None = None,
    ) -> dict[str, Any]:
        """Request body for create/update, with derived hours filled in."""
        if status != "Present":
            check_in = check_out = None
        if hours_worked is None and check_in and check_out:
            hours_worked = working_hours(check_in, check_out)
        return {
            "employee_id": employee_code,
            "employee_name": employee_name,
            "shift": shift,
            "date": date,
            "status": status,
            "check_in": check_in,
            "check_out": check_out,
            "hours_worked": hours_worked or 0,
            "notes": notes,
        }

    async def record_attendance(self, employee_code: str, date: str, status: str, **fields: Any) -> dict:
        body = self.build_record(employee_code, date, status, **fields)
        return await self._request("POST", "/attendance", json=body)

    async def update_attendance(
        self, record_id: int, employee_code: str, date: str, status: str, **fields: Any
    ) -> dict:
        body = self.build_record(employee_code, date, status, **fields)
        return await self._request("PUT", f"/attendance/{record_id}", json=body)

    async def delete_attendance(self, record_id: int) -> None:
        await self._request("DELETE", f"/attendance/{record_id}")

    async def attendance_summary(self) -> dict:
        return await self._request("GET", "/attendance/stats/summary")

    async def shift_stats(self, date: str | None = None) -> list[dict]:
        params = {"date": date} if date else None
        return await self._request("GET", "/attendance/stats/shifts", params=params)

    async def attendance_trend(self, days: int = 30, end_date: str | None = None) -> dict:
        params: dict[str, Any] = {"days": days}
        if end_date:
            params["end_date"] = end_date
        return await self._request("GET", "/attendance/stats/trend", params=params)

    async def employee_rates(self) -> dict:
        return await self._request("GET", "/attendance/stats/employees")

    async def irregularities(self, date: str | None = None) -> list[dict]:
        params = {"date": date} if date else None
        return await self._request("GET", "/attendance/stats/irregularities", params=params)

    # ── Employees ───────────────────────────────────────────────────
    async def list_employees(self, status: str | None = None) -> list[dict]:
        params = {"status": status} if status else None
        return await self._request("GET", "/employees", params=params)

    async def get_employee(self, employee_pk: int) -> dict:
        return await self._request("GET", f"/employees/{employee_pk}")

    async def get_employee_by_code(self, code: str) -> dict:
        return await self._request("GET", f"/employees/employee-id/{code}")

    async def create_employee(
        self,
        employee_code: str,
        name: str,
        shift: str,
        email: str | None = None,
        phone: str | None = None,
    ) -> dict:
        return await self._request(
            "POST",
            "/employees",
            json={
                "employee_id": employee_code,
                "name": name,
                "shift": shift,
                "email": email,
                "phone": phone,
            },
        )

    async def update_employee(self, employee_pk: int, **fields: Any) -> dict:
        return await self._request("PUT", f"/employees/{employee_pk}", json=fields)

    async def delete_employee(self, employee_pk: int) -> None:
        await self._request("DELETE", f"/employees/{employee_pk}")

    async def employee_summary(self) -> dict:
        return await self._request("GET", "/employees/stats/summary")

    # ── Auth ────────────────────────────────────────────────────────
    async def login(self, username: str, password: str) -> dict:
        data = await self._request(
            "POST", "/auth/login", json={"username": username, "password": password}
        )
        self.token = data["token"]
        return data["user"]

    async def register(self, username: str, password: str) -> dict:
        return await self._request(
            "POST", "/auth/register", json={"username": username, "password": password}
        )

    async def logout(self) -> None:
        await self._request("POST", "/auth/logout")
        self.token = None

    async def health(self) -> dict:
        return await self._request("GET", "/health")
