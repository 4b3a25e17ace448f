"""Pydantic schemas for the employee master record."""

from __future__ import annotations

from datetime import datetime

from pydantic import AliasChoices, BaseModel, Field


class EmployeeCreate(BaseModel):
    employee_code: str | None = Field(
        default=None,
        validation_alias=AliasChoices("employee_code", "employee_id"),
    )
    name: str | None = None
    shift: str | None = None
    email: str | None = None
    phone: str | None = None


class EmployeeUpdate(BaseModel):
    name: str | None = None
    shift: str | None = None
    email: str | None = None
    phone: str | None = None
    status: str | None = None


class EmployeeRead(BaseModel):
    id: int
    employee_code: str
    name: str
    shift: str
    email: str | None = None
    phone: str | None = None
    status: str
    created_at: datetime | None = None

    model_config = {"from_attributes": True}


class EmployeeSummary(BaseModel):
    total_employees: int = 0
    morning_shift: int = 0
    afternoon_shift: int = 0
    night_shift: int = 0
    active_employees: int = 0
    inactive_employees: int = 0
