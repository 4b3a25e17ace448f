"""
Employee & Attendance models — core business domain.

Attendance rows carry a *snapshot* of the employee's name, code and shift
taken at write time. Later edits to the employee master record never
rewrite historical attendance.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import (Column, DateTime, Float, ForeignKey, Integer, String,
                        Text, UniqueConstraint)
from sqlalchemy.orm import relationship

from shiftlog.db.base import Base

SHIFTS = ("Morning", "Afternoon", "Night")
ATTENDANCE_STATUSES = ("Present", "Absent", "Late", "Half Day")


class Employee(Base):
    __tablename__ = "employees"

    id: int = Column(Integer, primary_key=True, index=True)  # type: ignore[assignment]
    employee_code: str = Column(String(50), unique=True, nullable=False, index=True)  # type: ignore[assignment]
    name: str = Column(String(200), nullable=False)  # type: ignore[assignment]
    shift: str = Column(String(20), nullable=False)  # type: ignore[assignment]
    # Morning | Afternoon | Night
    email: str | None = Column(String(320), nullable=True)  # type: ignore[assignment]
    phone: str | None = Column(String(30), nullable=True)  # type: ignore[assignment]
    status: str = Column(  # type: ignore[assignment]
        String(20),
        nullable=False,
        default="Active",
        server_default="Active",
    )  # Active | Inactive
    created_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )

    # No delete cascade: employees are only ever soft-deleted.
    attendances = relationship("Attendance", back_populates="employee")


class Attendance(Base):
    __tablename__ = "attendance"
    __table_args__ = (
        UniqueConstraint("worker_id", "date", "shift", name="uq_attendance_worker_date_shift"),
    )

    id: int = Column(Integer, primary_key=True, index=True)  # type: ignore[assignment]
    employee_name: str = Column(String(200), nullable=False)  # type: ignore[assignment]
    employee_code: str = Column(String(50), nullable=False, index=True)  # type: ignore[assignment]
    worker_id: int = Column(Integer, ForeignKey("employees.id"), nullable=False)  # type: ignore[assignment]
    shift: str = Column(String(20), nullable=False)  # type: ignore[assignment]
    date: str = Column(String(10), nullable=False, index=True)  # type: ignore[assignment]  # YYYY-MM-DD
    status: str = Column(String(20), nullable=False)  # type: ignore[assignment]
    # Present | Absent | Late | Half Day
    check_in: str | None = Column(String(8), nullable=True)  # type: ignore[assignment]  # HH:MM
    check_out: str | None = Column(String(8), nullable=True)  # type: ignore[assignment]
    hours_worked: float = Column(Float, nullable=False, default=0, server_default="0")  # type: ignore[assignment]
    notes: str = Column(Text, nullable=False, default="")  # type: ignore[assignment]
    created_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    employee = relationship("Employee", back_populates="attendances")
