"""Response envelope shared by every endpoint."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel

DataT = TypeVar("DataT")


class Envelope(BaseModel, Generic[DataT]):
    success: bool = True
    data: DataT | None = None
    message: str | None = None


def ok(data: Any = None, message: str | None = None) -> Envelope:
    return Envelope(success=True, data=data, message=message)


# ── Health ──────────────────────────────────────────────────────────
class HealthStatus(BaseModel):
    status: str
    version: str
    db: bool
