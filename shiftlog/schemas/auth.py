"""Pydantic schemas for login, registration and session tokens."""

from __future__ import annotations

from pydantic import BaseModel, field_validator


class Credentials(BaseModel):
    username: str | None = None
    password: str | None = None

    @field_validator("username")
    @classmethod
    def _strip_username(cls, v: str | None) -> str | None:
        return v.strip() if v is not None else v


class UserRead(BaseModel):
    id: int
    username: str
    role: str

    model_config = {"from_attributes": True}


class LoginResult(BaseModel):
    token: str
    user: UserRead


class SessionUser(BaseModel):
    """Identity carried by a bearer token."""

    id: int
