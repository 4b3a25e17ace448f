"""
Auth endpoints — login, registration and logout.

Tokens are stateless, so logout only acknowledges the request; the client
is expected to discard its token.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.exc import IntegrityError

from shiftlog.api.deps import get_user_repo
from shiftlog.core.exceptions import AuthError, ConflictError, ValidationError
from shiftlog.core.security import (create_session_token, get_password_hash,
                                    verify_password)
from shiftlog.repositories.user import UserRepository
from shiftlog.schemas.auth import Credentials, LoginResult, UserRead
from shiftlog.schemas.common import Envelope, ok

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


def _require(body: Credentials) -> tuple[str, str]:
    if not body.username or not body.password:
        raise ValidationError("Username and password are required")
    return body.username, body.password


@router.post("/login", response_model=Envelope[LoginResult])
async def login(
    body: Credentials,
    users: UserRepository = Depends(get_user_repo),
) -> Envelope:
    username, password = _require(body)
    user = await users.get_by_username(username)
    if user is None or not verify_password(password, user.hashed_password):
        logger.info("Failed login for %s", username)
        raise AuthError("Invalid username or password")

    logger.info("User %s logged in", username)
    return ok(
        LoginResult(token=create_session_token(user.id), user=UserRead.model_validate(user)),
        "Login successful",
    )


@router.post("/register", response_model=Envelope[UserRead], status_code=201)
async def register(
    body: Credentials,
    users: UserRepository = Depends(get_user_repo),
) -> Envelope:
    username, password = _require(body)
    if await users.get_by_username(username):
        raise ConflictError("Username already exists")

    try:
        user = await users.add(username, get_password_hash(password))
    except IntegrityError as exc:
        raise ConflictError("Username already exists") from exc

    logger.info("Registered user %s", username)
    return ok(UserRead.model_validate(user), "Registration successful! You can now login.")


@router.post("/logout", response_model=Envelope)
async def logout() -> Envelope:
    return ok(message="Logged out successfully")
