"""
Session tokens and password hashing (bcrypt).

The default ``plain`` token is base64 of ``"<user_id>:<epoch_ms>"``. It is
reversible text, not a credential: no signature, no expiry, no revocation.
``TOKEN_SCHEME=jwt`` switches to signed, expiring HS256 tokens.
"""

from __future__ import annotations

import base64
import binascii
import time
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from passlib.context import CryptContext

from shiftlog.core.config import settings
from shiftlog.core.exceptions import AuthError

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

BYPASS_USER_ID = 1


# ── Passwords ───────────────────────────────────────────────────────
def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def get_password_hash(plain: str) -> str:
    return pwd_context.hash(plain)


# ── Plain tokens ────────────────────────────────────────────────────
def encode_plain_token(user_id: int, issued_ms: int | None = None) -> str:
    if issued_ms is None:
        issued_ms = int(time.time() * 1000)
    raw = f"{user_id}:{issued_ms}".encode("utf-8")
    return base64.b64encode(raw).decode("ascii")


def decode_plain_token(token: str) -> int:
    """Return the user id carried by a plain token, or raise AuthError."""
    try:
        decoded = base64.b64decode(token, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as exc:
        raise AuthError("Invalid token") from exc

    user_part, sep, _issued = decoded.partition(":")
    if not sep:
        raise AuthError("Invalid token")
    try:
        return int(user_part)
    except ValueError as exc:
        raise AuthError("Invalid token") from exc


# ── JWT tokens ──────────────────────────────────────────────────────
def create_access_token(user_id: int, expires_delta: timedelta | None = None) -> str:
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    return jwt.encode(
        {"exp": expire, "sub": str(user_id), "type": "access"},
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
    )


def decode_access_token(token: str) -> int:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError as exc:
        raise AuthError("Invalid token") from exc
    if payload.get("type") != "access":
        raise AuthError("Invalid token")
    try:
        return int(payload["sub"])
    except (KeyError, TypeError, ValueError) as exc:
        raise AuthError("Invalid token") from exc


# ── Scheme dispatch ─────────────────────────────────────────────────
def create_session_token(user_id: int) -> str:
    if settings.TOKEN_SCHEME == "jwt":
        return create_access_token(user_id)
    return encode_plain_token(user_id)


def decode_session_token(token: str) -> int:
    """Resolve a bearer token to a user id.

    The development bypass string always maps to user 1 while
    ``ALLOW_DEV_TOKEN`` is enabled.
    """
    if settings.ALLOW_DEV_TOKEN and token == settings.DEV_BYPASS_TOKEN:
        return BYPASS_USER_ID
    if settings.TOKEN_SCHEME == "jwt":
        return decode_access_token(token)
    return decode_plain_token(token)
