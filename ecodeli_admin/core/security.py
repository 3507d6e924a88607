"""
Core security module — JWT token management and password hashing.

Two token families are issued:

- admin session tokens, signed with ``NEXTAUTH_SECRET``, carrying the
  admin's ``sub``/``id`` and ``role`` (the session callback payload);
- public customer tokens, signed with ``JWT_SECRET``, carrying
  ``userId``, ``email``, ``role`` and ``userType``.
"""

import logging
from datetime import datetime, timedelta, timezone

import bcrypt as _bcrypt
import jwt
from fastapi import HTTPException, status

from ecodeli_admin.config import settings

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Token creation
# ---------------------------------------------------------------------------


def create_session_token(user_id: str, email: str, name: str, role: str) -> str:
    """Create an admin session JWT."""
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "email": email,
        "name": name,
        "role": role,
        "type": "session",
        "iat": now,
        "exp": now + timedelta(minutes=settings.SESSION_EXPIRE_MINUTES),
    }
    return jwt.encode(payload, settings.NEXTAUTH_SECRET, algorithm=settings.JWT_ALGORITHM)


def create_customer_token(user_id: str, email: str, role: str, user_type: str | None) -> str:
    """Create a public-API customer JWT."""
    now = datetime.now(timezone.utc)
    payload = {
        "userId": str(user_id),
        "email": email,
        "role": role,
        "userType": user_type,
        "iat": now,
        "exp": now + timedelta(hours=settings.CUSTOMER_TOKEN_EXPIRE_HOURS),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


# ---------------------------------------------------------------------------
# Token verification
# ---------------------------------------------------------------------------


def _decode(token: str, secret: str) -> dict:
    try:
        return jwt.decode(token, secret, algorithms=[settings.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired",
        )
    except jwt.InvalidTokenError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
        )


def decode_session_token(token: str) -> dict:
    """
    Decode an admin session token.

    Raises HTTP 401 on expiry, bad signature, or a token of another kind.
    """
    payload = _decode(token, settings.NEXTAUTH_SECRET)
    if payload.get("type") != "session" or not payload.get("sub"):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
        )
    return payload


def decode_customer_token(token: str) -> dict:
    """Decode a customer token; it must carry a ``userId`` claim."""
    payload = _decode(token, settings.JWT_SECRET)
    if not payload.get("userId"):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
        )
    return payload


def bearer_token(authorization: str | None) -> str:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    return authorization[len("Bearer "):]


# ---------------------------------------------------------------------------
# Password helpers
# ---------------------------------------------------------------------------


def hash_password(plain_password: str) -> str:
    """Hash a password using bcrypt with 12 rounds."""
    hashed = _bcrypt.hashpw(plain_password.encode(), _bcrypt.gensalt(rounds=12))
    return hashed.decode()


def verify_password(plain_password: str, password_hash: str) -> bool:
    """Verify a plain password against its bcrypt hash."""
    try:
        return _bcrypt.checkpw(plain_password.encode(), password_hash.encode())
    except ValueError:
        logger.warning("Stored password hash is not a valid bcrypt hash")
        return False
