"""
Admin authentication endpoints — credential login and session lookup.
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from ecodeli_admin.api.deps import get_current_admin
from ecodeli_admin.config import settings
from ecodeli_admin.core.security import create_session_token
from ecodeli_admin.database import get_db
from ecodeli_admin.redis_client import get_redis
from ecodeli_admin.schemas.auth import LoginRequest, LoginResponse, SessionResponse, SessionUser
from ecodeli_admin.services import auth_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
async def login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db),
    redis=Depends(get_redis),
):
    """
    Exchange admin credentials for a session token.

    Only ADMIN users with a password can sign in. Repeated failures for
    the same email lock it for LOGIN_LOCK_SECONDS (429).
    """
    if await auth_service.is_login_locked(payload.email, redis):
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many failed login attempts. Try again later.",
        )

    user = await auth_service.authenticate_admin(db, payload.email, payload.password)
    if user is None:
        await auth_service.record_failed_login(payload.email, redis)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )

    await auth_service.clear_failed_logins(payload.email, redis)
    name = user.display_name
    token = create_session_token(user.id, user.email, name, user.role.value)
    logger.info("Admin %s signed in", user.id)

    return LoginResponse(
        access_token=token,
        expires_in=settings.SESSION_EXPIRE_MINUTES * 60,
        user=SessionUser(id=user.id, email=user.email, name=name, role=user.role),
    )


@router.get("/session", response_model=SessionResponse)
async def session(claims: dict = Depends(get_current_admin)):
    """Return the signed-in admin, with ``id`` and ``role`` taken from the token."""
    expires = datetime.fromtimestamp(claims["exp"], tz=timezone.utc)
    return SessionResponse(
        user=SessionUser(
            id=claims["sub"],
            email=claims.get("email", ""),
            name=claims.get("name"),
            role=claims["role"],
        ),
        expires=expires.isoformat(),
    )
