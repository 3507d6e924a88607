"""
Authentication service: admin credential checks and login throttling.

Failed admin logins are counted per email in Redis. Once the count
reaches LOGIN_MAX_ATTEMPTS the email is locked for LOGIN_LOCK_SECONDS.
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ecodeli_admin.config import settings
from ecodeli_admin.core.security import verify_password
from ecodeli_admin.models.user import Role, User

logger = logging.getLogger(__name__)


def _key(email: str) -> str:
    return email.strip().lower()


# ---------------------------------------------------------------------------
# Login attempt tracking
# ---------------------------------------------------------------------------


async def is_login_locked(email: str, redis) -> bool:
    """Return True if the email is locked out after too many failed attempts."""
    return await redis.get(f"login_lock:{_key(email)}") is not None


async def record_failed_login(email: str, redis) -> int:
    """
    Increment the failed-login counter and lock the email once it
    reaches LOGIN_MAX_ATTEMPTS. Returns the current count.
    """
    key = f"login_attempts:{_key(email)}"
    count = await redis.incr(key)
    if count == 1:
        await redis.expire(key, settings.LOGIN_LOCK_SECONDS)
    if count >= settings.LOGIN_MAX_ATTEMPTS:
        await redis.setex(f"login_lock:{_key(email)}", settings.LOGIN_LOCK_SECONDS, "1")
        logger.warning("Admin login locked for %s after %d failures", _key(email), count)
    return count


async def clear_failed_logins(email: str, redis) -> None:
    await redis.delete(f"login_attempts:{_key(email)}")
    await redis.delete(f"login_lock:{_key(email)}")


# ---------------------------------------------------------------------------
# Credentials
# ---------------------------------------------------------------------------


async def authenticate_admin(db: AsyncSession, email: str, password: str) -> User | None:
    """Return the ADMIN user matching the credentials, or None."""
    result = await db.execute(select(User).where(func.lower(User.email) == _key(email)))
    user = result.scalar_one_or_none()
    if user is None or user.role != Role.ADMIN or not user.password:
        return None
    if not verify_password(password, user.password):
        return None
    return user
