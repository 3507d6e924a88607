"""
Reusable FastAPI dependencies for authentication and authorization.

Dependencies:
  - get_current_admin     — admin session from the Bearer token (401/403)
  - get_customer_claims   — decoded public customer token (401)
"""

from fastapi import Header, HTTPException, status

from ecodeli_admin.core.security import (
    bearer_token,
    decode_customer_token,
    decode_session_token,
)
from ecodeli_admin.models.user import Role


async def get_current_admin(
    authorization: str | None = Header(None, description="Bearer <session_token>"),
) -> dict:
    """
    Verify the admin session token and return its claims.

    Raises 401 if the token is missing, malformed or expired, and 403 if
    the session does not belong to an ADMIN.
    """
    payload = decode_session_token(bearer_token(authorization))
    if payload.get("role") != Role.ADMIN.value:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return payload


async def get_customer_claims(
    authorization: str | None = Header(None, description="Bearer <customer_token>"),
) -> dict:
    """Verify a public customer token and return its claims."""
    return decode_customer_token(bearer_token(authorization))
