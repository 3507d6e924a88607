"""
User management endpoints — list, create, update and delete users.

Deletion is refused while the user still owns packages, rides,
payments, contracts or bookings, unless ``force=true`` is passed, in
which case those records are removed first in the same transaction.
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ecodeli_admin.core.errors import NotFoundError
from ecodeli_admin.core.security import hash_password
from ecodeli_admin.database import get_db
from ecodeli_admin.models.user import Role, User
from ecodeli_admin.schemas.common import MessageResponse
from ecodeli_admin.schemas.user import UserCreateRequest, UserResponse, UserUpdateRequest
from ecodeli_admin.services import user_service

logger = logging.getLogger(__name__)

router = APIRouter()


async def _email_taken(db: AsyncSession, email: str, exclude_id: UUID | None = None) -> bool:
    query = select(User.id).where(func.lower(User.email) == email.lower())
    if exclude_id is not None:
        query = query.where(User.id != exclude_id)
    result = await db.execute(query)
    return result.first() is not None


@router.get("", response_model=list[UserResponse])
async def list_users(
    role: Role | None = None,
    search: str | None = None,
    verified: bool | None = None,
    limit: int = Query(100, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
):
    """List users, newest first, filtered by role, verification and a free-text search."""
    query = select(User)
    if role is not None:
        query = query.where(User.role == role)
    if verified is not None:
        query = query.where(User.is_verified == verified)
    if search:
        pattern = f"%{search}%"
        query = query.where(
            or_(
                User.name.ilike(pattern),
                User.email.ilike(pattern),
                User.first_name.ilike(pattern),
                User.last_name.ilike(pattern),
                User.company_name.ilike(pattern),
            )
        )
    query = query.order_by(User.created_at.desc()).limit(limit)

    result = await db.execute(query)
    return [UserResponse.model_validate(u) for u in result.scalars().all()]


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(payload: UserCreateRequest, db: AsyncSession = Depends(get_db)):
    """Create a user; the email must be unused."""
    if await _email_taken(db, payload.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="A user with this email already exists",
        )

    data = payload.model_dump(exclude={"password"})
    user = User(**data)
    user.name = f"{payload.first_name} {payload.last_name}"
    if payload.password:
        user.password = hash_password(payload.password)

    db.add(user)
    await db.flush()
    logger.info("User %s created with role %s", user.id, user.role.value)
    return UserResponse.model_validate(user)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: UUID,
    payload: UserUpdateRequest,
    db: AsyncSession = Depends(get_db),
):
    """Apply a partial update; only the fields present in the body change."""
    user = await db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")

    changes = payload.model_dump(exclude_unset=True)
    if changes.get("email") and await _email_taken(db, changes["email"], exclude_id=user_id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="A user with this email already exists",
        )

    for field, value in changes.items():
        setattr(user, field, value)
    await db.flush()

    logger.info("User %s updated (%s)", user_id, ", ".join(sorted(changes)) or "no changes")
    return UserResponse.model_validate(user)


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: UUID,
    force: bool = False,
    db: AsyncSession = Depends(get_db),
):
    """
    Delete a user.

    Without ``force`` the request fails with 400 and the dependent
    record counts when the user still has business records.
    """
    await user_service.delete_user(db, user_id, force=force)
    if force:
        logger.info("User %s force-deleted", user_id)
        return MessageResponse(message="User and all related records deleted")
    return MessageResponse(message="User deleted")
