"""
Ride endpoints — list, create, update and delete carrier rides.

A ride whose matches have been accepted by either side, or confirmed,
cannot be deleted. Otherwise its matches and the payments on them are
removed together with the ride.
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ecodeli_admin.core.errors import NotFoundError
from ecodeli_admin.database import get_db
from ecodeli_admin.models import Match, Payment, Ride, RideStatus, User
from ecodeli_admin.models.match import ENGAGED_STATUSES
from ecodeli_admin.schemas.common import MessageResponse
from ecodeli_admin.schemas.delivery import RideCreateRequest, RideResponse, RideUpdateRequest

logger = logging.getLogger(__name__)

router = APIRouter()


def _with_carrier(query):
    return query.options(selectinload(Ride.user), selectinload(Ride.matches))


@router.get("", response_model=list[RideResponse])
async def list_rides(
    status_filter: RideStatus | None = Query(None, alias="status"),
    user_id: UUID | None = Query(None, alias="userId"),
    limit: int = Query(200, ge=1, le=1000),
    db: AsyncSession = Depends(get_db),
):
    """List rides by departure time, latest first, with the carrier and matches."""
    query = _with_carrier(select(Ride))
    if status_filter is not None:
        query = query.where(Ride.status == status_filter)
    if user_id is not None:
        query = query.where(Ride.user_id == user_id)
    query = query.order_by(Ride.departure_time.desc()).limit(limit)

    rides = (await db.execute(query)).scalars().all()
    return [RideResponse.model_validate(r) for r in rides]


@router.post("", response_model=RideResponse, status_code=status.HTTP_201_CREATED)
async def create_ride(payload: RideCreateRequest, db: AsyncSession = Depends(get_db)):
    """Create a ride for an existing user."""
    if await db.get(User, payload.user_id) is None:
        raise NotFoundError("User not found")

    ride = Ride(**payload.model_dump())
    db.add(ride)
    await db.flush()
    await db.refresh(ride, attribute_names=["user", "matches"])

    logger.info("Ride %s created for user %s: %s -> %s",
                ride.id, ride.user_id, ride.origin, ride.destination)
    return RideResponse.model_validate(ride)


@router.put("", response_model=RideResponse)
async def update_ride(payload: RideUpdateRequest, db: AsyncSession = Depends(get_db)):
    """Set a ride's status."""
    result = await db.execute(_with_carrier(select(Ride)).where(Ride.id == payload.id))
    ride = result.scalar_one_or_none()
    if ride is None:
        raise NotFoundError("Ride not found")

    previous = ride.status
    ride.status = payload.status
    await db.flush()

    logger.info("Ride %s status %s -> %s", ride.id, previous.value, ride.status.value)
    return RideResponse.model_validate(ride)


@router.delete("", response_model=MessageResponse)
async def delete_ride(
    ride_id: UUID | None = Query(None, alias="id"),
    db: AsyncSession = Depends(get_db),
):
    """Delete a ride with no engaged matches, along with its matches and their payments."""
    if ride_id is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Ride ID is required",
        )

    ride = await db.get(Ride, ride_id)
    if ride is None:
        raise NotFoundError("Ride not found")

    engaged = await db.execute(
        select(func.count())
        .select_from(Match)
        .where(Match.ride_id == ride_id, Match.status.in_(list(ENGAGED_STATUSES)))
    )
    if engaged.scalar_one():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot delete ride with active matches",
        )

    match_ids = select(Match.id).where(Match.ride_id == ride_id)
    await db.execute(delete(Payment).where(Payment.match_id.in_(match_ids)))
    await db.execute(delete(Match).where(Match.ride_id == ride_id))
    await db.delete(ride)
    await db.flush()

    logger.info("Ride %s deleted", ride_id)
    return MessageResponse(message="Ride deleted")
