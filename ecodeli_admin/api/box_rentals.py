"""
Storage box rental endpoints for the admin console.

An active rental marks its box occupied; a box holds one active
rental at a time.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ecodeli_admin.core.errors import NotFoundError
from ecodeli_admin.database import get_db
from ecodeli_admin.models import BoxRental, StorageBox, User
from ecodeli_admin.schemas.storage import BoxRentalCreateRequest, BoxRentalResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=list[BoxRentalResponse])
async def list_box_rentals(db: AsyncSession = Depends(get_db)):
    """List rentals, most recent start first, with the box and the renter."""
    result = await db.execute(
        select(BoxRental)
        .options(selectinload(BoxRental.box), selectinload(BoxRental.user))
        .order_by(BoxRental.start_date.desc())
    )
    return [BoxRentalResponse.model_validate(r) for r in result.scalars().all()]


@router.post("", response_model=BoxRentalResponse, status_code=status.HTTP_201_CREATED)
async def create_box_rental(payload: BoxRentalCreateRequest, db: AsyncSession = Depends(get_db)):
    box = await db.get(StorageBox, payload.box_id)
    if box is None:
        raise NotFoundError("Storage box not found")
    if await db.get(User, payload.user_id) is None:
        raise NotFoundError("User not found")

    if payload.is_active:
        if box.is_occupied:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Storage box is already occupied",
            )
        box.is_occupied = True

    rental = BoxRental(**payload.model_dump())
    db.add(rental)
    await db.flush()
    await db.refresh(rental, attribute_names=["box", "user"])

    logger.info("Box %s rented to user %s (active=%s)", box.code, rental.user_id, rental.is_active)
    return BoxRentalResponse.model_validate(rental)
