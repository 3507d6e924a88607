"""
Storage box endpoints for the admin console.

Listings embed only the active rental of each box.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ecodeli_admin.database import get_db
from ecodeli_admin.models import BoxRental, StorageBox
from ecodeli_admin.schemas.storage import StorageBoxCreateRequest, StorageBoxResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=list[StorageBoxResponse])
async def list_storage_boxes(db: AsyncSession = Depends(get_db)):
    result = await db.execute(
        select(StorageBox)
        .options(
            selectinload(StorageBox.rentals.and_(BoxRental.is_active.is_(True)))
            .selectinload(BoxRental.user)
        )
        .order_by(StorageBox.code)
    )
    return [StorageBoxResponse.model_validate(b) for b in result.scalars().all()]


@router.post("", response_model=StorageBoxResponse, status_code=status.HTTP_201_CREATED)
async def create_storage_box(payload: StorageBoxCreateRequest, db: AsyncSession = Depends(get_db)):
    existing = await db.execute(select(StorageBox.id).where(StorageBox.code == payload.code))
    if existing.scalar_one_or_none() is not None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="A storage box with this code already exists",
        )

    box = StorageBox(**payload.model_dump())
    db.add(box)
    await db.flush()
    await db.refresh(box, attribute_names=["rentals"])

    logger.info("Storage box %s created at %s", box.code, box.location)
    return StorageBoxResponse.model_validate(box)
