"""
Platform analytics for the admin dashboard.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ecodeli_admin.database import get_db
from ecodeli_admin.models import (
    Booking,
    BoxRental,
    Package,
    Payment,
    PaymentStatus,
    Service,
    StorageBox,
    User,
)
from ecodeli_admin.services.stats import DEFAULT_RANGE, build_analytics

router = APIRouter()


async def _all(db: AsyncSession, query) -> list:
    return list((await db.execute(query)).scalars().all())


@router.get("")
async def get_analytics(
    range_: str = Query(DEFAULT_RANGE, alias="range"),
    db: AsyncSession = Depends(get_db),
):
    """
    Users, services, bookings, packages, storage and revenue figures.

    ``range`` is one of 7d, 30d, 90d or 1y; anything else means 30d.
    """
    return build_analytics(
        range_,
        datetime.now(timezone.utc),
        users=await _all(db, select(User)),
        services=await _all(db, select(Service)),
        bookings=await _all(db, select(Booking)),
        packages=await _all(db, select(Package)),
        storage_boxes=await _all(db, select(StorageBox)),
        box_rentals=await _all(db, select(BoxRental).where(BoxRental.is_active.is_(True))),
        payments=await _all(db, select(Payment).where(Payment.status == PaymentStatus.COMPLETED)),
    )
