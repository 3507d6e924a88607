"""
Service booking endpoints for the admin console.

Storage box reservations are managed through ``/api/box-rentals``;
bookings made against storage-like services are left out of this list.
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ecodeli_admin.core.errors import NotFoundError
from ecodeli_admin.database import get_db
from ecodeli_admin.models import Booking, Service, User
from ecodeli_admin.schemas.service import BookingCreateRequest, BookingResponse

logger = logging.getLogger(__name__)

router = APIRouter()

STORAGE_KEYWORDS = ("box", "boîte", "stockage")


def is_storage_service(name: str | None) -> bool:
    lowered = (name or "").lower()
    return any(word in lowered for word in STORAGE_KEYWORDS)


def _with_parties(query):
    return query.options(
        selectinload(Booking.service),
        selectinload(Booking.customer),
        selectinload(Booking.provider),
    )


@router.get("", response_model=list[BookingResponse])
async def list_bookings(db: AsyncSession = Depends(get_db)):
    """List service bookings newest first with the service, customer and provider."""
    result = await db.execute(_with_parties(select(Booking)).order_by(Booking.created_at.desc()))
    return [
        BookingResponse.model_validate(b)
        for b in result.scalars().all()
        if not is_storage_service(b.service.name)
    ]


@router.post("", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
async def create_booking(payload: BookingCreateRequest, db: AsyncSession = Depends(get_db)):
    """
    Book a service for a customer.

    The provider and total price default to the service's own.
    """
    service = await db.get(Service, payload.service_id)
    if service is None:
        raise NotFoundError("Service not found")
    if await db.get(User, payload.customer_id) is None:
        raise NotFoundError("Customer not found")
    if payload.provider_id is not None and await db.get(User, payload.provider_id) is None:
        raise NotFoundError("Provider not found")

    data = payload.model_dump()
    data["provider_id"] = payload.provider_id or service.provider_id
    if payload.total_price is None:
        data["total_price"] = service.price

    booking = Booking(**data)
    db.add(booking)
    await db.flush()
    await db.refresh(booking, attribute_names=["service", "customer", "provider"])

    logger.info("Booking %s created: service %s for customer %s",
                booking.id, service.id, booking.customer_id)
    return BookingResponse.model_validate(booking)
