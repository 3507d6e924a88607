"""
Service catalogue endpoints for the admin console.
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ecodeli_admin.core.errors import NotFoundError
from ecodeli_admin.database import get_db
from ecodeli_admin.models import Service, User
from ecodeli_admin.schemas.service import ServiceCreateRequest, ServiceResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=list[ServiceResponse])
async def list_services(db: AsyncSession = Depends(get_db)):
    """List services newest first with their provider and booking statuses."""
    result = await db.execute(
        select(Service)
        .options(selectinload(Service.provider), selectinload(Service.bookings))
        .order_by(Service.created_at.desc())
    )
    return [ServiceResponse.model_validate(s) for s in result.scalars().all()]


@router.post("", response_model=ServiceResponse, status_code=status.HTTP_201_CREATED)
async def create_service(payload: ServiceCreateRequest, db: AsyncSession = Depends(get_db)):
    if await db.get(User, payload.provider_id) is None:
        raise NotFoundError("Provider not found")

    service = Service(**payload.model_dump())
    db.add(service)
    await db.flush()
    await db.refresh(service, attribute_names=["provider", "bookings"])

    logger.info("Service %s (%s) created for provider %s",
                service.id, service.category, service.provider_id)
    return ServiceResponse.model_validate(service)
