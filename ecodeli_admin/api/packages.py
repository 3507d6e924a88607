"""
Package listing for the admin console.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ecodeli_admin.database import get_db
from ecodeli_admin.models import Package, PackageStatus
from ecodeli_admin.schemas.delivery import PackageResponse

router = APIRouter()


@router.get("", response_model=list[PackageResponse])
async def list_packages(
    search: str | None = None,
    status_filter: PackageStatus | None = Query(None, alias="status"),
    limit: int = Query(200, ge=1, le=1000),
    db: AsyncSession = Depends(get_db),
):
    """List packages newest first with their owner and matches."""
    query = select(Package).options(
        selectinload(Package.user), selectinload(Package.matches),
    )
    if status_filter is not None:
        query = query.where(Package.status == status_filter)
    if search:
        pattern = f"%{search}%"
        query = query.where(
            or_(
                Package.description.ilike(pattern),
                Package.tracking_number.ilike(pattern),
                Package.sender_address.ilike(pattern),
                Package.recipient_address.ilike(pattern),
            )
        )
    query = query.order_by(Package.created_at.desc()).limit(limit)

    packages = (await db.execute(query)).scalars().all()
    return [PackageResponse.model_validate(p) for p in packages]
