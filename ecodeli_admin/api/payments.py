"""
Payment listing for the admin console.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ecodeli_admin.database import get_db
from ecodeli_admin.models import Payment, PaymentStatus
from ecodeli_admin.schemas.delivery import PaymentResponse

router = APIRouter()


@router.get("", response_model=list[PaymentResponse])
async def list_payments(
    status_filter: PaymentStatus | None = Query(None, alias="status"),
    user_id: UUID | None = Query(None, alias="userId"),
    limit: int = Query(200, ge=1, le=1000),
    db: AsyncSession = Depends(get_db),
):
    """List payments newest first with the paying user."""
    query = select(Payment).options(selectinload(Payment.user))
    if status_filter is not None:
        query = query.where(Payment.status == status_filter)
    if user_id is not None:
        query = query.where(Payment.user_id == user_id)
    query = query.order_by(Payment.created_at.desc()).limit(limit)

    payments = (await db.execute(query)).scalars().all()
    return [PaymentResponse.model_validate(p) for p in payments]
