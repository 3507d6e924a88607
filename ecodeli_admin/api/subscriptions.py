"""
Subscription listing with revenue statistics.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ecodeli_admin.database import get_db
from ecodeli_admin.models import Subscription
from ecodeli_admin.schemas.merchant import SubscriptionListResponse, SubscriptionResponse
from ecodeli_admin.services.stats import build_subscription_stats

router = APIRouter()


@router.get("", response_model=SubscriptionListResponse)
async def list_subscriptions(db: AsyncSession = Depends(get_db)):
    """All subscriptions, newest first, with counts and revenue."""
    result = await db.execute(
        select(Subscription)
        .options(selectinload(Subscription.user))
        .order_by(Subscription.created_at.desc())
    )
    subscriptions = result.scalars().all()

    return SubscriptionListResponse(
        subscriptions=[SubscriptionResponse.model_validate(s) for s in subscriptions],
        stats=build_subscription_stats(subscriptions, datetime.now(timezone.utc)),
    )
