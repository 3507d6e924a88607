"""
Dashboard endpoint: one snapshot of the main collections for the admin home page.
"""

import logging
import time

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ecodeli_admin.database import get_db
from ecodeli_admin.models import (
    Match,
    Message,
    Notification,
    Package,
    Payment,
    Ride,
    User,
)
from ecodeli_admin.schemas.dashboard import DashboardResponse

logger = logging.getLogger(__name__)

router = APIRouter()


async def _fetch(db: AsyncSession, query, limit: int) -> list:
    result = await db.execute(query.limit(limit))
    return list(result.scalars().all())


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    limit: int = Query(100, ge=1, le=1000),
    db: AsyncSession = Depends(get_db),
):
    """
    Return the newest users, packages, rides, matches, payments, messages
    and notifications, each capped at ``limit`` rows.
    """
    started = time.perf_counter()

    users = await _fetch(db, select(User).order_by(User.created_at.desc()), limit)
    packages = await _fetch(
        db,
        select(Package)
        .options(selectinload(Package.user), selectinload(Package.matches))
        .order_by(Package.created_at.desc()),
        limit,
    )
    rides = await _fetch(
        db,
        select(Ride)
        .options(selectinload(Ride.user), selectinload(Ride.matches))
        .order_by(Ride.created_at.desc()),
        limit,
    )
    matches = await _fetch(
        db,
        select(Match)
        .options(
            selectinload(Match.package).selectinload(Package.user),
            selectinload(Match.ride).selectinload(Ride.user),
        )
        .order_by(Match.created_at.desc()),
        limit,
    )
    payments = await _fetch(
        db,
        select(Payment).options(selectinload(Payment.user)).order_by(Payment.created_at.desc()),
        limit,
    )
    messages = await _fetch(
        db,
        select(Message)
        .options(selectinload(Message.sender), selectinload(Message.receiver))
        .order_by(Message.created_at.desc()),
        limit,
    )
    notifications = await _fetch(
        db,
        select(Notification)
        .options(selectinload(Notification.user))
        .order_by(Notification.created_at.desc()),
        limit,
    )

    logger.info(
        "Dashboard snapshot: %d users, %d packages, %d rides, %d matches, "
        "%d payments, %d messages, %d notifications in %.1f ms",
        len(users), len(packages), len(rides), len(matches),
        len(payments), len(messages), len(notifications),
        (time.perf_counter() - started) * 1000,
    )

    return DashboardResponse.model_validate({
        "users": users,
        "packages": packages,
        "rides": rides,
        "matches": matches,
        "payments": payments,
        "messages": messages,
        "notifications": notifications,
    })
