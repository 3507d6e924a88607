"""
User deletion with cascading cleanup.

A user with packages, rides, payments, contracts or bookings can only
be removed with ``force=True``. Deletion runs as ordered bulk deletes
inside the caller's session, so the request transaction either removes
the user and every dependent row or nothing at all.
"""

import logging
import uuid

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ecodeli_admin.core.errors import ConflictError, NotFoundError
from ecodeli_admin.models import (
    Account,
    AuthSession,
    Booking,
    BoxRental,
    Contract,
    Document,
    Match,
    Message,
    Notification,
    Package,
    Payment,
    Product,
    Ride,
    Service,
    Subscription,
    User,
)
from ecodeli_admin.schemas.user import DeleteBlockedDetails

logger = logging.getLogger(__name__)

BLOCKED_MESSAGE = (
    "User has related records (packages, rides, payments, contracts or bookings). "
    "Delete or transfer them first, or use force delete."
)


async def _count(db: AsyncSession, model, *criteria) -> int:
    result = await db.execute(select(func.count()).select_from(model).where(*criteria))
    return result.scalar_one()


async def count_blocking_dependents(db: AsyncSession, user_id: uuid.UUID) -> DeleteBlockedDetails:
    """Count the records that prevent a plain (non-forced) delete."""
    return DeleteBlockedDetails(
        packages=await _count(db, Package, Package.user_id == user_id),
        rides=await _count(db, Ride, Ride.user_id == user_id),
        payments=await _count(db, Payment, Payment.user_id == user_id),
        contracts=await _count(
            db, Contract, or_(Contract.merchant_id == user_id, Contract.carrier_id == user_id),
        ),
        bookings=await _count(
            db, Booking, or_(Booking.provider_id == user_id, Booking.customer_id == user_id),
        ),
    )


async def _delete_business_records(db: AsyncSession, user_id: uuid.UUID) -> None:
    package_ids = select(Package.id).where(Package.user_id == user_id)
    ride_ids = select(Ride.id).where(Ride.user_id == user_id)
    match_filter = or_(Match.package_id.in_(package_ids), Match.ride_id.in_(ride_ids))
    match_ids = select(Match.id).where(match_filter)

    await db.execute(
        delete(Payment).where(or_(Payment.user_id == user_id, Payment.match_id.in_(match_ids)))
    )
    await db.execute(delete(Match).where(match_filter))
    await db.execute(delete(Package).where(Package.user_id == user_id))
    await db.execute(delete(Ride).where(Ride.user_id == user_id))
    await db.execute(
        delete(Contract).where(
            or_(Contract.merchant_id == user_id, Contract.carrier_id == user_id)
        )
    )
    await db.execute(
        delete(Booking).where(
            or_(Booking.provider_id == user_id, Booking.customer_id == user_id)
        )
    )


async def _delete_owned_records(db: AsyncSession, user_id: uuid.UUID) -> None:
    await db.execute(delete(Notification).where(Notification.user_id == user_id))
    await db.execute(
        delete(Message).where(or_(Message.sender_id == user_id, Message.receiver_id == user_id))
    )
    # Rows only; generated files stay on disk.
    await db.execute(delete(Document).where(Document.user_id == user_id))
    await db.execute(delete(Service).where(Service.provider_id == user_id))
    await db.execute(delete(BoxRental).where(BoxRental.user_id == user_id))
    await db.execute(delete(Product).where(Product.merchant_id == user_id))
    await db.execute(delete(Subscription).where(Subscription.user_id == user_id))
    await db.execute(delete(Account).where(Account.user_id == user_id))
    await db.execute(delete(AuthSession).where(AuthSession.user_id == user_id))


async def delete_user(db: AsyncSession, user_id: uuid.UUID, force: bool = False) -> None:
    """
    Delete a user and the rows that belong to them.

    Raises NotFoundError if the user does not exist and ConflictError
    (carrying the dependent counts) if blocking records exist and
    *force* is False. Nothing is written in either case.
    """
    exists = await db.execute(select(User.id).where(User.id == user_id))
    if exists.scalar_one_or_none() is None:
        raise NotFoundError("User not found")

    counts = await count_blocking_dependents(db, user_id)
    if counts.has_any and not force:
        raise ConflictError(BLOCKED_MESSAGE, details=counts.model_dump())

    if force:
        await _delete_business_records(db, user_id)
    await _delete_owned_records(db, user_id)
    await db.execute(delete(User).where(User.id == user_id))
    await db.flush()

    logger.info(
        "User %s deleted (force=%s, packages=%d, rides=%d, payments=%d, contracts=%d, bookings=%d)",
        user_id, force, counts.packages, counts.rides, counts.payments,
        counts.contracts, counts.bookings,
    )
