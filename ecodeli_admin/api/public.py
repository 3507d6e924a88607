"""
Public customer API — customer login and the customer area data.

Customers authenticate with their email and password and receive a
24-hour JWT signed with JWT_SECRET. That token unlocks
``GET /customer/data``, the aggregated view of their deliveries,
service bookings, payments and notifications.
"""

import logging
import uuid
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ecodeli_admin.api.deps import get_customer_claims
from ecodeli_admin.config import settings
from ecodeli_admin.core.errors import NotFoundError
from ecodeli_admin.core.security import create_customer_token, verify_password
from ecodeli_admin.database import get_db
from ecodeli_admin.models import (
    Booking,
    Match,
    Notification,
    Package,
    Payment,
    Ride,
    Role,
    Service,
    User,
)
from ecodeli_admin.schemas.auth import CustomerAuthRequest, CustomerAuthResponse, CustomerProfile
from ecodeli_admin.schemas.customer import (
    Contact,
    CustomerData,
    CustomerDataResponse,
    CustomerNotification,
    CustomerPayment,
    Delivery,
    DeliveryMatch,
    MatchPayment,
    ServiceBooking,
)
from ecodeli_admin.services.stats import build_customer_statistics

logger = logging.getLogger(__name__)

router = APIRouter()

NOTIFICATION_LIMIT = 20


def _require_customer(user: User | None) -> User:
    if user is None:
        raise NotFoundError("User not found")
    if user.role != Role.CUSTOMER:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access restricted to customers",
        )
    return user


# ---------------------------------------------------------------------------
# POST /auth
# ---------------------------------------------------------------------------


@router.post("/auth", response_model=CustomerAuthResponse)
async def customer_login(payload: CustomerAuthRequest, db: AsyncSession = Depends(get_db)):
    """Sign a customer in and return a customer token."""
    if not payload.email or not payload.password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email and password are required",
        )

    result = await db.execute(
        select(User).where(func.lower(User.email) == payload.email.strip().lower())
    )
    user = _require_customer(result.scalar_one_or_none())

    if not user.password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No password set for this account",
        )
    if not verify_password(payload.password, user.password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect password",
        )

    token = create_customer_token(
        user.id, user.email, user.role.value, user.user_type.value if user.user_type else None,
    )
    logger.info("Customer %s signed in", user.id)
    return CustomerAuthResponse(
        user=CustomerProfile.model_validate(user),
        token=token,
        expires_in=settings.CUSTOMER_TOKEN_EXPIRE_HOURS * 3600,
    )


# ---------------------------------------------------------------------------
# GET /customer/data
# ---------------------------------------------------------------------------


def _contact(user: User | None) -> Contact | None:
    return Contact.model_validate(user) if user is not None else None


def _delivery(package: Package) -> Delivery:
    matches = []
    for match in package.matches:
        latest = max(match.payments, key=lambda p: p.created_at, default=None)
        matches.append(DeliveryMatch(
            id=match.id,
            status=match.status,
            proposed_price=match.price,
            accepted_at=match.updated_at,
            carrier=_contact(match.ride.user if match.ride else None),
            payment=MatchPayment.model_validate(latest) if latest else None,
        ))
    return Delivery(
        id=package.id,
        title=package.description,
        description=package.description,
        status=package.status,
        from_address=package.sender_address,
        to_address=package.recipient_address,
        price=package.price,
        weight=package.weight,
        dimensions=package.dimensions,
        size_label=package.size,
        is_fragile=package.fragile,
        is_urgent=package.urgent,
        created_at=package.created_at,
        updated_at=package.updated_at,
        matches=matches,
    )


def _service_booking(booking: Booking) -> ServiceBooking:
    return ServiceBooking(
        id=booking.id,
        service_name=booking.service.name,
        service_category=booking.service.category,
        status=booking.status,
        scheduled_at=booking.scheduled_at,
        total_price=booking.total_price,
        address=booking.address,
        notes=booking.notes,
        rating=booking.rating,
        review=booking.review,
        provider=_contact(booking.service.provider),
        created_at=booking.created_at,
        updated_at=booking.updated_at,
    )


def _payment(payment: Payment) -> CustomerPayment:
    package = payment.match.package if payment.match else None
    return CustomerPayment(
        id=payment.id,
        amount=payment.amount,
        status=payment.status,
        type="delivery" if package else "service",
        service_name=f"Delivery - {package.description}" if package else "Service",
        created_at=payment.created_at,
    )


@router.get("/customer/data", response_model=CustomerDataResponse)
async def customer_data(
    claims: dict = Depends(get_customer_claims),
    db: AsyncSession = Depends(get_db),
):
    """Everything the customer area shows, plus summary statistics."""
    try:
        user_id = uuid.UUID(str(claims["userId"]))
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
        )
    user = _require_customer(await db.get(User, user_id))

    packages = (await db.execute(
        select(Package)
        .where(Package.user_id == user.id)
        .options(
            selectinload(Package.matches).selectinload(Match.ride).selectinload(Ride.user),
            selectinload(Package.matches).selectinload(Match.payments),
        )
        .order_by(Package.created_at.desc())
    )).scalars().all()

    bookings = (await db.execute(
        select(Booking)
        .where(Booking.customer_id == user.id)
        .options(selectinload(Booking.service).selectinload(Service.provider))
        .order_by(Booking.created_at.desc())
    )).scalars().all()

    payments = (await db.execute(
        select(Payment)
        .where(Payment.user_id == user.id)
        .options(selectinload(Payment.match).selectinload(Match.package))
        .order_by(Payment.created_at.desc())
    )).scalars().all()

    notifications = (await db.execute(
        select(Notification)
        .where(Notification.user_id == user.id)
        .order_by(Notification.created_at.desc())
        .limit(NOTIFICATION_LIMIT)
    )).scalars().all()

    now = datetime.now(timezone.utc)
    return CustomerDataResponse(
        data=CustomerData(
            user=CustomerProfile.model_validate(user),
            deliveries=[_delivery(p) for p in packages],
            services=[_service_booking(b) for b in bookings],
            payments=[_payment(p) for p in payments],
            notifications=[CustomerNotification.model_validate(n) for n in notifications],
            statistics=build_customer_statistics(packages, bookings, payments, now),
        ),
        timestamp=now,
    )
