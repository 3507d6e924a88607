"""
Aggregate statistics for the admin dashboard and the customer area.

Every function here is pure: callers fetch ORM rows, these functions
fold them into plain JSON-ready dicts. Monetary sums are floats.
"""

import calendar
from collections import Counter
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Iterable

from ecodeli_admin.models.booking import BookingStatus
from ecodeli_admin.models.commerce import SubscriptionStatus
from ecodeli_admin.models.match import MatchStatus
from ecodeli_admin.models.package import PackageStatus
from ecodeli_admin.models.payment import PaymentStatus

DEFAULT_RANGE = "30d"

RANGE_DAYS = {
    "7d": 7,
    "30d": 30,
    "90d": 90,
}


# ---------------------------------------------------------------------------
# Date helpers
# ---------------------------------------------------------------------------


def _aware(value: datetime | None) -> datetime | None:
    """Treat naive timestamps as UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _shift_months(value: datetime, months: int) -> datetime:
    """Move *value* by whole calendar months, clamping the day."""
    index = value.year * 12 + value.month - 1 + months
    year, month = divmod(index, 12)
    month += 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def period_start(range_: str, now: datetime) -> datetime:
    """Start of the reporting window; unknown ranges fall back to 30 days."""
    if range_ == "1y":
        return _shift_months(now, -12)
    return now - timedelta(days=RANGE_DAYS.get(range_, RANGE_DAYS[DEFAULT_RANGE]))


def _since(rows: Iterable, start: datetime, attr: str = "created_at") -> list:
    return [
        r for r in rows
        if getattr(r, attr) is not None and _aware(getattr(r, attr)) >= start
    ]


def _money(values: Iterable[Decimal | float | None]) -> float:
    return float(sum((Decimal(str(v)) for v in values if v is not None), Decimal("0")))


def _value(enum_or_str) -> str:
    return getattr(enum_or_str, "value", enum_or_str)


def _pct_change(current: float, previous: float) -> float:
    if previous > 0:
        return (current - previous) / previous * 100
    return 0.0


# ---------------------------------------------------------------------------
# Admin analytics
# ---------------------------------------------------------------------------


def build_analytics(
    range_: str,
    now: datetime,
    users,
    services,
    bookings,
    packages,
    storage_boxes,
    box_rentals,
    payments,
) -> dict:
    """
    Build the analytics dashboard payload.

    Only COMPLETED payments count as revenue and only active box rentals
    count as storage revenue. "thisMonth" figures cover the selected
    range; "lastMonth" covers the month before now, up to the range start.
    """
    now = _aware(now)
    start = period_start(range_, now)
    last_month_start = _shift_months(now, -1)

    payments = [p for p in payments if p.status == PaymentStatus.COMPLETED]
    box_rentals = [r for r in box_rentals if r.is_active]

    # Users
    by_role = Counter(_value(u.role) for u in users)

    # Services
    by_category = Counter(s.category for s in services)
    average_rating = (
        sum(s.rating or 0 for s in services) / len(services) if services else 0
    )

    # Bookings
    booking_status = Counter(b.status for b in bookings)
    booking_revenue = _money(
        b.total_price for b in bookings if b.status == BookingStatus.COMPLETED
    )

    # Packages
    package_status = Counter(p.status for p in packages)

    # Storage
    occupied = sum(1 for box in storage_boxes if box.is_occupied)
    storage_revenue = _money(r.total_cost for r in box_rentals)

    # Revenue
    total_revenue = _money(p.amount for p in payments)
    revenue_this_period = _money(p.amount for p in _since(payments, start))
    revenue_last_month = _money(
        p.amount for p in payments
        if last_month_start <= _aware(p.created_at) < start
    )

    return {
        "users": {
            "total": len(users),
            "byRole": dict(by_role),
            "newThisMonth": len(_since(users, start)),
            "growthRate": 0,
        },
        "services": {
            "total": len(services),
            "active": sum(1 for s in services if s.is_active),
            "byCategory": dict(by_category),
            "averageRating": average_rating,
        },
        "bookings": {
            "total": len(bookings),
            "completed": booking_status[BookingStatus.COMPLETED],
            "pending": booking_status[BookingStatus.PENDING],
            "cancelled": booking_status[BookingStatus.CANCELLED],
            "thisMonth": len(_since(bookings, start)),
            "revenue": booking_revenue,
        },
        "packages": {
            "total": len(packages),
            "delivered": package_status[PackageStatus.DELIVERED],
            "inTransit": package_status[PackageStatus.IN_TRANSIT],
            "pending": package_status[PackageStatus.PENDING],
        },
        "storageBoxes": {
            "total": len(storage_boxes),
            "occupied": occupied,
            "revenue": storage_revenue,
            "occupancyRate": occupied / len(storage_boxes) * 100 if storage_boxes else 0,
        },
        "revenue": {
            "total": total_revenue,
            "thisMonth": revenue_this_period,
            "lastMonth": revenue_last_month,
            "growth": _pct_change(revenue_this_period, revenue_last_month),
            "bySource": {
                "bookings": booking_revenue,
                "storage": storage_revenue,
                "packages": _money(p.amount for p in payments if p.match_id is not None),
            },
        },
    }


# ---------------------------------------------------------------------------
# Subscriptions
# ---------------------------------------------------------------------------


def build_subscription_stats(subscriptions, now: datetime) -> dict:
    """Counts by status, revenue from ACTIVE plans, and this month's sign-ups."""
    now = _aware(now)
    month_start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)

    by_status = Counter(s.status for s in subscriptions)
    active = [s for s in subscriptions if s.status == SubscriptionStatus.ACTIVE]
    total_revenue = _money(s.amount for s in active)

    return {
        "total": len(subscriptions),
        "active": len(active),
        "pending": by_status[SubscriptionStatus.PENDING],
        "canceled": by_status[SubscriptionStatus.CANCELED],
        "totalRevenue": total_revenue,
        "monthlyNew": len(_since(subscriptions, month_start)),
        "averageRevenue": total_revenue / len(active) if active else 0,
    }


# ---------------------------------------------------------------------------
# Customer area
# ---------------------------------------------------------------------------

_ACTIVE_MATCH_STATUSES = {MatchStatus.ACCEPTED_BY_CARRIER, MatchStatus.CONFIRMED}
_ACTIVE_BOOKING_STATUSES = {BookingStatus.CONFIRMED, BookingStatus.IN_PROGRESS}


def _package_is_active(package) -> bool:
    if package.status == PackageStatus.DELIVERED:
        return False
    if package.status == PackageStatus.IN_TRANSIT:
        return True
    return any(m.status in _ACTIVE_MATCH_STATUSES for m in package.matches)


def _package_is_pending(package) -> bool:
    return all(m.status == MatchStatus.PROPOSED for m in package.matches)


def build_customer_statistics(packages, bookings, payments, now: datetime) -> dict:
    """
    Summarise a customer's deliveries, service bookings and spending.

    *packages* must have their ``matches`` loaded. Spending only counts
    COMPLETED payments; "today" and "month" start at UTC midnight of
    *now* and the first of its month.
    """
    now = _aware(now)
    today = now.replace(hour=0, minute=0, second=0, microsecond=0)
    month_start = today.replace(day=1)

    completed = [p for p in payments if p.status == PaymentStatus.COMPLETED]

    return {
        "packages": {
            "total": len(packages),
            "active": sum(1 for p in packages if _package_is_active(p)),
            "delivered": sum(1 for p in packages if p.status == PackageStatus.DELIVERED),
            "pending": sum(1 for p in packages if _package_is_pending(p)),
        },
        "services": {
            "total": len(bookings),
            "active": sum(1 for b in bookings if b.status in _ACTIVE_BOOKING_STATUSES),
            "completed": sum(1 for b in bookings if b.status == BookingStatus.COMPLETED),
        },
        "spending": {
            "today": _money(p.amount for p in _since(completed, today)),
            "month": _money(p.amount for p in _since(completed, month_start)),
            "total": _money(p.amount for p in completed),
        },
    }
