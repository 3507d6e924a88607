"""
Pydantic schemas for packages, rides, matches and payments.
"""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import Field

from ecodeli_admin.models.match import MatchStatus
from ecodeli_admin.models.package import PackageStatus, RideStatus
from ecodeli_admin.models.payment import PaymentStatus
from ecodeli_admin.schemas.common import CamelModel, UserSummary


# ---------------------------------------------------------------------------
# Matches
# ---------------------------------------------------------------------------


class MatchUpdateRequest(CamelModel):
    """Admin update of a match; either field may be omitted."""
    id: UUID
    status: MatchStatus | None = None
    price: Decimal | None = Field(None, ge=0)


class MatchSummary(CamelModel):
    id: UUID
    package_id: UUID
    ride_id: UUID
    status: MatchStatus
    price: Decimal | None
    created_at: datetime


# ---------------------------------------------------------------------------
# Packages and rides
# ---------------------------------------------------------------------------


class PackageSummary(CamelModel):
    id: UUID
    description: str
    tracking_number: str | None
    status: PackageStatus
    sender_address: str | None
    recipient_address: str | None
    weight: float | None
    price: Decimal | None
    user: UserSummary | None = None


class RideSummary(CamelModel):
    id: UUID
    origin: str
    destination: str
    departure_time: datetime
    status: RideStatus
    price_per_kg: Decimal | None
    user: UserSummary | None = None


class MatchResponse(MatchSummary):
    proposed_by_id: UUID | None
    updated_at: datetime | None
    package: PackageSummary
    ride: RideSummary


class PackageResponse(CamelModel):
    id: UUID
    user_id: UUID
    description: str
    tracking_number: str | None
    sender_name: str | None
    sender_address: str | None
    recipient_name: str | None
    recipient_address: str | None
    weight: float | None
    dimensions: str | None
    size: str | None
    fragile: bool
    urgent: bool
    price: Decimal | None
    status: PackageStatus
    created_at: datetime
    user: UserSummary
    matches: list[MatchSummary] = []


class RideCreateRequest(CamelModel):
    """A ride offered by a carrier; the admin creates it on their behalf."""
    user_id: UUID
    origin: str = Field(..., min_length=1, max_length=255)
    destination: str = Field(..., min_length=1, max_length=255)
    departure_time: datetime
    arrival_time: datetime | None = None
    available_space: str = Field("MEDIUM", max_length=50)
    price_per_kg: Decimal = Field(..., gt=0)
    vehicle_type: str | None = Field(None, max_length=50)
    max_weight: float | None = Field(None, gt=0)
    description: str | None = None
    status: RideStatus = RideStatus.AVAILABLE


class RideUpdateRequest(CamelModel):
    id: UUID
    status: RideStatus


class RideResponse(CamelModel):
    id: UUID
    user_id: UUID
    origin: str
    destination: str
    departure_time: datetime
    arrival_time: datetime | None = None
    available_space: str | None
    price_per_kg: Decimal | None
    vehicle_type: str | None = None
    max_weight: float | None = None
    description: str | None = None
    status: RideStatus
    created_at: datetime
    user: UserSummary
    matches: list[MatchSummary] = []


# ---------------------------------------------------------------------------
# Payments
# ---------------------------------------------------------------------------


class PaymentResponse(CamelModel):
    id: UUID
    user_id: UUID
    match_id: UUID | None
    amount: Decimal
    currency: str
    status: PaymentStatus
    created_at: datetime
    user: UserSummary | None = None
