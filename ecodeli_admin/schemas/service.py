"""
Pydantic schemas for provider services and customer bookings.
"""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import Field

from ecodeli_admin.models.booking import BookingStatus
from ecodeli_admin.schemas.common import CamelModel, UserSummary


class ServiceCreateRequest(CamelModel):
    provider_id: UUID
    name: str = Field(..., min_length=1, max_length=200)
    category: str = Field(..., min_length=1, max_length=50)
    description: str | None = None
    price: Decimal = Field(Decimal("0"), ge=0)
    is_active: bool = True


class BookingBrief(CamelModel):
    id: UUID
    status: BookingStatus


class ServiceResponse(CamelModel):
    id: UUID
    provider_id: UUID
    name: str
    category: str
    description: str | None = None
    price: Decimal
    rating: float | None
    is_active: bool
    created_at: datetime
    provider: UserSummary | None = None
    bookings: list[BookingBrief] = []


class BookingCreateRequest(CamelModel):
    """The provider defaults to the one offering the service."""
    service_id: UUID
    customer_id: UUID
    provider_id: UUID | None = None
    scheduled_at: datetime
    total_price: Decimal | None = Field(None, ge=0)
    address: str | None = None
    notes: str | None = None
    status: BookingStatus = BookingStatus.PENDING


class ServiceBrief(CamelModel):
    id: UUID
    name: str
    category: str
    price: Decimal


class BookingResponse(CamelModel):
    id: UUID
    service_id: UUID
    provider_id: UUID
    customer_id: UUID
    status: BookingStatus
    scheduled_at: datetime | None
    total_price: Decimal
    address: str | None
    notes: str | None
    rating: int | None
    review: str | None
    created_at: datetime
    service: ServiceBrief
    customer: UserSummary
    provider: UserSummary
