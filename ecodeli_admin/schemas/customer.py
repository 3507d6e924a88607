"""
Pydantic schemas for the customer area payload of the public API.
"""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from ecodeli_admin.models import BookingStatus, MatchStatus, PackageStatus, PaymentStatus
from ecodeli_admin.schemas.auth import CustomerProfile
from ecodeli_admin.schemas.common import CamelModel


class Contact(CamelModel):
    id: UUID
    first_name: str | None
    last_name: str | None
    email: str
    phone_number: str | None = None


class MatchPayment(CamelModel):
    id: UUID
    amount: Decimal
    status: PaymentStatus
    created_at: datetime


class DeliveryMatch(CamelModel):
    id: UUID
    status: MatchStatus
    proposed_price: Decimal | None
    accepted_at: datetime | None
    carrier: Contact | None
    payment: MatchPayment | None


class Delivery(CamelModel):
    id: UUID
    title: str
    description: str
    status: PackageStatus
    from_address: str | None
    to_address: str | None
    price: Decimal | None
    weight: float | None
    dimensions: str | None
    size_label: str | None
    is_fragile: bool
    is_urgent: bool
    created_at: datetime
    updated_at: datetime | None
    matches: list[DeliveryMatch]


class ServiceBooking(CamelModel):
    id: UUID
    service_name: str
    service_category: str
    status: BookingStatus
    scheduled_at: datetime | None
    total_price: Decimal
    address: str | None
    notes: str | None
    rating: int | None
    review: str | None
    provider: Contact | None
    created_at: datetime
    updated_at: datetime | None


class CustomerPayment(CamelModel):
    id: UUID
    amount: Decimal
    status: PaymentStatus
    type: str
    service_name: str
    created_at: datetime


class CustomerNotification(CamelModel):
    id: UUID
    title: str
    message: str
    type: str
    is_read: bool
    related_entity_id: str | None
    created_at: datetime


class CustomerData(CamelModel):
    user: CustomerProfile
    deliveries: list[Delivery]
    services: list[ServiceBooking]
    payments: list[CustomerPayment]
    notifications: list[CustomerNotification]
    statistics: dict


class CustomerDataResponse(CamelModel):
    success: bool = True
    data: CustomerData
    timestamp: datetime
