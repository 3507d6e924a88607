"""Construction-time defaults for the delivery, service and storage models."""

import uuid
from datetime import datetime, timezone
from decimal import Decimal

from ecodeli_admin.models import (
    Booking,
    BookingStatus,
    BoxRental,
    Package,
    PackageStatus,
    Ride,
    RideStatus,
    Service,
    StorageBox,
)


def test_ride_defaults():
    ride = Ride(user_id=uuid.uuid4(), origin="Paris", destination="Lyon",
                departure_time=datetime.now(timezone.utc))
    assert ride.id is not None
    assert ride.status == RideStatus.AVAILABLE
    assert ride.created_at is not None


def test_package_defaults():
    package = Package(user_id=uuid.uuid4(), description="Books")
    assert package.id is not None
    assert package.status == PackageStatus.PENDING
    assert package.fragile is False


def test_service_and_booking_defaults():
    service = Service(provider_id=uuid.uuid4(), name="Ironing", category="HOME")
    assert service.price == Decimal("0")
    assert service.is_active is True

    booking = Booking(service_id=service.id, provider_id=service.provider_id, customer_id=uuid.uuid4())
    assert booking.service_id == service.id
    assert booking.status == BookingStatus.PENDING


def test_storage_defaults():
    box = StorageBox(code="B1", location="Paris")
    assert box.size == "MEDIUM"
    assert box.is_occupied is False

    rental = BoxRental(box_id=box.id, user_id=uuid.uuid4())
    assert rental.box_id == box.id
    assert rental.is_active is True
    assert rental.start_date is not None


def test_explicit_values_win():
    ride = Ride(user_id=uuid.uuid4(), origin="Paris", destination="Lyon",
                departure_time=datetime.now(timezone.utc), status=RideStatus.FULL)
    assert ride.status == RideStatus.FULL
