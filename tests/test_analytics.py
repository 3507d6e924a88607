"""Tests for the analytics endpoint."""

from decimal import Decimal

import pytest

from ecodeli_admin.models import PaymentStatus, Role, StorageBox


@pytest.mark.asyncio
async def test_analytics_payload(client, seed, make_user, make_payment):
    customer = make_user(role=Role.CUSTOMER)
    carrier = make_user(role=Role.CARRIER)
    await seed(customer, carrier)
    await seed(
        make_payment(customer, amount=Decimal("40")),
        make_payment(customer, amount=Decimal("15"), status=PaymentStatus.FAILED),
        StorageBox(code="BX-1", location="Paris 12e", is_occupied=True),
    )

    response = await client.get("/api/analytics", params={"range": "30d"})
    assert response.status_code == 200
    data = response.json()
    assert set(data) == {"users", "services", "bookings", "packages", "storageBoxes", "revenue"}
    assert data["users"]["total"] == 2
    assert data["users"]["byRole"] == {"CUSTOMER": 1, "CARRIER": 1}
    assert data["revenue"]["total"] == 40.0
    assert data["revenue"]["thisMonth"] == 40.0
    assert data["storageBoxes"]["occupancyRate"] == 100.0


@pytest.mark.asyncio
async def test_analytics_unknown_range_defaults(client):
    response = await client.get("/api/analytics", params={"range": "decade"})
    assert response.status_code == 200
    assert response.json()["users"]["total"] == 0
