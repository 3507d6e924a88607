"""Tests for storage box and box rental endpoints."""

import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from sqlalchemy import func, select

from ecodeli_admin.models import BoxRental, StorageBox


def _box(**overrides):
    defaults = {
        "code": "PAR-001",
        "location": "Gare de Lyon, Paris",
        "price_per_day": Decimal("4.50"),
    }
    defaults.update(overrides)
    return StorageBox(**defaults)


async def _is_occupied(db_session, box_id):
    result = await db_session.execute(select(StorageBox.is_occupied).where(StorageBox.id == box_id))
    return result.scalar_one()


# ---------------------------------------------------------------------------
# /api/storage-boxes
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_list_boxes_shows_only_active_rentals(client, seed, make_user):
    renter = make_user(email="renter@example.com")
    box = _box(is_occupied=True)
    empty = _box(code="PAR-002")
    now = datetime.now(timezone.utc)
    past = BoxRental(box_id=box.id, user_id=renter.id, is_active=False,
                     start_date=now - timedelta(days=30), end_date=now - timedelta(days=20))
    current = BoxRental(box_id=box.id, user_id=renter.id, start_date=now)
    await seed(renter, box, empty, past, current)

    response = await client.get("/api/storage-boxes")
    assert response.status_code == 200
    data = response.json()
    assert [b["code"] for b in data] == ["PAR-001", "PAR-002"]
    assert data[0]["isOccupied"] is True
    assert [r["id"] for r in data[0]["rentals"]] == [str(current.id)]
    assert data[0]["rentals"][0]["user"]["email"] == "renter@example.com"
    assert data[1]["rentals"] == []


@pytest.mark.asyncio
async def test_create_box(client):
    response = await client.post("/api/storage-boxes", json={
        "code": "LYO-010",
        "location": "Part-Dieu, Lyon",
        "size": "LARGE",
        "pricePerDay": "6",
    })
    assert response.status_code == 201
    data = response.json()
    assert data["code"] == "LYO-010"
    assert data["size"] == "LARGE"
    assert data["isOccupied"] is False
    assert data["rentals"] == []


@pytest.mark.asyncio
async def test_create_box_duplicate_code(client, db_session, seed):
    await seed(_box())

    response = await client.post("/api/storage-boxes", json={
        "code": "PAR-001",
        "location": "Elsewhere",
        "pricePerDay": "3",
    })
    assert response.status_code == 400
    assert response.json() == {"error": "A storage box with this code already exists"}

    count = await db_session.execute(select(func.count()).select_from(StorageBox))
    assert count.scalar_one() == 1


# ---------------------------------------------------------------------------
# /api/box-rentals
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_list_rentals_latest_first(client, seed, make_user):
    renter = make_user(email="renter@example.com")
    box = _box()
    now = datetime.now(timezone.utc)
    old = BoxRental(box_id=box.id, user_id=renter.id, is_active=False,
                    start_date=now - timedelta(days=10), total_cost=Decimal("18.00"))
    new = BoxRental(box_id=box.id, user_id=renter.id, start_date=now)
    await seed(renter, box, old, new)

    response = await client.get("/api/box-rentals")
    assert response.status_code == 200
    data = response.json()
    assert [r["id"] for r in data] == [str(new.id), str(old.id)]
    assert data[0]["box"]["code"] == "PAR-001"
    assert data[0]["user"]["email"] == "renter@example.com"
    assert data[0]["paymentStatus"] == "PENDING"
    assert data[1]["paymentStatus"] == "PAID"


@pytest.mark.asyncio
async def test_create_active_rental_occupies_box(client, db_session, seed, make_user):
    renter = make_user()
    box = _box()
    await seed(renter, box)

    response = await client.post("/api/box-rentals", json={
        "boxId": str(box.id),
        "userId": str(renter.id),
        "startDate": "2030-03-01T10:00:00Z",
        "accessCode": "4821",
    })
    assert response.status_code == 201
    data = response.json()
    assert data["isActive"] is True
    assert data["accessCode"] == "4821"
    assert data["box"]["id"] == str(box.id)
    assert await _is_occupied(db_session, box.id) is True


@pytest.mark.asyncio
async def test_create_rental_on_occupied_box_is_refused(client, db_session, seed, make_user):
    renter = make_user()
    box = _box(is_occupied=True)
    await seed(renter, box)

    response = await client.post("/api/box-rentals", json={
        "boxId": str(box.id),
        "userId": str(renter.id),
        "startDate": "2030-03-01T10:00:00Z",
    })
    assert response.status_code == 400
    assert response.json() == {"error": "Storage box is already occupied"}

    count = await db_session.execute(select(func.count()).select_from(BoxRental))
    assert count.scalar_one() == 0


@pytest.mark.asyncio
async def test_create_inactive_rental_leaves_box_free(client, db_session, seed, make_user):
    renter = make_user()
    box = _box()
    await seed(renter, box)

    response = await client.post("/api/box-rentals", json={
        "boxId": str(box.id),
        "userId": str(renter.id),
        "startDate": "2029-03-01T10:00:00Z",
        "endDate": "2029-03-05T10:00:00Z",
        "totalCost": "18",
        "isActive": False,
    })
    assert response.status_code == 201
    assert response.json()["paymentStatus"] == "PAID"
    assert await _is_occupied(db_session, box.id) is False


@pytest.mark.asyncio
async def test_create_rental_unknown_box_is_404(client, seed, make_user):
    renter = make_user()
    await seed(renter)

    response = await client.post("/api/box-rentals", json={
        "boxId": str(uuid.uuid4()),
        "userId": str(renter.id),
        "startDate": "2030-03-01T10:00:00Z",
    })
    assert response.status_code == 404
    assert response.json() == {"error": "Storage box not found"}


@pytest.mark.asyncio
async def test_create_rental_unknown_user_is_404(client, seed):
    box = _box()
    await seed(box)

    response = await client.post("/api/box-rentals", json={
        "boxId": str(box.id),
        "userId": str(uuid.uuid4()),
        "startDate": "2030-03-01T10:00:00Z",
    })
    assert response.status_code == 404
    assert response.json() == {"error": "User not found"}
