"""Tests for user management endpoints — listing, creation, updates and cascading deletion."""

import pytest
from sqlalchemy import func, select

from ecodeli_admin.core.security import verify_password
from ecodeli_admin.models import (
    Booking,
    Contract,
    Document,
    DocumentType,
    Match,
    Notification,
    Package,
    Payment,
    Product,
    Ride,
    Role,
    Service,
    User,
    UserType,
)
from ecodeli_admin.services.user_service import BLOCKED_MESSAGE


async def _count(db_session, model, *criteria) -> int:
    result = await db_session.execute(select(func.count()).select_from(model).where(*criteria))
    return result.scalar_one()


# ---------------------------------------------------------------------------
# GET /api/users
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_list_users_filters(client, seed, make_user):
    await seed(
        make_user(email="alice@example.com", first_name="Alice", role=Role.CUSTOMER, is_verified=True),
        make_user(email="bob@example.com", first_name="Bob", role=Role.CARRIER),
    )

    response = await client.get("/api/users")
    assert response.status_code == 200
    assert {u["email"] for u in response.json()} == {"alice@example.com", "bob@example.com"}

    response = await client.get("/api/users", params={"role": "CARRIER"})
    assert [u["email"] for u in response.json()] == ["bob@example.com"]

    response = await client.get("/api/users", params={"verified": "true"})
    assert [u["email"] for u in response.json()] == ["alice@example.com"]

    response = await client.get("/api/users", params={"search": "ali"})
    assert [u["email"] for u in response.json()] == ["alice@example.com"]


@pytest.mark.asyncio
async def test_list_users_camel_case_fields(client, seed, make_user):
    await seed(make_user(email="alice@example.com", phone_number="+33600000000"))

    user = (await client.get("/api/users")).json()[0]
    assert user["firstName"] == "Camille"
    assert user["phoneNumber"] == "+33600000000"
    assert user["userType"] == "INDIVIDUAL"
    assert "first_name" not in user


# ---------------------------------------------------------------------------
# POST /api/users
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_create_user(client, db_session):
    payload = {
        "firstName": "Jean",
        "lastName": "Dupont",
        "email": "jean@example.com",
        "password": "s3cret-pass",
        "role": "MERCHANT",
        "userType": "PROFESSIONAL",
        "companyName": "Dupont SARL",
    }
    response = await client.post("/api/users", json=payload)
    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Jean Dupont"
    assert data["role"] == "MERCHANT"
    assert data["userType"] == "PROFESSIONAL"
    assert "password" not in data

    stored = (await db_session.execute(
        select(User.password).where(User.email == "jean@example.com")
    )).scalar_one()
    assert stored != "s3cret-pass"
    assert verify_password("s3cret-pass", stored)


@pytest.mark.asyncio
async def test_create_user_duplicate_email(client, seed, make_user):
    await seed(make_user(email="taken@example.com"))

    response = await client.post(
        "/api/users",
        json={"firstName": "A", "lastName": "B", "email": "TAKEN@example.com"},
    )
    assert response.status_code == 400
    assert "already exists" in response.json()["error"]


@pytest.mark.asyncio
async def test_create_user_missing_fields(client):
    response = await client.post("/api/users", json={"email": "x@example.com"})
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request"


# ---------------------------------------------------------------------------
# PUT /api/users/{id}
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_update_user_partial(client, db_session, seed, make_user):
    (user,) = await seed(make_user(email="alice@example.com", phone_number="+33611111111"))

    response = await client.put(f"/api/users/{user.id}", json={"isVerified": True, "role": "CARRIER"})
    assert response.status_code == 200
    data = response.json()
    assert data["isVerified"] is True
    assert data["role"] == "CARRIER"
    assert data["phoneNumber"] == "+33611111111"

    row = (await db_session.execute(
        select(User.is_verified, User.role, User.phone_number).where(User.id == user.id)
    )).one()
    assert row == (True, Role.CARRIER, "+33611111111")


@pytest.mark.asyncio
async def test_update_unknown_user_is_404(client):
    response = await client.put(
        "/api/users/00000000-0000-0000-0000-000000000000", json={"firstName": "X"},
    )
    assert response.status_code == 404


# ---------------------------------------------------------------------------
# DELETE /api/users/{id}
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_delete_user_without_dependents(client, db_session, seed, make_user):
    (user,) = await seed(make_user())
    await seed(Notification(user_id=user.id, title="Hi", message="Welcome"))

    response = await client.delete(f"/api/users/{user.id}")
    assert response.status_code == 200
    assert response.json()["message"] == "User deleted"

    assert await _count(db_session, User, User.id == user.id) == 0
    assert await _count(db_session, Notification, Notification.user_id == user.id) == 0


@pytest.mark.asyncio
async def test_delete_unknown_user_is_404(client):
    response = await client.delete("/api/users/00000000-0000-0000-0000-000000000000")
    assert response.status_code == 404
    assert response.json()["error"] == "User not found"


@pytest.mark.asyncio
async def test_delete_user_blocked_by_dependents(
    client, db_session, seed, make_user, make_package, make_payment,
):
    (user,) = await seed(make_user())
    await seed(make_package(user), make_package(user), make_payment(user))

    response = await client.delete(f"/api/users/{user.id}")
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == BLOCKED_MESSAGE
    assert body["details"] == {
        "packages": 2, "rides": 0, "payments": 1, "contracts": 0, "bookings": 0,
    }

    assert await _count(db_session, User, User.id == user.id) == 1
    assert await _count(db_session, Package, Package.user_id == user.id) == 2


@pytest.mark.asyncio
async def test_force_delete_removes_everything(
    client, db_session, seed, make_user, make_package, make_ride, make_match, make_payment,
    make_contract,
):
    user = make_user(email="pro@example.com", role=Role.CARRIER, user_type=UserType.PROFESSIONAL)
    other = make_user(email="other@example.com")
    provider = make_user(email="provider@example.com", role=Role.SERVICE_PROVIDER)
    await seed(user, other, provider)

    own_package = make_package(user)
    other_package = make_package(other)
    ride = make_ride(user)
    await seed(own_package, other_package, ride)

    match_on_ride = make_match(other_package, ride)
    await seed(match_on_ride)

    service = Service(provider_id=provider.id, name="Cleaning", category="HOME")
    await seed(service)
    await seed(
        make_payment(other, match_on_ride),
        make_payment(user),
        make_contract(carrier=user),
        Booking(service_id=service.id, provider_id=provider.id, customer_id=user.id),
        Document(user_id=user.id, type=DocumentType.OTHER, title="Doc",
                 file_name="x.pdf", file_path="/documents/x.pdf"),
        Notification(user_id=user.id, title="Hi", message="Welcome"),
    )

    response = await client.delete(f"/api/users/{user.id}", params={"force": "true"})
    assert response.status_code == 200
    assert response.json()["message"] == "User and all related records deleted"

    assert await _count(db_session, User, User.id == user.id) == 0
    assert await _count(db_session, Package, Package.user_id == user.id) == 0
    assert await _count(db_session, Ride, Ride.user_id == user.id) == 0
    assert await _count(db_session, Match, Match.id == match_on_ride.id) == 0
    assert await _count(db_session, Payment) == 0
    assert await _count(db_session, Contract) == 0
    assert await _count(db_session, Booking) == 0
    assert await _count(db_session, Document) == 0
    assert await _count(db_session, Notification) == 0

    # Unrelated rows survive
    assert await _count(db_session, User, User.id == other.id) == 1
    assert await _count(db_session, Package, Package.id == other_package.id) == 1
    assert await _count(db_session, Service, Service.id == service.id) == 1


@pytest.mark.asyncio
async def test_force_delete_merchant_removes_products(client, db_session, seed, professional):
    await seed(professional)
    await seed(Product(merchant_id=professional.id, name="Mug", price=12))

    response = await client.delete(f"/api/users/{professional.id}", params={"force": "true"})
    assert response.status_code == 200
    assert await _count(db_session, Product) == 0
