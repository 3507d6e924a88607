"""
Shared test fixtures for Ecodeli Admin.

Provides an in-memory SQLite database, a Redis mock, async HTTP clients
(admin and anonymous) and model factories.
"""

import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from ecodeli_admin.api.deps import get_current_admin
from ecodeli_admin.database import Base, get_db
from ecodeli_admin.models import (
    Contract,
    Match,
    Package,
    Payment,
    PaymentStatus,
    Ride,
    Role,
    User,
    UserType,
)
from ecodeli_admin.redis_client import get_redis

ADMIN_CLAIMS = {
    "sub": str(uuid.uuid4()),
    "email": "admin@ecodeli.fr",
    "name": "Admin",
    "role": Role.ADMIN.value,
    "type": "session",
}


# --- Mock Redis ---


@pytest.fixture
def mock_redis():
    """AsyncMock Redis client with the methods login throttling uses."""
    redis = AsyncMock()
    redis.setex = AsyncMock()
    redis.get = AsyncMock(return_value=None)
    redis.delete = AsyncMock()
    redis.incr = AsyncMock(return_value=1)
    redis.expire = AsyncMock()
    return redis


# --- Database ---


@pytest_asyncio.fixture
async def engine():
    """Fresh in-memory SQLite database with the full schema."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    """Session used by tests to seed and inspect data."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def seed(db_session):
    """Persist model instances and commit them."""
    async def _seed(*objects):
        db_session.add_all(objects)
        await db_session.commit()
        return objects
    return _seed


# --- Dependency Override Helpers ---


def _override_db(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
    return override_get_db


@pytest_asyncio.fixture
async def anon_client(session_factory, mock_redis):
    """
    Async HTTP test client with get_db and get_redis overridden
    and no admin session.
    """
    from ecodeli_admin.main import app

    async def override_get_redis():
        return mock_redis

    app.dependency_overrides[get_db] = _override_db(session_factory)
    app.dependency_overrides[get_redis] = override_get_redis

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(anon_client):
    """Async HTTP test client signed in as an admin."""
    from ecodeli_admin.main import app

    async def override_get_current_admin():
        return ADMIN_CLAIMS

    app.dependency_overrides[get_current_admin] = override_get_current_admin
    yield anon_client


# --- Factories ---


def _make_user(**overrides) -> User:
    """Create a User instance with test defaults via the normal constructor."""
    defaults = {
        "email": f"user-{uuid.uuid4().hex[:8]}@example.com",
        "first_name": "Camille",
        "last_name": "Martin",
        "name": "Camille Martin",
        "role": Role.CUSTOMER,
        "user_type": UserType.INDIVIDUAL,
    }
    defaults.update(overrides)
    return User(**defaults)


def _make_package(user: User, **overrides) -> Package:
    defaults = {
        "user_id": user.id,
        "description": "Box of books",
        "sender_address": "10 Rue de Rivoli, Paris",
        "recipient_address": "5 Place Bellecour, Lyon",
        "weight": 4.5,
        "price": Decimal("25.00"),
    }
    defaults.update(overrides)
    return Package(**defaults)


def _make_ride(user: User, **overrides) -> Ride:
    defaults = {
        "user_id": user.id,
        "origin": "Paris",
        "destination": "Lyon",
        "departure_time": datetime.now(timezone.utc) + timedelta(days=2),
        "price_per_kg": Decimal("2.50"),
    }
    defaults.update(overrides)
    return Ride(**defaults)


def _make_match(package: Package, ride: Ride, **overrides) -> Match:
    defaults = {
        "package_id": package.id,
        "ride_id": ride.id,
        "price": Decimal("20.00"),
    }
    defaults.update(overrides)
    return Match(**defaults)


def _make_payment(user: User, match: Match | None = None, **overrides) -> Payment:
    defaults = {
        "user_id": user.id,
        "match_id": match.id if match is not None else None,
        "amount": Decimal("20.00"),
        "status": PaymentStatus.COMPLETED,
    }
    defaults.update(overrides)
    return Payment(**defaults)


def _make_contract(merchant: User | None = None, carrier: User | None = None, **overrides) -> Contract:
    defaults = {
        "merchant_id": merchant.id if merchant is not None else None,
        "carrier_id": carrier.id if carrier is not None else None,
        "title": "Partnership agreement",
        "content": "Delivery of goods sold on the marketplace.",
        "terms": "Payment within 30 days.",
        "value": Decimal("1500.00"),
    }
    defaults.update(overrides)
    return Contract(**defaults)


@pytest.fixture
def make_user():
    """Factory fixture for creating User instances."""
    return _make_user


@pytest.fixture
def make_package():
    return _make_package


@pytest.fixture
def make_ride():
    return _make_ride


@pytest.fixture
def make_match():
    return _make_match


@pytest.fixture
def make_payment():
    return _make_payment


@pytest.fixture
def make_contract():
    return _make_contract


@pytest.fixture
def professional(make_user):
    """A PROFESSIONAL merchant, not yet persisted."""
    return make_user(
        email="shop@example.com",
        role=Role.MERCHANT,
        user_type=UserType.PROFESSIONAL,
        company_name="Boutique Martin",
        company_first_name="Camille",
        company_last_name="Martin",
        address="12 Rue du Commerce, Paris",
    )
