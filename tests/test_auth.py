"""Tests for admin authentication — login, throttling, session lookup and route protection."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from ecodeli_admin.config import settings
from ecodeli_admin.core.security import create_customer_token, create_session_token, hash_password
from ecodeli_admin.models import Role
from ecodeli_admin.services import auth_service


@pytest.fixture
def admin_user(make_user):
    return make_user(
        email="admin@ecodeli.fr",
        first_name="Ada",
        last_name="Admin",
        role=Role.ADMIN,
        password=hash_password("correct-horse"),
    )


def _bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


# ---------------------------------------------------------------------------
# Health Check
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_health_check(anon_client):
    """Health check endpoint returns 200 with service info."""
    response = await anon_client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert "Ecodeli" in data["service"]


# ---------------------------------------------------------------------------
# POST /api/auth/login
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_login_success(anon_client, seed, admin_user, mock_redis):
    await seed(admin_user)

    response = await anon_client.post(
        "/api/auth/login", json={"email": "Admin@Ecodeli.fr", "password": "correct-horse"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["tokenType"] == "bearer"
    assert data["expiresIn"] == settings.SESSION_EXPIRE_MINUTES * 60
    assert data["user"]["role"] == "ADMIN"
    assert data["user"]["name"] == "Ada Admin"

    claims = jwt.decode(data["accessToken"], settings.NEXTAUTH_SECRET, algorithms=["HS256"])
    assert claims["sub"] == str(admin_user.id)
    assert claims["role"] == "ADMIN"
    mock_redis.delete.assert_any_call("login_attempts:admin@ecodeli.fr")


@pytest.mark.asyncio
async def test_login_wrong_password(anon_client, seed, admin_user, mock_redis):
    await seed(admin_user)

    response = await anon_client.post(
        "/api/auth/login", json={"email": "admin@ecodeli.fr", "password": "nope"},
    )
    assert response.status_code == 401
    assert response.json()["error"] == "Invalid credentials"
    mock_redis.incr.assert_called_once_with("login_attempts:admin@ecodeli.fr")


@pytest.mark.asyncio
async def test_login_non_admin_is_rejected(anon_client, seed, make_user):
    await seed(make_user(email="customer@example.com", password=hash_password("pw-123456")))

    response = await anon_client.post(
        "/api/auth/login", json={"email": "customer@example.com", "password": "pw-123456"},
    )
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_login_locked_is_429(anon_client, seed, admin_user, mock_redis):
    await seed(admin_user)
    mock_redis.get.return_value = "1"

    response = await anon_client.post(
        "/api/auth/login", json={"email": "admin@ecodeli.fr", "password": "correct-horse"},
    )
    assert response.status_code == 429


@pytest.mark.asyncio
async def test_record_failed_login_locks_at_threshold(mock_redis):
    mock_redis.incr.return_value = settings.LOGIN_MAX_ATTEMPTS

    count = await auth_service.record_failed_login("Admin@Ecodeli.fr", mock_redis)
    assert count == settings.LOGIN_MAX_ATTEMPTS
    mock_redis.setex.assert_called_once_with(
        "login_lock:admin@ecodeli.fr", settings.LOGIN_LOCK_SECONDS, "1",
    )


@pytest.mark.asyncio
async def test_first_failed_login_sets_expiry(mock_redis):
    await auth_service.record_failed_login("admin@ecodeli.fr", mock_redis)
    mock_redis.expire.assert_called_once_with(
        "login_attempts:admin@ecodeli.fr", settings.LOGIN_LOCK_SECONDS,
    )
    mock_redis.setex.assert_not_called()


# ---------------------------------------------------------------------------
# GET /api/auth/session
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_session_returns_admin(anon_client, admin_user):
    token = create_session_token(admin_user.id, admin_user.email, "Ada Admin", "ADMIN")

    response = await anon_client.get("/api/auth/session", headers=_bearer(token))
    assert response.status_code == 200
    data = response.json()
    assert data["user"]["id"] == str(admin_user.id)
    assert data["user"]["role"] == "ADMIN"
    assert data["expires"]


@pytest.mark.asyncio
async def test_session_without_token_is_401(anon_client):
    response = await anon_client.get("/api/auth/session")
    assert response.status_code == 401


# ---------------------------------------------------------------------------
# Admin route protection
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.parametrize("path", [
    "/api/users", "/api/contracts", "/api/documents", "/api/matches",
    "/api/packages", "/api/rides", "/api/payments", "/api/merchants",
    "/api/subscriptions", "/api/analytics",
])
async def test_admin_routes_require_session(anon_client, path):
    response = await anon_client.get(path)
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_non_admin_session_is_403(anon_client):
    token = create_session_token("00000000-0000-0000-0000-000000000001", "c@example.com", "C", "CARRIER")
    response = await anon_client.get("/api/users", headers=_bearer(token))
    assert response.status_code == 403
    assert response.json()["error"] == "Admin access required"


@pytest.mark.asyncio
async def test_admin_session_grants_access(anon_client):
    token = create_session_token("00000000-0000-0000-0000-000000000001", "a@example.com", "A", "ADMIN")
    response = await anon_client.get("/api/users", headers=_bearer(token))
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_expired_session_is_401(anon_client):
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {"sub": "x", "role": "ADMIN", "type": "session",
         "iat": now - timedelta(hours=2), "exp": now - timedelta(hours=1)},
        settings.NEXTAUTH_SECRET,
        algorithm="HS256",
    )
    response = await anon_client.get("/api/users", headers=_bearer(token))
    assert response.status_code == 401
    assert response.json()["error"] == "Token has expired"


@pytest.mark.asyncio
async def test_customer_token_is_not_an_admin_session(anon_client):
    token = create_customer_token("00000000-0000-0000-0000-000000000001", "a@example.com", "ADMIN", None)
    response = await anon_client.get("/api/users", headers=_bearer(token))
    assert response.status_code == 401
