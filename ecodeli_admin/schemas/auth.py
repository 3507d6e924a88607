"""
Pydantic schemas for admin login and the public customer login.
"""

from uuid import UUID

from pydantic import Field

from ecodeli_admin.models.user import Role, UserType
from ecodeli_admin.schemas.common import CamelModel


class LoginRequest(CamelModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class SessionUser(CamelModel):
    id: UUID
    email: str
    name: str | None
    role: Role


class LoginResponse(CamelModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: SessionUser


class SessionResponse(CamelModel):
    user: SessionUser
    expires: str


class CustomerAuthRequest(CamelModel):
    """Missing fields are reported by the handler with a 400."""
    email: str | None = None
    password: str | None = None


class CustomerProfile(CamelModel):
    id: UUID
    email: str
    first_name: str | None
    last_name: str | None
    phone_number: str | None = None
    address: str | None = None
    is_verified: bool = False
    role: Role
    user_type: UserType | None


class CustomerAuthResponse(CamelModel):
    success: bool = True
    user: CustomerProfile
    token: str
    expires_in: int
    message: str = "Signed in"
