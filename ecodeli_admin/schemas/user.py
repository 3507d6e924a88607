"""
Pydantic schemas for admin user management.
"""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from ecodeli_admin.models.user import Role, UserType
from ecodeli_admin.schemas.common import CamelModel


class UserCreateRequest(CamelModel):
    """Schema for creating a user from the admin console."""
    first_name: str = Field(..., min_length=1, max_length=100, examples=["Camille"])
    last_name: str = Field(..., min_length=1, max_length=100, examples=["Martin"])
    email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str | None = Field(None, min_length=8, max_length=128)
    role: Role = Role.CUSTOMER
    user_type: UserType = UserType.INDIVIDUAL
    company_name: str | None = None
    company_first_name: str | None = None
    company_last_name: str | None = None
    is_verified: bool = False
    phone_number: str | None = None
    address: str | None = None


class UserUpdateRequest(CamelModel):
    """Partial update; omitted fields are left untouched."""
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = Field(None, pattern=r"^[^@\s]+@[^@\s]+$")
    role: Role | None = None
    is_verified: bool | None = None
    phone_number: str | None = None
    address: str | None = None
    user_type: UserType | None = None
    company_name: str | None = None


class UserResponse(CamelModel):
    id: UUID
    email: str
    name: str | None
    first_name: str | None
    last_name: str | None
    role: Role
    user_type: UserType | None
    company_name: str | None
    company_first_name: str | None
    company_last_name: str | None
    is_verified: bool
    phone_number: str | None
    address: str | None
    created_at: datetime
    updated_at: datetime | None


class DeleteBlockedDetails(CamelModel):
    """Counts of related records that prevent a plain delete."""
    packages: int = 0
    rides: int = 0
    payments: int = 0
    contracts: int = 0
    bookings: int = 0

    @property
    def has_any(self) -> bool:
        return any((self.packages, self.rides, self.payments, self.contracts, self.bookings))
