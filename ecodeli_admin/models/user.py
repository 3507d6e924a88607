"""
User model — every account on the marketplace, admins included.

Role decides what a user does on the platform (sender, carrier,
merchant, provider, admin); user_type distinguishes business accounts,
which can hold contracts, from personal accounts.
"""

import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    String,
    Text,
    Uuid,
    Enum as SAEnum,
    event,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ecodeli_admin.database import Base


class Role(str, enum.Enum):
    ADMIN = "ADMIN"
    CUSTOMER = "CUSTOMER"
    CARRIER = "CARRIER"
    MERCHANT = "MERCHANT"
    SERVICE_PROVIDER = "SERVICE_PROVIDER"


class UserType(str, enum.Enum):
    INDIVIDUAL = "INDIVIDUAL"
    PROFESSIONAL = "PROFESSIONAL"


class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    # Identity
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    password: Mapped[str | None] = mapped_column(String(255))
    name: Mapped[str | None] = mapped_column(String(200))
    first_name: Mapped[str | None] = mapped_column(String(100))
    last_name: Mapped[str | None] = mapped_column(String(100))
    phone_number: Mapped[str | None] = mapped_column(String(30))
    address: Mapped[str | None] = mapped_column(Text)

    # Business identity (PROFESSIONAL accounts)
    company_name: Mapped[str | None] = mapped_column(String(200))
    company_first_name: Mapped[str | None] = mapped_column(String(100))
    company_last_name: Mapped[str | None] = mapped_column(String(100))

    role: Mapped[Role] = mapped_column(SAEnum(Role, name="role"), default=Role.CUSTOMER)
    user_type: Mapped[UserType] = mapped_column(
        SAEnum(UserType, name="usertype"), default=UserType.INDIVIDUAL,
    )
    is_verified: Mapped[bool] = mapped_column(Boolean, default=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    packages = relationship("Package", back_populates="user", passive_deletes=True)
    rides = relationship("Ride", back_populates="user", passive_deletes=True)
    payments = relationship("Payment", back_populates="user", passive_deletes=True)
    notifications = relationship("Notification", back_populates="user", passive_deletes=True)
    products = relationship("Product", back_populates="merchant", passive_deletes=True)
    customer_bookings = relationship(
        "Booking", foreign_keys="Booking.customer_id", back_populates="customer",
        passive_deletes=True,
    )

    @property
    def display_name(self) -> str:
        """Company name, else full name, else name, else email."""
        if self.company_name:
            return self.company_name
        full = f"{self.first_name or ''} {self.last_name or ''}".strip()
        return full or self.name or self.email

    def __repr__(self) -> str:
        return f"<User {self.email} role={self.role.value if self.role else 'N/A'}>"


class Account(Base):
    """External/credentials account linked to a user."""

    __tablename__ = "accounts"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    provider: Mapped[str] = mapped_column(String(50), nullable=False)
    provider_account_id: Mapped[str] = mapped_column(String(255), nullable=False)


class AuthSession(Base):
    """Persisted login session."""

    __tablename__ = "sessions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    session_token: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    expires: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


@event.listens_for(User, "init")
def _set_user_defaults(target, args, kwargs):
    if "id" not in kwargs:
        target.id = uuid.uuid4()
    if "role" not in kwargs:
        target.role = Role.CUSTOMER
    if "user_type" not in kwargs:
        target.user_type = UserType.INDIVIDUAL
    if "is_verified" not in kwargs:
        target.is_verified = False
    if "created_at" not in kwargs:
        target.created_at = datetime.now(timezone.utc)
    if "updated_at" not in kwargs:
        target.updated_at = datetime.now(timezone.utc)
