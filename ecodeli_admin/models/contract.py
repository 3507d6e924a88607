"""
Contract model — a service agreement between the platform and one
PROFESSIONAL merchant or carrier.

Exactly one of merchant_id / carrier_id is set.
"""

import enum
import uuid
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Numeric,
    String,
    Text,
    Uuid,
    Enum as SAEnum,
    event,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ecodeli_admin.database import Base


class ContractStatus(str, enum.Enum):
    DRAFT = "DRAFT"
    PENDING_SIGNATURE = "PENDING_SIGNATURE"
    SIGNED = "SIGNED"
    ACTIVE = "ACTIVE"
    EXPIRED = "EXPIRED"
    TERMINATED = "TERMINATED"


class Contract(Base):
    __tablename__ = "contracts"
    __table_args__ = (
        CheckConstraint(
            "(merchant_id IS NULL) <> (carrier_id IS NULL)",
            name="single_party",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    merchant_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True,
    )
    carrier_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True,
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    terms: Mapped[str] = mapped_column(Text, nullable=False)
    value: Mapped[Decimal | None] = mapped_column(Numeric(precision=12, scale=2))
    currency: Mapped[str] = mapped_column(String(3), default="EUR")

    status: Mapped[ContractStatus] = mapped_column(
        SAEnum(ContractStatus, name="contractstatus"), default=ContractStatus.DRAFT,
    )

    start_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    end_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    expires_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    signed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    merchant = relationship("User", foreign_keys=[merchant_id])
    carrier = relationship("User", foreign_keys=[carrier_id])

    @property
    def party(self):
        """The merchant or carrier this contract binds."""
        return self.merchant if self.merchant_id is not None else self.carrier

    @property
    def number(self) -> str:
        return f"CONT-{str(self.id)[:8]}"

    def __repr__(self) -> str:
        return f"<Contract {self.number} status={self.status.value if self.status else 'N/A'}>"


@event.listens_for(Contract, "init")
def _set_contract_defaults(target, args, kwargs):
    if "id" not in kwargs:
        target.id = uuid.uuid4()
    if "status" not in kwargs:
        target.status = ContractStatus.DRAFT
    if "currency" not in kwargs:
        target.currency = "EUR"
    if "created_at" not in kwargs:
        target.created_at = datetime.now(timezone.utc)
    if "updated_at" not in kwargs:
        target.updated_at = datetime.now(timezone.utc)
