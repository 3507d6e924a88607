"""Storage boxes and their rentals."""

import uuid
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import Boolean, DateTime, ForeignKey, Numeric, String, Uuid, event
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ecodeli_admin.database import Base


class StorageBox(Base):
    __tablename__ = "storage_boxes"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    code: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    size: Mapped[str] = mapped_column(String(20), default="MEDIUM")
    price_per_day: Mapped[Decimal] = mapped_column(Numeric(precision=10, scale=2), default=Decimal("0"))
    is_occupied: Mapped[bool] = mapped_column(Boolean, default=False)

    rentals = relationship("BoxRental", back_populates="box", passive_deletes=True)


class BoxRental(Base):
    __tablename__ = "box_rentals"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    box_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("storage_boxes.id", ondelete="CASCADE"), nullable=False,
    )
    start_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )
    end_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    total_cost: Mapped[Decimal | None] = mapped_column(Numeric(precision=10, scale=2))
    access_code: Mapped[str | None] = mapped_column(String(20))
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    box = relationship("StorageBox", back_populates="rentals")
    user = relationship("User")


@event.listens_for(StorageBox, "init")
def _set_box_defaults(target, args, kwargs):
    if "id" not in kwargs:
        target.id = uuid.uuid4()
    if "size" not in kwargs:
        target.size = "MEDIUM"
    if "price_per_day" not in kwargs:
        target.price_per_day = Decimal("0")
    if "is_occupied" not in kwargs:
        target.is_occupied = False


@event.listens_for(BoxRental, "init")
def _set_rental_defaults(target, args, kwargs):
    if "id" not in kwargs:
        target.id = uuid.uuid4()
    if "is_active" not in kwargs:
        target.is_active = True
    if "start_date" not in kwargs:
        target.start_date = datetime.now(timezone.utc)
