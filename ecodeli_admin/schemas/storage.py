"""
Pydantic schemas for storage boxes and their rentals.
"""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import Field, computed_field

from ecodeli_admin.schemas.common import CamelModel, UserSummary


class StorageBoxCreateRequest(CamelModel):
    code: str = Field(..., min_length=1, max_length=20)
    location: str = Field(..., min_length=1, max_length=255)
    size: str = Field("MEDIUM", max_length=20)
    price_per_day: Decimal = Field(..., ge=0)


class BoxBrief(CamelModel):
    id: UUID
    code: str
    location: str
    size: str
    price_per_day: Decimal


class RentalBrief(CamelModel):
    id: UUID
    user_id: UUID
    start_date: datetime
    end_date: datetime | None
    is_active: bool
    user: UserSummary | None = None


class StorageBoxResponse(BoxBrief):
    is_occupied: bool
    rentals: list[RentalBrief] = []


class BoxRentalCreateRequest(CamelModel):
    box_id: UUID
    user_id: UUID
    start_date: datetime
    end_date: datetime | None = None
    total_cost: Decimal | None = Field(None, ge=0)
    access_code: str | None = Field(None, max_length=20)
    is_active: bool = True


class BoxRentalResponse(CamelModel):
    id: UUID
    box_id: UUID
    user_id: UUID
    start_date: datetime
    end_date: datetime | None
    total_cost: Decimal | None
    access_code: str | None
    is_active: bool
    box: BoxBrief
    user: UserSummary

    @computed_field(alias="paymentStatus")
    @property
    def payment_status(self) -> str:
        # Rentals carry no payment record; a priced rental counts as paid.
        return "PAID" if self.total_cost else "PENDING"
