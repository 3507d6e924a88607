"""
Pydantic schemas for merchants, their products and subscriptions.
"""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from ecodeli_admin.models.commerce import SubscriptionStatus
from ecodeli_admin.schemas.common import CamelModel, UserSummary


class MerchantResponse(UserSummary):
    is_verified: bool
    created_at: datetime
    product_count: int = 0


class MerchantListResponse(CamelModel):
    merchants: list[MerchantResponse]
    total: int


class ProductResponse(CamelModel):
    id: UUID
    merchant_id: UUID
    name: str
    description: str | None
    price: Decimal
    stock: int
    is_active: bool
    created_at: datetime


class SubscriptionResponse(CamelModel):
    id: UUID
    user_id: UUID
    plan: str
    amount: Decimal
    status: SubscriptionStatus
    current_period_end: datetime | None
    created_at: datetime
    user: UserSummary | None = None


class SubscriptionListResponse(CamelModel):
    success: bool = True
    subscriptions: list[SubscriptionResponse]
    stats: dict
