"""
Pydantic schemas for the admin dashboard snapshot.
"""

from datetime import datetime
from uuid import UUID

from ecodeli_admin.schemas.common import CamelModel, UserSummary
from ecodeli_admin.schemas.delivery import (
    MatchResponse,
    PackageResponse,
    PaymentResponse,
    RideResponse,
)
from ecodeli_admin.schemas.user import UserResponse


class MessageItem(CamelModel):
    id: UUID
    sender_id: UUID
    receiver_id: UUID
    content: str
    is_read: bool
    created_at: datetime
    sender: UserSummary | None = None
    receiver: UserSummary | None = None


class NotificationItem(CamelModel):
    id: UUID
    user_id: UUID
    title: str
    message: str
    type: str
    is_read: bool
    created_at: datetime
    user: UserSummary | None = None


class DashboardResponse(CamelModel):
    users: list[UserResponse]
    packages: list[PackageResponse]
    rides: list[RideResponse]
    matches: list[MatchResponse]
    payments: list[PaymentResponse]
    messages: list[MessageItem]
    notifications: list[NotificationItem]
