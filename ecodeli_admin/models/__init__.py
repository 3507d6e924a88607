"""SQLAlchemy ORM models for the Ecodeli marketplace."""

from ecodeli_admin.models.user import Account, AuthSession, Role, User, UserType
from ecodeli_admin.models.package import Package, PackageStatus, Ride, RideStatus
from ecodeli_admin.models.match import Match, MatchStatus, VALID_TRANSITIONS
from ecodeli_admin.models.payment import Payment, PaymentStatus
from ecodeli_admin.models.contract import Contract, ContractStatus
from ecodeli_admin.models.document import Document, DocumentType
from ecodeli_admin.models.booking import Booking, BookingStatus, Service
from ecodeli_admin.models.messaging import Message, Notification
from ecodeli_admin.models.storage import BoxRental, StorageBox
from ecodeli_admin.models.commerce import Product, Subscription, SubscriptionStatus

__all__ = [
    "User", "Role", "UserType", "Account", "AuthSession",
    "Package", "PackageStatus", "Ride", "RideStatus",
    "Match", "MatchStatus", "VALID_TRANSITIONS",
    "Payment", "PaymentStatus",
    "Contract", "ContractStatus",
    "Document", "DocumentType",
    "Service", "Booking", "BookingStatus",
    "Notification", "Message",
    "StorageBox", "BoxRental",
    "Product", "Subscription", "SubscriptionStatus",
]
