"""
Match model — pairs a sender's Package with a carrier's Ride.

A match carries the negotiated price and an approval status. Status
moves forward only, through the table in VALID_TRANSITIONS:

  PROPOSED -> ACCEPTED_BY_SENDER | ACCEPTED_BY_CARRIER -> CONFIRMED
  PROPOSED -> REJECTED
  PROPOSED | ACCEPTED_BY_* -> CANCELLED

CONFIRMED, REJECTED and CANCELLED are terminal.
"""

import enum
import uuid
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import (
    DateTime,
    ForeignKey,
    Numeric,
    Uuid,
    Enum as SAEnum,
    event,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ecodeli_admin.core.errors import InvalidTransitionError
from ecodeli_admin.database import Base


class MatchStatus(str, enum.Enum):
    PROPOSED = "PROPOSED"
    ACCEPTED_BY_SENDER = "ACCEPTED_BY_SENDER"
    ACCEPTED_BY_CARRIER = "ACCEPTED_BY_CARRIER"
    CONFIRMED = "CONFIRMED"
    REJECTED = "REJECTED"
    CANCELLED = "CANCELLED"


# ---------------------------------------------------------------------------
# Status transition map
# ---------------------------------------------------------------------------

VALID_TRANSITIONS: dict[MatchStatus, set[MatchStatus]] = {
    MatchStatus.PROPOSED: {
        MatchStatus.ACCEPTED_BY_SENDER,
        MatchStatus.ACCEPTED_BY_CARRIER,
        MatchStatus.REJECTED,
        MatchStatus.CANCELLED,
    },
    MatchStatus.ACCEPTED_BY_SENDER: {
        MatchStatus.CONFIRMED,
        MatchStatus.CANCELLED,
    },
    MatchStatus.ACCEPTED_BY_CARRIER: {
        MatchStatus.CONFIRMED,
        MatchStatus.CANCELLED,
    },
    MatchStatus.CONFIRMED: set(),
    MatchStatus.REJECTED: set(),
    MatchStatus.CANCELLED: set(),
}

TERMINAL_STATUSES = frozenset(s for s, targets in VALID_TRANSITIONS.items() if not targets)

# Accepted by at least one side; the ride is committed to the package.
ENGAGED_STATUSES = frozenset({
    MatchStatus.ACCEPTED_BY_SENDER,
    MatchStatus.ACCEPTED_BY_CARRIER,
    MatchStatus.CONFIRMED,
})


# ---------------------------------------------------------------------------
# Model
# ---------------------------------------------------------------------------


class Match(Base):
    __tablename__ = "matches"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    package_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("packages.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    ride_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("rides.id", ondelete="CASCADE"), nullable=False, index=True,
    )

    status: Mapped[MatchStatus] = mapped_column(
        SAEnum(MatchStatus, name="matchstatus"), default=MatchStatus.PROPOSED,
    )
    price: Mapped[Decimal | None] = mapped_column(Numeric(precision=12, scale=2))
    proposed_by_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True,
    )

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
    package = relationship("Package", back_populates="matches")
    ride = relationship("Ride", back_populates="matches")
    payments = relationship("Payment", back_populates="match", passive_deletes=True)

    # ------------------------------------------------------------------
    # Status transition validation
    # ------------------------------------------------------------------

    @staticmethod
    def is_valid_transition(from_status: MatchStatus, to_status: MatchStatus) -> bool:
        """Check whether a status transition is allowed."""
        return to_status in VALID_TRANSITIONS.get(from_status, set())

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    def transition_to(self, new_status: MatchStatus) -> None:
        """
        Move to *new_status* if the lifecycle table allows it.

        Raises InvalidTransitionError otherwise, including for a write of
        the current status and for any write out of a terminal state.
        """
        if not self.is_valid_transition(self.status, new_status):
            raise InvalidTransitionError(self.status.value, new_status.value)
        self.status = new_status
        self.updated_at = datetime.now(timezone.utc)

    def __repr__(self) -> str:
        return f"<Match {self.id} status={self.status.value if self.status else 'N/A'}>"


@event.listens_for(Match, "init")
def _set_match_defaults(target, args, kwargs):
    if "id" not in kwargs:
        target.id = uuid.uuid4()
    if "status" not in kwargs:
        target.status = MatchStatus.PROPOSED
    if "created_at" not in kwargs:
        target.created_at = datetime.now(timezone.utc)
    if "updated_at" not in kwargs:
        target.updated_at = datetime.now(timezone.utc)
