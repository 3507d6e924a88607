"""create packages, rides, matches and payments tables

Revision ID: 002
Revises: 001
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import ENUM, UUID

revision = "002"
down_revision = "001"
branch_labels = None
depends_on = None


def _user_fk() -> sa.Column:
    return sa.Column(
        "user_id", UUID(as_uuid=True),
        sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
    )


def upgrade() -> None:
    bind = op.get_bind()
    ENUM(
        "PENDING", "MATCHED", "IN_TRANSIT", "DELIVERED", "CANCELLED",
        name="packagestatus",
    ).create(bind, checkfirst=True)
    ENUM(
        "AVAILABLE", "FULL", "IN_PROGRESS", "COMPLETED", "CANCELLED",
        name="ridestatus",
    ).create(bind, checkfirst=True)
    ENUM(
        "PROPOSED", "ACCEPTED_BY_SENDER", "ACCEPTED_BY_CARRIER",
        "CONFIRMED", "REJECTED", "CANCELLED",
        name="matchstatus",
    ).create(bind, checkfirst=True)
    ENUM(
        "PENDING", "COMPLETED", "FAILED", "REFUNDED",
        name="paymentstatus",
    ).create(bind, checkfirst=True)

    op.create_table(
        "packages",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        _user_fk(),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("tracking_number", sa.String(50), nullable=True, unique=True),
        sa.Column("sender_name", sa.String(200), nullable=True),
        sa.Column("sender_address", sa.Text(), nullable=True),
        sa.Column("recipient_name", sa.String(200), nullable=True),
        sa.Column("recipient_address", sa.Text(), nullable=True),
        sa.Column("weight", sa.Float(), nullable=True),
        sa.Column("dimensions", sa.String(100), nullable=True),
        sa.Column("size", sa.String(20), nullable=True),
        sa.Column("fragile", sa.Boolean(), server_default=sa.text("false"), nullable=False),
        sa.Column("urgent", sa.Boolean(), server_default=sa.text("false"), nullable=False),
        sa.Column("price", sa.Numeric(12, 2), nullable=True),
        sa.Column(
            "status", ENUM(name="packagestatus", create_type=False),
            server_default="PENDING", nullable=False,
        ),
        sa.Column(
            "created_at", sa.DateTime(timezone=True),
            server_default=sa.func.now(), nullable=False,
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True),
            server_default=sa.func.now(), nullable=False,
        ),
    )
    op.create_index("ix_packages_user_id", "packages", ["user_id"])

    op.create_table(
        "rides",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        _user_fk(),
        sa.Column("origin", sa.String(255), nullable=False),
        sa.Column("destination", sa.String(255), nullable=False),
        sa.Column("departure_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("available_space", sa.String(50), nullable=True),
        sa.Column("price_per_kg", sa.Numeric(10, 2), nullable=True),
        sa.Column(
            "status", ENUM(name="ridestatus", create_type=False),
            server_default="AVAILABLE", nullable=False,
        ),
        sa.Column(
            "created_at", sa.DateTime(timezone=True),
            server_default=sa.func.now(), nullable=False,
        ),
    )
    op.create_index("ix_rides_user_id", "rides", ["user_id"])

    op.create_table(
        "matches",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "package_id", UUID(as_uuid=True),
            sa.ForeignKey("packages.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column(
            "ride_id", UUID(as_uuid=True),
            sa.ForeignKey("rides.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column(
            "status", ENUM(name="matchstatus", create_type=False),
            server_default="PROPOSED", nullable=False,
        ),
        sa.Column("price", sa.Numeric(12, 2), nullable=True),
        sa.Column(
            "proposed_by_id", UUID(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True,
        ),
        sa.Column(
            "created_at", sa.DateTime(timezone=True),
            server_default=sa.func.now(), nullable=False,
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True),
            server_default=sa.func.now(), nullable=False,
        ),
    )
    op.create_index("ix_matches_package_id", "matches", ["package_id"])
    op.create_index("ix_matches_ride_id", "matches", ["ride_id"])

    op.create_table(
        "payments",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        _user_fk(),
        sa.Column(
            "match_id", UUID(as_uuid=True),
            sa.ForeignKey("matches.id", ondelete="CASCADE"), nullable=True,
        ),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("currency", sa.String(3), server_default="EUR", nullable=False),
        sa.Column(
            "status", ENUM(name="paymentstatus", create_type=False),
            server_default="PENDING", nullable=False,
        ),
        sa.Column(
            "created_at", sa.DateTime(timezone=True),
            server_default=sa.func.now(), nullable=False,
        ),
    )
    op.create_index("ix_payments_user_id", "payments", ["user_id"])
    op.create_index("ix_payments_match_id", "payments", ["match_id"])


def downgrade() -> None:
    op.drop_table("payments")
    op.drop_table("matches")
    op.drop_table("rides")
    op.drop_table("packages")
    bind = op.get_bind()
    for name in ("paymentstatus", "matchstatus", "ridestatus", "packagestatus"):
        ENUM(name=name).drop(bind, checkfirst=True)
