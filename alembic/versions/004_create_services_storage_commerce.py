"""create services, bookings, messaging, storage and commerce tables

Revision ID: 004
Revises: 003
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import ENUM, UUID

revision = "004"
down_revision = "003"
branch_labels = None
depends_on = None


def _fk(name: str, target: str, nullable: bool = False) -> sa.Column:
    return sa.Column(
        name, UUID(as_uuid=True),
        sa.ForeignKey(target, ondelete="CASCADE"), nullable=nullable,
    )


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at", sa.DateTime(timezone=True),
        server_default=sa.func.now(), nullable=False,
    )


def upgrade() -> None:
    bind = op.get_bind()
    ENUM(
        "PENDING", "CONFIRMED", "IN_PROGRESS", "COMPLETED", "CANCELLED",
        name="bookingstatus",
    ).create(bind, checkfirst=True)
    ENUM(
        "ACTIVE", "PENDING", "CANCELED", "EXPIRED",
        name="subscriptionstatus",
    ).create(bind, checkfirst=True)

    # --- Services and bookings ---
    op.create_table(
        "services",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        _fk("provider_id", "users.id"),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("category", sa.String(50), nullable=False),
        sa.Column("price", sa.Numeric(10, 2), server_default="0", nullable=False),
        sa.Column("rating", sa.Float(), nullable=True),
        sa.Column("is_active", sa.Boolean(), server_default=sa.text("true"), nullable=False),
        _created_at(),
    )
    op.create_index("ix_services_provider_id", "services", ["provider_id"])

    op.create_table(
        "bookings",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        _fk("service_id", "services.id"),
        _fk("provider_id", "users.id"),
        _fk("customer_id", "users.id"),
        sa.Column(
            "status", ENUM(name="bookingstatus", create_type=False),
            server_default="PENDING", nullable=False,
        ),
        sa.Column("scheduled_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("total_price", sa.Numeric(10, 2), server_default="0", nullable=False),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("rating", sa.Integer(), nullable=True),
        sa.Column("review", sa.Text(), nullable=True),
        _created_at(),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True),
            server_default=sa.func.now(), nullable=False,
        ),
    )
    op.create_index("ix_bookings_service_id", "bookings", ["service_id"])
    op.create_index("ix_bookings_provider_id", "bookings", ["provider_id"])
    op.create_index("ix_bookings_customer_id", "bookings", ["customer_id"])

    # --- Messaging ---
    op.create_table(
        "notifications",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        _fk("user_id", "users.id"),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("type", sa.String(50), server_default="INFO", nullable=False),
        sa.Column("is_read", sa.Boolean(), server_default=sa.text("false"), nullable=False),
        sa.Column("related_entity_id", sa.String(64), nullable=True),
        _created_at(),
    )
    op.create_index("ix_notifications_user_id", "notifications", ["user_id"])

    op.create_table(
        "messages",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        _fk("sender_id", "users.id"),
        _fk("receiver_id", "users.id"),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("is_read", sa.Boolean(), server_default=sa.text("false"), nullable=False),
        _created_at(),
    )
    op.create_index("ix_messages_sender_id", "messages", ["sender_id"])
    op.create_index("ix_messages_receiver_id", "messages", ["receiver_id"])

    # --- Storage ---
    op.create_table(
        "storage_boxes",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("code", sa.String(20), nullable=False, unique=True),
        sa.Column("location", sa.String(255), nullable=False),
        sa.Column("size", sa.String(20), server_default="MEDIUM", nullable=False),
        sa.Column("price_per_day", sa.Numeric(10, 2), server_default="0", nullable=False),
        sa.Column("is_occupied", sa.Boolean(), server_default=sa.text("false"), nullable=False),
    )

    op.create_table(
        "box_rentals",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        _fk("user_id", "users.id"),
        _fk("box_id", "storage_boxes.id"),
        sa.Column(
            "start_date", sa.DateTime(timezone=True),
            server_default=sa.func.now(), nullable=False,
        ),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("total_cost", sa.Numeric(10, 2), nullable=True),
        sa.Column("is_active", sa.Boolean(), server_default=sa.text("true"), nullable=False),
    )
    op.create_index("ix_box_rentals_user_id", "box_rentals", ["user_id"])

    # --- Commerce ---
    op.create_table(
        "products",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        _fk("merchant_id", "users.id"),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("stock", sa.Integer(), server_default="0", nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default=sa.text("true"), nullable=False),
        _created_at(),
    )
    op.create_index("ix_products_merchant_id", "products", ["merchant_id"])

    op.create_table(
        "subscriptions",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        _fk("user_id", "users.id"),
        sa.Column("plan", sa.String(50), nullable=False),
        sa.Column("amount", sa.Numeric(10, 2), server_default="0", nullable=False),
        sa.Column(
            "status", ENUM(name="subscriptionstatus", create_type=False),
            server_default="PENDING", nullable=False,
        ),
        sa.Column("current_period_end", sa.DateTime(timezone=True), nullable=True),
        _created_at(),
    )
    op.create_index("ix_subscriptions_user_id", "subscriptions", ["user_id"])


def downgrade() -> None:
    for table in (
        "subscriptions", "products", "box_rentals", "storage_boxes",
        "messages", "notifications", "bookings", "services",
    ):
        op.drop_table(table)
    bind = op.get_bind()
    ENUM(name="subscriptionstatus").drop(bind, checkfirst=True)
    ENUM(name="bookingstatus").drop(bind, checkfirst=True)
