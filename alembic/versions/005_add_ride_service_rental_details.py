"""add ride details, service description and rental access code

Revision ID: 005
Revises: 004
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa

revision = "005"
down_revision = "004"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.add_column("rides", sa.Column("arrival_time", sa.DateTime(timezone=True), nullable=True))
    op.add_column("rides", sa.Column("vehicle_type", sa.String(50), nullable=True))
    op.add_column("rides", sa.Column("max_weight", sa.Float(), nullable=True))
    op.add_column("rides", sa.Column("description", sa.Text(), nullable=True))

    op.add_column("services", sa.Column("description", sa.Text(), nullable=True))

    op.add_column("box_rentals", sa.Column("access_code", sa.String(20), nullable=True))


def downgrade() -> None:
    op.drop_column("box_rentals", "access_code")
    op.drop_column("services", "description")
    for column in ("description", "max_weight", "vehicle_type", "arrival_time"):
        op.drop_column("rides", column)
