"""Pothole reports table with location, recency and status indexes.

Revision ID: 001_pothole_reports
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_pothole_reports"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "pothole_reports",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("latitude", sa.Float, nullable=False),
        sa.Column("longitude", sa.Float, nullable=False),
        sa.Column("photo_url", sa.Text, nullable=False),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="new"),
        sa.Column("confirmations", sa.Integer, nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("idx_pothole_reports_location", "pothole_reports", ["latitude", "longitude"])
    op.create_index("idx_pothole_reports_created_at", "pothole_reports", ["created_at"])
    op.create_index("idx_pothole_reports_status", "pothole_reports", ["status"])


def downgrade() -> None:
    op.drop_index("idx_pothole_reports_status", table_name="pothole_reports")
    op.drop_index("idx_pothole_reports_created_at", table_name="pothole_reports")
    op.drop_index("idx_pothole_reports_location", table_name="pothole_reports")
    op.drop_table("pothole_reports")
