"""Community organizations (seeded) and representative contact log.

Revision ID: 002_directory_and_contacts
Revises: 001_pothole_reports
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from pothole_api.db.seed import SEED_ORGANIZATIONS

revision: str = "002_directory_and_contacts"
down_revision: Union[str, None] = "001_pothole_reports"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    organizations = op.create_table(
        "community_organizations",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("type", sa.String(20), nullable=False),
        sa.Column("city", sa.String(100), nullable=False),
        sa.Column("address", sa.Text, nullable=True),
        sa.Column("contact_email", sa.String(255), nullable=True),
        sa.Column("contact_phone", sa.String(50), nullable=True),
        sa.Column("website", sa.String(500), nullable=True),
        sa.Column("focus_areas", sa.JSON, nullable=False),
        sa.Column("meeting_schedule", sa.String(200), nullable=True),
        sa.Column("latitude", sa.Float, nullable=True),
        sa.Column("longitude", sa.Float, nullable=True),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("social_media", sa.JSON, nullable=False),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("idx_community_organizations_city", "community_organizations", ["city"])
    op.create_index("idx_community_organizations_type", "community_organizations", ["type"])

    columns = [c.name for c in organizations.columns if c.name not in ("id", "created_at", "updated_at")]
    op.bulk_insert(
        organizations,
        [{column: row.get(column) for column in columns} for row in SEED_ORGANIZATIONS],
    )

    op.create_table(
        "representative_contacts",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("pothole_report_id", sa.String(64), nullable=False),
        sa.Column("representative_name", sa.String(200), nullable=False),
        sa.Column("representative_office", sa.String(200), nullable=False),
        sa.Column("representative_level", sa.String(20), nullable=False),
        sa.Column("contact_type", sa.String(20), nullable=False),
        sa.Column("user_id", sa.Integer, nullable=True),
        sa.Column("message_template_used", sa.Text, nullable=True),
        sa.Column("contact_date", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index(
        "idx_representative_contacts_report",
        "representative_contacts",
        ["pothole_report_id", "contact_date"],
    )


def downgrade() -> None:
    op.drop_index("idx_representative_contacts_report", table_name="representative_contacts")
    op.drop_table("representative_contacts")
    op.drop_index("idx_community_organizations_type", table_name="community_organizations")
    op.drop_index("idx_community_organizations_city", table_name="community_organizations")
    op.drop_table("community_organizations")
