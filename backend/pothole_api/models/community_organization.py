"""CommunityOrganization ORM: one civic group in the community directory.

Invariants:
    - id is an integer assigned by the database
    - type in {government, nonprofit, civic_tech, advocacy}
    - focus_areas is always a list and social_media always a dict (never NULL)
    - Inactive rows stay stored but drop out of every listing

Design Decisions:
    - focus_areas/social_media as JSON: portable across PostgreSQL and SQLite and
      filtered in Python, so no array operators are needed
    - to_dict emits the camelCase keys the directory clients consume
"""

from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, DateTime, Float, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from pothole_api.db.base import Base

# attribute -> JSON key; also the set of fields a client may write
API_FIELDS: dict[str, str] = {
    "name": "name",
    "type": "type",
    "city": "city",
    "address": "address",
    "contact_email": "contactEmail",
    "contact_phone": "contactPhone",
    "website": "website",
    "focus_areas": "focusAreas",
    "meeting_schedule": "meetingSchedule",
    "latitude": "latitude",
    "longitude": "longitude",
    "description": "description",
    "social_media": "socialMedia",
    "is_active": "isActive",
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CommunityOrganization(Base):
    __tablename__ = "community_organizations"
    __table_args__ = (
        Index("idx_community_organizations_city", "city"),
        Index("idx_community_organizations_type", "type"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    contact_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    contact_phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    website: Mapped[str | None] = mapped_column(String(500), nullable=True)
    focus_areas: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    meeting_schedule: Mapped[str | None] = mapped_column(String(200), nullable=True)
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    social_media: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )

    def to_dict(self) -> dict:
        data = {"id": self.id}
        for attribute, key in API_FIELDS.items():
            data[key] = getattr(self, attribute)
        data["focusAreas"] = list(self.focus_areas or [])
        data["socialMedia"] = dict(self.social_media or {})
        data["createdAt"] = _aware(self.created_at).isoformat()
        data["updatedAt"] = _aware(self.updated_at).isoformat()
        return data


def _aware(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
