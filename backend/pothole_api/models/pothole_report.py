"""PotholeReport ORM: one citizen-submitted pothole sighting.

Invariants:
    - id is UUID primary key (client never supplies it)
    - status in {new, confirmed, fixed}; defaults to new
    - confirmations only ever increases (confirm re-applies, never resets)
    - updated_at moves on every mutation

Design Decisions:
    - Float coordinates over DECIMAL: proximity math happens in Python, SQLite-compatible
    - Location/created_at/status indexes mirror the hot query paths (nearby, newest, stats)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, Integer, Float, DateTime, Index
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from pothole_api.core.domain_types import ReportStatus
from pothole_api.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PotholeReport(Base):
    """A reported pothole at a coordinate, with a photo."""
    __tablename__ = "pothole_reports"
    __table_args__ = (
        Index("idx_pothole_reports_location", "latitude", "longitude"),
        Index("idx_pothole_reports_created_at", "created_at"),
        Index("idx_pothole_reports_status", "status"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
    photo_url: Mapped[str] = mapped_column(Text, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=ReportStatus.NEW.value,
    )
    confirmations: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )

    def to_dict(self, distance_meters: float | None = None) -> dict:
        """Serialize with the snake_case keys clients already consume."""
        data = {
            "id": str(self.id),
            "latitude": self.latitude,
            "longitude": self.longitude,
            "photo_url": self.photo_url,
            "notes": self.notes,
            "status": self.status,
            "confirmations": self.confirmations,
            "created_at": _aware(self.created_at).isoformat(),
            "updated_at": _aware(self.updated_at).isoformat(),
        }
        if distance_meters is not None:
            data["distance_meters"] = round(distance_meters, 2)
        return data


def _aware(value: datetime) -> datetime:
    # SQLite drops tzinfo on read
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
