"""RepresentativeContact ORM: a citizen's record of contacting an official about a report.

Invariants:
    - Append-only: rows are never updated or deleted by the API
    - pothole_report_id is stored as sent; history lookups match it exactly
    - contact_date defaults to insert time

Design Decisions:
    - No foreign key to pothole_reports: clients log contacts for ids issued by
      other deployments too, and history must still answer for them
    - to_dict keeps the snake_case column names, like pothole reports
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from pothole_api.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RepresentativeContact(Base):
    __tablename__ = "representative_contacts"
    __table_args__ = (
        Index("idx_representative_contacts_report", "pothole_report_id", "contact_date"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    pothole_report_id: Mapped[str] = mapped_column(String(64), nullable=False)
    representative_name: Mapped[str] = mapped_column(String(200), nullable=False)
    representative_office: Mapped[str] = mapped_column(String(200), nullable=False)
    representative_level: Mapped[str] = mapped_column(String(20), nullable=False)
    contact_type: Mapped[str] = mapped_column(String(20), nullable=False)
    user_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    message_template_used: Mapped[str | None] = mapped_column(Text, nullable=True)
    contact_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )

    def to_dict(self) -> dict:
        contact_date = self.contact_date
        if contact_date.tzinfo is None:
            contact_date = contact_date.replace(tzinfo=timezone.utc)
        return {
            "id": self.id,
            "pothole_report_id": self.pothole_report_id,
            "representative_name": self.representative_name,
            "representative_office": self.representative_office,
            "representative_level": self.representative_level,
            "contact_type": self.contact_type,
            "user_id": self.user_id,
            "message_template_used": self.message_template_used,
            "contact_date": contact_date.isoformat(),
        }
