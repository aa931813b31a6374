"""Report Schemas: request body for creating a pothole report.

Invariants:
    - latitude in [-90, 90], longitude in [-180, 180]
    - photoUrl non-empty; notes at most 500 chars, stripped, blank -> None
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ReportCreate(BaseModel):
    """POST /api/reports body; the photo is uploaded beforehand and referenced by URL."""
    model_config = ConfigDict(populate_by_name=True)

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    photo_url: str = Field(alias="photoUrl", min_length=1, max_length=2048)
    notes: str | None = Field(None, max_length=500)

    @field_validator("notes")
    @classmethod
    def strip_notes(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        return v or None
