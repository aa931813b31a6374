"""Community Schemas: request bodies for adding and editing directory organizations.

Invariants:
    - Field names are CommunityOrganization attributes; camelCase aliases are what clients send
    - name/type/city stay optional here; the routes report missing or invalid ones with
      their own messages
    - Blank strings count as absent; unknown keys (id, createdAt, ...) are ignored
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class OrganizationFields(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str | None = Field(None, max_length=200)
    type: str | None = None
    city: str | None = Field(None, max_length=100)
    address: str | None = None
    contact_email: str | None = Field(None, alias="contactEmail", max_length=255)
    contact_phone: str | None = Field(None, alias="contactPhone", max_length=50)
    website: str | None = Field(None, max_length=500)
    meeting_schedule: str | None = Field(None, alias="meetingSchedule", max_length=200)
    latitude: float | None = Field(None, ge=-90, le=90)
    longitude: float | None = Field(None, ge=-180, le=180)
    description: str | None = None

    @field_validator(
        "name", "type", "city", "address", "contact_email", "contact_phone",
        "website", "meeting_schedule", "description",
    )
    @classmethod
    def blank_is_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        return v or None


class OrganizationCreate(OrganizationFields):
    """POST /api/community body."""
    focus_areas: list[str] = Field(default_factory=list, alias="focusAreas")
    social_media: dict[str, str] = Field(default_factory=dict, alias="socialMedia")
    is_active: bool = Field(True, alias="isActive")


class OrganizationUpdate(OrganizationFields):
    """PUT /api/community/{id} body; only fields present and non-null are applied."""
    focus_areas: list[str] | None = Field(None, alias="focusAreas")
    social_media: dict[str, str] | None = Field(None, alias="socialMedia")
    is_active: bool | None = Field(None, alias="isActive")
