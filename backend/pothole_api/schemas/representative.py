"""Representative Schemas: request body for logging a contact with an official.

Invariants:
    - potholeReportId, representative and contactType stay optional here; the route
      reports any missing one with a single message naming all three
    - contactType must be one of email, phone, mail, social
"""

from pydantic import BaseModel, ConfigDict, Field

from pothole_api.core.domain_types import ContactMethodType, RepresentativeLevel


class RepresentativeRef(BaseModel):
    """The representative as returned by GET /api/representatives."""
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(min_length=1, max_length=200)
    office: str = Field(min_length=1, max_length=200)
    level: RepresentativeLevel = RepresentativeLevel.LOCAL
    message_template: str | None = Field(None, alias="messageTemplate")


class ContactRecordCreate(BaseModel):
    """POST /api/representatives body."""
    model_config = ConfigDict(populate_by_name=True)

    pothole_report_id: str | None = Field(None, alias="potholeReportId", max_length=64)
    representative: RepresentativeRef | None = None
    contact_type: ContactMethodType | None = Field(None, alias="contactType")
    user_id: int | None = Field(None, alias="userId")
    message_template: str | None = Field(None, alias="messageTemplate")
