"""Representative Lookup Service: officials to contact about a pothole, and the log of contacts made.

Invariants:
    - Lookup is a pure function of the coordinates: same point, same representatives
    - Chicago points get their ward alderman, the mayor and 311; New York points the
      mayor and 311; anywhere else one generic city-council entry
    - Every representative carries name, office, level, contactMethods and messageTemplate
    - Contact history is newest first and scoped to one report id

Design Decisions:
    - Baseline city tables instead of a civic-data API: deterministic delegate, a live
      directory plugs in behind RepresentativeService
    - Ward number derived from the coordinates' 0.01° cell so a spot keeps its alderman
    - Letters addressed by office keyword ("Mayor Johnson", "Alderman ..."), falling
      back to the full name
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pothole_api.core.domain_types import ContactMethodType, RepresentativeLevel
from pothole_api.models.representative_contact import RepresentativeContact

logger = logging.getLogger(__name__)

CHICAGO = "Chicago"
NEW_YORK = "New York"
UNKNOWN_CITY = "Unknown"
CHICAGO_WARDS = 50

# city -> (min_lat, max_lat, min_lng, max_lng)
CITY_BOUNDS: dict[str, tuple[float, float, float, float]] = {
    CHICAGO: (41.6, 42.1, -87.9, -87.5),
    NEW_YORK: (40.4, 40.9, -74.3, -73.7),
}

SERVICE_LINE_OFFICE = "City Services Request Line"
SERVICE_LINE_MESSAGE = (
    "Please report this pothole through the 311 system for tracking and resolution."
)
GENERIC_MESSAGE = (
    "Please contact your local city services to report this infrastructure issue."
)

# office keyword -> salutation prefix; first match wins
SALUTATIONS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("mayor",), "Mayor"),
    (("governor",), "Governor"),
    (("senator",), "Senator"),
    (("representative", "congressman", "congresswoman"), "Representative"),
    (("alderman", "alderwoman"), "Alderman"),
    (("council",), "Council Member"),
)

LETTER_BODY = """I am writing to bring to your attention a pothole issue in our community that requires immediate attention. This infrastructure problem poses a safety risk to residents and visitors in your district.

Location Details:
[Location will be automatically filled]

Issue Description:
[Issue details will be automatically filled]

As a constituent, I respectfully request that you:
1. Prioritize this repair in the city's maintenance schedule
2. Provide a timeline for resolution
3. Consider increased funding for preventive road maintenance

This issue affects the daily lives of your constituents and reflects on our community's infrastructure standards. Your prompt attention to this matter would be greatly appreciated.

Thank you for your service and consideration.

Sincerely,
[Your name will be automatically filled]
[Your address will be automatically filled]"""


def city_for_coordinates(latitude: float, longitude: float) -> str:
    for city, (min_lat, max_lat, min_lng, max_lng) in CITY_BOUNDS.items():
        if min_lat <= latitude <= max_lat and min_lng <= longitude <= max_lng:
            return city
    return UNKNOWN_CITY


def ward_for_coordinates(latitude: float, longitude: float) -> int:
    """Chicago ward (1-50) for a point, stable within each 0.01° cell."""
    cell = round(latitude * 100) * 1000 + round(longitude * 100)
    return cell % CHICAGO_WARDS + 1


def salutation(name: str, office: str) -> str:
    office_lower = office.lower()
    surname = name.split()[-1] if name.split() else name
    for keywords, title in SALUTATIONS:
        if any(keyword in office_lower for keyword in keywords):
            return f"{title} {surname}"
    return name


def message_template(name: str, office: str) -> str:
    return f"Dear {salutation(name, office)},\n\n{LETTER_BODY}"


def _method(kind: ContactMethodType, value: str, label: str) -> dict:
    return {"type": kind.value, "value": value, "label": label}


def _representative(
    name: str, office: str, methods: list[dict], template: str | None = None,
) -> dict:
    return {
        "name": name,
        "office": office,
        "level": RepresentativeLevel.LOCAL.value,
        "contactMethods": methods,
        "messageTemplate": template or message_template(name, office),
    }


def chicago_representatives(latitude: float, longitude: float) -> list[dict]:
    ward = ward_for_coordinates(latitude, longitude)
    return [
        _representative(f"Ward {ward} Alderman", f"Alderman, Ward {ward}", [
            _method(ContactMethodType.EMAIL, f"ward{ward}@cityofchicago.org", "Official Email"),
            _method(ContactMethodType.PHONE, "312-744-3000", "Office Phone"),
        ]),
        _representative("Brandon Johnson", "Mayor of Chicago", [
            _method(ContactMethodType.PHONE, "312-744-3300", "Mayor's Office"),
            _method(ContactMethodType.EMAIL, "mayor@cityofchicago.org", "Official Email"),
            _method(
                ContactMethodType.MAIL,
                "Office of the Mayor, City Hall, 121 N. LaSalle St., Room 507, Chicago, IL 60602",
                "City Hall",
            ),
        ]),
        _representative("Chicago 311", SERVICE_LINE_OFFICE, [
            _method(ContactMethodType.PHONE, "311", "311 Service Line"),
            _method(ContactMethodType.EMAIL, "311@cityofchicago.org", "311 Email"),
        ], SERVICE_LINE_MESSAGE),
    ]


def new_york_representatives() -> list[dict]:
    return [
        _representative("Eric Adams", "Mayor of New York City", [
            _method(ContactMethodType.PHONE, "212-639-9675", "Mayor's Office"),
            _method(
                ContactMethodType.MAIL,
                "Office of the Mayor, City Hall, New York, NY 10007",
                "City Hall",
            ),
        ]),
        _representative("NYC 311", SERVICE_LINE_OFFICE, [
            _method(ContactMethodType.PHONE, "311", "311 Service Line"),
        ], SERVICE_LINE_MESSAGE),
    ]


def generic_representatives(city: str) -> list[dict]:
    return [
        _representative("Local Representative", f"{city} City Council", [
            _method(ContactMethodType.PHONE, "311", "City Services"),
        ], GENERIC_MESSAGE),
    ]


class RepresentativeLookupService:
    """RepresentativeService over the baseline city tables and representative_contacts."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def find_representatives(self, latitude: float, longitude: float) -> list[dict]:
        city = city_for_coordinates(latitude, longitude)
        if city == CHICAGO:
            representatives = chicago_representatives(latitude, longitude)
        elif city == NEW_YORK:
            representatives = new_york_representatives()
        else:
            representatives = generic_representatives(city)
        logger.info(f"{len(representatives)} representatives found", extra={"city": city})
        return representatives

    async def save_contact_record(
        self,
        pothole_report_id: str,
        representative: dict,
        contact_type: str,
        user_id: int | None = None,
        message_template_used: str | None = None,
    ) -> dict:
        """Log one contact; the template defaults to the representative's own."""
        record = RepresentativeContact(
            pothole_report_id=pothole_report_id,
            representative_name=representative["name"],
            representative_office=representative["office"],
            representative_level=representative.get("level") or RepresentativeLevel.LOCAL.value,
            contact_type=contact_type,
            user_id=user_id,
            message_template_used=message_template_used or representative.get("messageTemplate"),
        )
        self._db.add(record)
        await self._db.commit()
        await self._db.refresh(record)
        logger.info(
            f"Contact logged with {record.representative_name} via {contact_type}",
            extra={"report_id": pothole_report_id},
        )
        return record.to_dict()

    async def get_contact_history(self, pothole_report_id: str) -> list[dict]:
        result = await self._db.execute(
            select(RepresentativeContact)
            .where(RepresentativeContact.pothole_report_id == pothole_report_id)
            .order_by(
                RepresentativeContact.contact_date.desc(),
                RepresentativeContact.id.desc(),
            ),
        )
        return [record.to_dict() for record in result.scalars().all()]
