"""Community Organizations Service: directory of civic groups with search, recommendations and edits.

Invariants:
    - Listings include active organizations only; detail lookups return any stored row
    - City matching is case-insensitive
    - A city with no active organizations gets one generic "<City> Community Center" entry
    - Relevance score starts at 50 and is capped at 100
    - Distances are miles (haversine, R = 3959), nearest first

Design Decisions:
    - Rows stored in community_organizations (seeded from db/seed.py); filtering runs in
      Python over the loaded directory, which stays small
    - Writes take attribute-keyed dicts already validated by the route schemas
    - Recommendations rank by relevance - 0.1 * distance within a fixed 10-mile radius
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pothole_api.core.breakdowns import count_by, organization_type_breakdown
from pothole_api.core.domain_types import FOCUS_AREAS, OrganizationType
from pothole_api.core.geo import EARTH_RADIUS_MILES, haversine
from pothole_api.models.community_organization import CommunityOrganization

logger = logging.getLogger(__name__)

RECOMMENDATION_RADIUS_MILES = 10.0
NEARBY_RESULT_LIMIT = 20
GENERIC_ORGANIZATION_ID = 999


def generic_organization(city: str) -> dict:
    return {
        "id": GENERIC_ORGANIZATION_ID,
        "name": f"{city} Community Center",
        "type": OrganizationType.GOVERNMENT.value,
        "city": city,
        "contactPhone": "311",
        "focusAreas": ["social_services", "community_development"],
        "description": "Local community services and resources",
        "isActive": True,
    }


def relevance_score(
    organization: dict, org_type: str | None = None, focus_areas: list[str] | None = None,
) -> int:
    score = 50
    org_areas = organization.get("focusAreas") or []
    if org_type and organization.get("type") == org_type:
        score += 20
    if focus_areas:
        score += 15 * sum(1 for area in focus_areas if area in org_areas)
    for field in ("description", "website", "contactEmail", "meetingSchedule"):
        if organization.get(field):
            score += 5
    if "civic_engagement" in org_areas:
        score += 10
    if "infrastructure" in org_areas:
        score += 15
    return min(score, 100)


def _matches(
    organization: dict,
    city: str | None,
    org_type: str | None,
    focus_areas: list[str] | None,
) -> bool:
    if not organization.get("isActive", True):
        return False
    if city and organization["city"].lower() != city.lower():
        return False
    if org_type and organization["type"] != org_type:
        return False
    if focus_areas and not set(focus_areas) & set(organization.get("focusAreas") or []):
        return False
    return True


class CommunityOrganizationsService:
    """CommunityService over the community_organizations table."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def _select(
        self,
        city: str | None = None,
        org_type: str | None = None,
        focus_areas: list[str] | None = None,
    ) -> list[dict]:
        result = await self._db.execute(
            select(CommunityOrganization).order_by(CommunityOrganization.id),
        )
        organizations = (org.to_dict() for org in result.scalars().all())
        return [
            org for org in organizations
            if _matches(org, city, org_type, focus_areas)
        ]

    async def get_organization_directory(self, city: str | None) -> dict:
        organizations = await self._select(city=city)
        if city and not organizations:
            organizations = [generic_organization(city)]
        organizations.sort(key=lambda o: o["name"])

        area_counts = count_by(
            ({"area": area} for o in organizations for area in o["focusAreas"]),
            "area",
            FOCUS_AREAS,
        )
        return {
            "organizations": organizations,
            "totalCount": len(organizations),
            "filterCounts": organization_type_breakdown(organizations),
            "focusAreaCounts": {k: v for k, v in area_counts.items() if v},
        }

    async def get_organizations_by_focus_area(
        self, focus_area: str, city: str | None,
    ) -> list[dict]:
        return sorted(
            await self._select(city=city, focus_areas=[focus_area]),
            key=lambda o: o["name"],
        )

    def get_focus_area_options(self) -> list[str]:
        return list(FOCUS_AREAS)

    def get_organization_types(self) -> list[str]:
        return [t.value for t in OrganizationType]

    async def search_organizations(
        self, city: str | None, org_type: str | None, focus_areas: list[str],
    ) -> list[dict]:
        return sorted(
            await self._select(city, org_type, focus_areas), key=lambda o: o["name"],
        )

    async def find_nearby_organizations(
        self,
        latitude: float,
        longitude: float,
        radius_miles: float,
        city: str | None = None,
        org_type: str | None = None,
        focus_areas: list[str] | None = None,
    ) -> list[dict]:
        nearby = []
        for org in await self._select(city, org_type, focus_areas):
            if org.get("latitude") is None or org.get("longitude") is None:
                continue
            distance = haversine(
                latitude, longitude, org["latitude"], org["longitude"],
                radius=EARTH_RADIUS_MILES,
            )
            if distance > radius_miles:
                continue
            org["distance"] = round(distance, 2)
            org["relevanceScore"] = relevance_score(org, org_type, focus_areas)
            nearby.append(org)
        nearby.sort(key=lambda o: o["distance"])
        return nearby[:NEARBY_RESULT_LIMIT]

    async def get_recommended_organizations(
        self, latitude: float, longitude: float, interests: list[str], limit: int,
    ) -> list[dict]:
        nearby = await self.find_nearby_organizations(
            latitude, longitude, RECOMMENDATION_RADIUS_MILES,
            focus_areas=interests or None,
        )
        nearby.sort(
            key=lambda o: o["relevanceScore"] - o["distance"] * 0.1, reverse=True,
        )
        return nearby[:limit]

    async def get_organization(self, organization_id: int) -> dict | None:
        org = await self._db.get(CommunityOrganization, organization_id)
        return org.to_dict() if org else None

    async def create_organization(self, fields: dict) -> dict:
        """Insert an organization; `fields` are CommunityOrganization attributes."""
        org = CommunityOrganization(**fields)
        self._db.add(org)
        await self._db.commit()
        await self._db.refresh(org)
        logger.info(
            f"Organization added: {org.name}",
            extra={"organization_id": org.id, "city": org.city},
        )
        return org.to_dict()

    async def update_organization(
        self, organization_id: int, fields: dict,
    ) -> dict | None:
        """Apply `fields` to a stored organization; None when the id is unknown."""
        org = await self._db.get(CommunityOrganization, organization_id)
        if org is None:
            return None
        for attribute, value in fields.items():
            setattr(org, attribute, value)
        org.updated_at = datetime.now(timezone.utc)
        await self._db.commit()
        await self._db.refresh(org)
        logger.info(
            f"Organization updated: {sorted(fields)}",
            extra={"organization_id": organization_id},
        )
        return org.to_dict()
