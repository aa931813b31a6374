"""Community Routes: organization search, directory, focus areas, recommendations, detail, edits.

Invariants:
    - No read route requires city; absent city echoes "All Cities"
    - type, when given, must be one of the organization types
    - Adding requires name, type and city; editing applies only the fields sent
    - lat/lng must be supplied together; recommendations require both
    - Unknown organization id → 404 "Organization not found" (detail and edit)

Design Decisions:
    - /{organization_id} declared last so fixed paths (directory, focus-areas, ...) win
    - Focus-area listing is the one route allowed two lookups (options + types) in one call
"""

from fastapi import APIRouter, Depends, Query, status

from pothole_api.api.delegation import delegate_call
from pothole_api.api.dependencies import get_community_service
from pothole_api.core.domain_types import OrganizationType
from pothole_api.core.errors import (
    MissingParameterError,
    ParameterValidationError,
    ResourceNotFoundError,
)
from pothole_api.core.query_params import (
    optional_text,
    parse_bounded_int,
    parse_csv_list,
    parse_optional_float,
    parse_optional_int,
)
from pothole_api.core.repository_protocols import CommunityService
from pothole_api.schemas.community import OrganizationCreate, OrganizationUpdate

router = APIRouter(prefix="/api/community", tags=["community"])

ALL_CITIES = "All Cities"
DEFAULT_RADIUS_MILES = 5.0
INVALID_TYPE = "Invalid organization type"
# ids are 32-bit integer keys; anything outside cannot exist
MAX_ORGANIZATION_ID = 2**31 - 1


def _coordinates(
    lat: str | None, lng: str | None,
) -> tuple[float, float] | None:
    latitude = parse_optional_float(lat, "lat", "Invalid coordinates")
    longitude = parse_optional_float(lng, "lng", "Invalid coordinates")
    if latitude is None and longitude is None:
        return None
    if latitude is None or longitude is None:
        raise ParameterValidationError("Invalid coordinates", "lat" if latitude is None else "lng")
    if not (-90 <= latitude <= 90 and -180 <= longitude <= 180):
        raise ParameterValidationError("Invalid coordinates", "lat")
    return latitude, longitude


@router.get("")
async def search_organizations(
    city: str | None = Query(None),
    org_type: str | None = Query(None, alias="type"),
    focus_areas: str | None = Query(None, alias="focusAreas"),
    lat: str | None = Query(None),
    lng: str | None = Query(None),
    radius: str | None = Query(None),
    community: CommunityService = Depends(get_community_service),
):
    """Filter organizations; with lat/lng, only those within `radius` miles."""
    city = optional_text(city)
    org_type = optional_text(org_type)
    _check_type(org_type)
    areas = parse_csv_list(focus_areas)
    location = _coordinates(lat, lng)
    radius_miles = parse_optional_float(radius, "radius", "Invalid radius")
    if radius_miles is not None and radius_miles <= 0:
        raise ParameterValidationError("Invalid radius", "radius")

    async with delegate_call(
        "community.search", "Failed to search organizations", city=city,
    ):
        if location:
            organizations = await community.find_nearby_organizations(
                location[0], location[1], radius_miles or DEFAULT_RADIUS_MILES,
                city=city, org_type=org_type, focus_areas=areas or None,
            )
        else:
            organizations = await community.search_organizations(
                city, org_type, areas,
            )
    return {
        "success": True,
        "data": organizations,
        "count": len(organizations),
        "filters": {
            "city": city,
            "type": org_type,
            "focusAreas": areas,
            "location": (
                {"lat": location[0], "lng": location[1],
                 "radius": radius_miles or DEFAULT_RADIUS_MILES}
                if location else None
            ),
        },
    }


@router.get("/directory")
async def get_organization_directory(
    city: str | None = Query(None),
    community: CommunityService = Depends(get_community_service),
):
    """Directory with per-type and per-focus-area counts."""
    city = optional_text(city)
    async with delegate_call(
        "community.directory", "Failed to fetch organization directory", city=city,
    ):
        directory = await community.get_organization_directory(city)
    return {"success": True, "data": directory, "city": city or ALL_CITIES}


@router.get("/focus-areas")
async def get_focus_areas(
    area: str | None = Query(None),
    city: str | None = Query(None),
    community: CommunityService = Depends(get_community_service),
):
    """Organizations for one focus area, or the focus-area and type vocabularies."""
    area = optional_text(area)
    city = optional_text(city)
    async with delegate_call(
        "community.focus_areas", "Failed to fetch focus area data", city=city,
    ):
        if area:
            organizations = await community.get_organizations_by_focus_area(area, city)
            return {
                "success": True,
                "data": organizations,
                "focusArea": area,
                "city": city or ALL_CITIES,
            }
        options = {
            "focusAreas": community.get_focus_area_options(),
            "organizationTypes": community.get_organization_types(),
        }
    return {"success": True, "data": options}


@router.get("/recommendations")
async def get_recommendations(
    lat: str | None = Query(None),
    lng: str | None = Query(None),
    interests: str | None = Query(None),
    limit: str | None = Query(None),
    community: CommunityService = Depends(get_community_service),
):
    """Nearby organizations ranked by relevance to the caller's interests."""
    location = _coordinates(lat, lng)
    if location is None:
        raise MissingParameterError("Latitude and longitude are required", "lat")
    max_results = parse_bounded_int(
        limit, "limit", default=5, minimum=1, maximum=20,
        message="Limit must be between 1 and 20",
    )
    async with delegate_call(
        "community.recommendations", "Failed to fetch recommendations",
    ):
        organizations = await community.get_recommended_organizations(
            location[0], location[1], parse_csv_list(interests), max_results,
        )
    return {"success": True, "data": organizations, "count": len(organizations)}


def _organization_id(raw: str) -> int:
    parsed = parse_optional_int(raw, "id", "Invalid organization ID")
    if parsed is None:
        raise ParameterValidationError("Invalid organization ID", "id")
    if not 1 <= parsed <= MAX_ORGANIZATION_ID:
        raise ResourceNotFoundError("Organization", raw)
    return parsed


def _check_type(org_type: str | None) -> None:
    if org_type is not None and org_type not in {t.value for t in OrganizationType}:
        raise ParameterValidationError(INVALID_TYPE, "type")


@router.post("", status_code=status.HTTP_201_CREATED)
async def add_organization(
    body: OrganizationCreate,
    community: CommunityService = Depends(get_community_service),
):
    if not (body.name and body.type and body.city):
        raise MissingParameterError("Name, type, and city are required fields", "name")
    _check_type(body.type)
    async with delegate_call(
        "community.create", "Failed to add organization", city=body.city,
    ):
        organization = await community.create_organization(
            body.model_dump(exclude_none=True),
        )
    return {
        "success": True,
        "data": organization,
        "message": "Organization added successfully",
    }


@router.put("/{organization_id}")
async def update_organization(
    organization_id: str,
    body: OrganizationUpdate,
    community: CommunityService = Depends(get_community_service),
):
    """Apply the fields sent; id and timestamps in the body are ignored."""
    parsed = _organization_id(organization_id)
    fields = body.model_dump(exclude_unset=True, exclude_none=True)
    if not fields:
        raise ParameterValidationError("No valid fields to update", "body")
    _check_type(fields.get("type"))
    async with delegate_call("community.update", "Failed to update organization"):
        organization = await community.update_organization(parsed, fields)
        if organization is None:
            raise ResourceNotFoundError("Organization", str(parsed))
    return {
        "success": True,
        "data": organization,
        "message": "Organization updated successfully",
    }


@router.get("/{organization_id}")
async def get_organization(
    organization_id: str,
    community: CommunityService = Depends(get_community_service),
):
    parsed = _organization_id(organization_id)
    async with delegate_call("community.detail", "Failed to fetch organization"):
        organization = await community.get_organization(parsed)
        if organization is None:
            raise ResourceNotFoundError("Organization", str(parsed))
    return {"success": True, "data": organization}
