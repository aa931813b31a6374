"""Community Organizations Service: directory search, counts, proximity and edits over SQLite."""

import pytest
from sqlalchemy import select

from pothole_api.db.seed import SEED_ORGANIZATIONS
from pothole_api.models.community_organization import CommunityOrganization
from pothole_api.services.community_organizations import (
    CommunityOrganizationsService,
    relevance_score,
)

LOOP = (41.8781, -87.6298)


@pytest.fixture
async def service(test_db, seeded_directory):
    return CommunityOrganizationsService(test_db)


async def test_directory_for_chicago(service):
    directory = await service.get_organization_directory("chicago")
    assert directory["totalCount"] == 2
    assert directory["filterCounts"] == {
        "government": 1, "nonprofit": 0, "civic_tech": 1, "advocacy": 0,
    }
    assert directory["focusAreaCounts"]["civic_tech"] == 1
    assert "housing" not in directory["focusAreaCounts"]


async def test_directory_for_unknown_city_gets_generic_center(service):
    directory = await service.get_organization_directory("Springfield")
    assert directory["totalCount"] == 1
    assert directory["organizations"][0]["name"] == "Springfield Community Center"
    assert directory["organizations"][0]["id"] == 999


async def test_directory_without_city_lists_everything(service):
    directory = await service.get_organization_directory(None)
    assert directory["totalCount"] == len(SEED_ORGANIZATIONS)


async def test_focus_area_filter(service):
    orgs = await service.get_organizations_by_focus_area("open_data", None)
    assert [o["name"] for o in orgs] == ["Chi Hack Night", "NYC Civic Tech"]


async def test_vocabularies(service):
    assert len(service.get_focus_area_options()) == 15
    assert service.get_organization_types() == [
        "government", "nonprofit", "civic_tech", "advocacy",
    ]


async def test_search_by_type_and_city(service):
    orgs = await service.search_organizations("Chicago", "government", [])
    assert [o["id"] for o in orgs] == [2]


async def test_nearby_sorted_by_distance(service):
    orgs = await service.find_nearby_organizations(*LOOP, 20)
    assert [o["id"] for o in orgs] == [1, 2]
    assert orgs[0]["distance"] < orgs[1]["distance"]
    assert "relevanceScore" in orgs[0]


async def test_nearby_respects_radius(service):
    orgs = await service.find_nearby_organizations(*LOOP, 1)
    assert [o["id"] for o in orgs] == [1]


async def test_recommendations_limit(service):
    orgs = await service.get_recommended_organizations(*LOOP, [], 1)
    assert len(orgs) == 1


async def test_recommendations_filter_by_interest(service):
    orgs = await service.get_recommended_organizations(*LOOP, ["social_services"], 5)
    assert [o["id"] for o in orgs] == [2]


async def test_get_organization(service):
    org = await service.get_organization(1)
    assert org["name"] == "Chi Hack Night"
    assert org["focusAreas"] == ["civic_tech", "open_data", "civic_engagement"]
    assert org["socialMedia"] == {}
    assert org["createdAt"].endswith("+00:00")
    assert await service.get_organization(42) is None


async def test_create_organization_joins_directory(service):
    created = await service.create_organization({
        "name": "Pilsen Road Watch",
        "type": "advocacy",
        "city": "Chicago",
        "focus_areas": ["infrastructure", "transportation"],
        "social_media": {"twitter": "@pilsenroads"},
        "is_active": True,
    })
    assert created["id"] == 4
    assert created["socialMedia"] == {"twitter": "@pilsenroads"}
    directory = await service.get_organization_directory("Chicago")
    assert directory["totalCount"] == 3
    assert directory["filterCounts"]["advocacy"] == 1
    assert directory["focusAreaCounts"]["infrastructure"] == 1


async def test_update_organization_applies_only_given_fields(service, test_db):
    before = await service.get_organization(3)
    updated = await service.update_organization(
        3, {"contact_email": "hello@nyc.gov", "focus_areas": ["open_data"]},
    )
    assert updated["contactEmail"] == "hello@nyc.gov"
    assert updated["focusAreas"] == ["open_data"]
    assert updated["name"] == before["name"]
    assert updated["website"] == before["website"]
    stored = await test_db.scalar(
        select(CommunityOrganization.contact_email).where(CommunityOrganization.id == 3),
    )
    assert stored == "hello@nyc.gov"


async def test_update_unknown_organization_returns_none(service):
    assert await service.update_organization(42, {"name": "Ghost"}) is None


async def test_deactivated_organization_leaves_listings(service):
    await service.update_organization(1, {"is_active": False})
    orgs = await service.search_organizations("Chicago", None, [])
    assert [o["id"] for o in orgs] == [2]
    assert (await service.get_organization(1))["isActive"] is False


def test_relevance_score_is_capped():
    org = {
        "type": "civic_tech",
        "focusAreas": ["civic_engagement", "infrastructure", "open_data"],
        "description": "x", "website": "x", "contactEmail": "x", "meetingSchedule": "x",
    }
    assert relevance_score(org, "civic_tech", ["infrastructure", "open_data"]) == 100
    assert relevance_score({"focusAreas": []}) == 50
