"""Seed Data: the curated community organizations every fresh database starts with.

Invariants:
    - Rows are keyed by CommunityOrganization attribute names; ids come from the database
    - seed_organizations only inserts into an empty table; repeat calls are no-ops

Design Decisions:
    - Shared by migration 002 and initialize_schema so both paths seed identically
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from pothole_api.models.community_organization import CommunityOrganization

logger = logging.getLogger(__name__)

SEED_ORGANIZATIONS: tuple[dict, ...] = (
    {
        "name": "Chi Hack Night",
        "type": "civic_tech",
        "city": "Chicago",
        "address": "222 W Merchandise Mart Plaza, Chicago, IL 60654",
        "website": "https://chihacknight.org",
        "focus_areas": ["civic_tech", "open_data", "civic_engagement"],
        "meeting_schedule": "Tuesdays, 6 PM",
        "latitude": 41.8885,
        "longitude": -87.6354,
        "description": "Weekly civic tech meetup for building technology to improve civic life",
        "social_media": {},
        "is_active": True,
    },
    {
        "name": "Englewood Community Service Center",
        "type": "government",
        "city": "Chicago",
        "address": "1140 W. 79th Street, Chicago, IL 60621",
        "contact_phone": "311",
        "focus_areas": ["social_services", "emergency_assistance"],
        "meeting_schedule": "Monday-Friday, 9 AM - 5 PM",
        "latitude": 41.7505,
        "longitude": -87.6563,
        "description": "DFSS center providing resources and warming/cooling center",
        "social_media": {},
        "is_active": True,
    },
    {
        "name": "NYC Civic Tech",
        "type": "civic_tech",
        "city": "New York",
        "website": "https://nyc.gov/civic-tech",
        "focus_areas": ["civic_tech", "digital_equity", "open_data"],
        "latitude": 40.7128,
        "longitude": -74.0060,
        "description": "Building technology solutions for NYC government and citizens",
        "social_media": {},
        "is_active": True,
    },
)


async def seed_organizations(db: AsyncSession) -> int:
    """Insert SEED_ORGANIZATIONS when the directory is empty; returns rows inserted."""
    existing = await db.execute(select(func.count(CommunityOrganization.id)))
    if existing.scalar_one():
        return 0
    db.add_all(CommunityOrganization(**row) for row in SEED_ORGANIZATIONS)
    await db.commit()
    logger.info(f"Seeded {len(SEED_ORGANIZATIONS)} community organizations")
    return len(SEED_ORGANIZATIONS)
