"""ORM Models: SQLAlchemy declarative models for persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Persisted: pothole reports, the community directory, representative contact logs;
      budget, performance and weather data come from services

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all or autogenerate
"""

from pothole_api.models.community_organization import CommunityOrganization  # noqa: F401
from pothole_api.models.pothole_report import PotholeReport  # noqa: F401
from pothole_api.models.representative_contact import RepresentativeContact  # noqa: F401
