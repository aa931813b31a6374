"""Dependency Providers: build each request's delegates for FastAPI Depends.

Invariants:
    - Routes receive services only through these providers (no imported singletons)
    - DB-backed delegates share the request's AsyncSession from get_db
    - Tests swap any provider via app.dependency_overrides

Design Decisions:
    - Plain functions over a container: one override point per delegate, nothing global to reset
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from pothole_api.core.repository_protocols import (
    BudgetService,
    CommunityService,
    PerformanceService,
    ReportRepository,
    RepresentativeService,
    SchemaInitializer,
    WeatherService,
)
from pothole_api.infrastructure.database import get_db, get_db_manager
from pothole_api.services.budget_data import BudgetDataService
from pothole_api.services.community_organizations import CommunityOrganizationsService
from pothole_api.services.performance_tracking import PerformanceTrackingService
from pothole_api.services.report_repository import SqlReportRepository
from pothole_api.services.representative_lookup import RepresentativeLookupService
from pothole_api.services.weather_correlation import WeatherCorrelationService


def get_report_repository(db: AsyncSession = Depends(get_db)) -> ReportRepository:
    return SqlReportRepository(db)


def get_budget_service(
    reports: ReportRepository = Depends(get_report_repository),
) -> BudgetService:
    return BudgetDataService(reports)


def get_performance_service() -> PerformanceService:
    return PerformanceTrackingService()


def get_weather_service(
    reports: ReportRepository = Depends(get_report_repository),
) -> WeatherService:
    return WeatherCorrelationService(reports)


def get_community_service(db: AsyncSession = Depends(get_db)) -> CommunityService:
    return CommunityOrganizationsService(db)


def get_representative_service(
    db: AsyncSession = Depends(get_db),
) -> RepresentativeService:
    return RepresentativeLookupService(db)


def get_schema_initializer() -> SchemaInitializer:
    return get_db_manager()
