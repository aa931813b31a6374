"""Boundary Protocols: contracts between the gateway and its delegates.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - Every delegate a route calls is typed by one of these Protocols
    - Implementations provided by shell via FastAPI dependency injection (api/dependencies.py)
    - Payloads cross the boundary as plain dicts/lists, JSON-ready

Design Decisions:
    - Protocol over ABC: structural subtyping, so test doubles need no inheritance
    - Async where implementations may do IO; vocabulary lookups stay sync
"""

from datetime import datetime
from typing import Protocol


class ReportRepository(Protocol):
    """Contract for pothole report persistence."""
    async def get_all_reports(self) -> list[dict]: ...
    async def find_nearby_reports(
        self, latitude: float, longitude: float, radius_meters: float,
    ) -> list[dict]: ...
    async def create_report(
        self,
        latitude: float,
        longitude: float,
        photo_url: str,
        notes: str | None,
        duplicate_radius_meters: int | None = None,
    ) -> dict: ...
    async def confirm_report(self, report_id: str) -> dict: ...
    async def get_report_counts(self) -> dict: ...
    async def count_reports(self, status: str | None = None) -> int: ...
    async def get_hotspots(self, min_reports: int, limit: int) -> list[dict]: ...


class SchemaInitializer(Protocol):
    """Contract for creating the reports schema."""
    async def initialize_schema(self) -> bool: ...


class BudgetService(Protocol):
    async def fetch_budget_data(self, city: str, fiscal_year: int) -> list[dict]: ...
    async def refresh_budget_data(self, city: str, fiscal_year: int) -> bool: ...
    async def get_budget_summary(self, city: str, fiscal_year: int) -> dict: ...
    async def calculate_cost_analysis(
        self, city: str, ward_district: str | None,
    ) -> dict: ...


class PerformanceService(Protocol):
    async def fetch_city_performance_data(
        self, city: str, start_date: datetime | None, end_date: datetime | None,
    ) -> list[dict]: ...
    async def generate_accountability_alerts(self, city: str) -> list[dict]: ...
    async def generate_performance_report(
        self, city: str, ward_district: str | None, period: str | None,
    ) -> dict: ...
    async def get_seasonal_patterns(self, city: str, metric: str) -> list[dict]: ...


class WeatherService(Protocol):
    async def fetch_weather_data(
        self, city: str, start_date: datetime | None, end_date: datetime | None,
    ) -> list[dict]: ...
    async def calculate_weather_correlation(self, city: str) -> dict: ...
    async def get_freeze_thaw_cycles(self, city: str, days: int) -> list[dict]: ...
    async def generate_pothole_predictions(self, city: str, limit: int) -> list[dict]: ...
    async def generate_weather_alerts(self, city: str) -> list[dict]: ...


class CommunityService(Protocol):
    async def get_organization_directory(self, city: str | None) -> dict: ...
    async def get_organizations_by_focus_area(
        self, focus_area: str, city: str | None,
    ) -> list[dict]: ...
    def get_focus_area_options(self) -> list[str]: ...
    def get_organization_types(self) -> list[str]: ...
    async def search_organizations(
        self, city: str | None, org_type: str | None, focus_areas: list[str],
    ) -> list[dict]: ...
    async def find_nearby_organizations(
        self,
        latitude: float,
        longitude: float,
        radius_miles: float,
        city: str | None = None,
        org_type: str | None = None,
        focus_areas: list[str] | None = None,
    ) -> list[dict]: ...
    async def get_recommended_organizations(
        self, latitude: float, longitude: float, interests: list[str], limit: int,
    ) -> list[dict]: ...
    async def get_organization(self, organization_id: int) -> dict | None: ...
    async def create_organization(self, fields: dict) -> dict: ...
    async def update_organization(
        self, organization_id: int, fields: dict,
    ) -> dict | None: ...


class RepresentativeService(Protocol):
    async def find_representatives(
        self, latitude: float, longitude: float,
    ) -> list[dict]: ...
    async def save_contact_record(
        self,
        pothole_report_id: str,
        representative: dict,
        contact_type: str,
        user_id: int | None = None,
        message_template_used: str | None = None,
    ) -> dict: ...
    async def get_contact_history(self, pothole_report_id: str) -> list[dict]: ...
