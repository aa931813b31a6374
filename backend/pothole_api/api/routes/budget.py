"""Budget Routes: budget rows, refresh, cost analysis and summary per city.

Invariants:
    - city is required on every route; missing → 400 before the service is touched
    - fiscalYear must parse as an integer; absent → current calendar year
    - Delegate failures → 500 with a route-specific message (see api/delegation.py)

Design Decisions:
    - Refresh is a POST with a JSON body; repeating it re-fetches (safe to retry)
    - fiscalYear read as raw string so the error message names the parameter
"""

import logging

from fastapi import APIRouter, Depends, Query

from pothole_api.api.delegation import delegate_call
from pothole_api.api.dependencies import get_budget_service
from pothole_api.core.query_params import (
    current_fiscal_year,
    optional_text,
    parse_optional_int,
    require_city,
    require_text,
)
from pothole_api.core.repository_protocols import BudgetService
from pothole_api.schemas.budget import BudgetRefreshRequest

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/budget", tags=["budget"])

INVALID_FISCAL_YEAR = "Invalid fiscal year"


def _fiscal_year(raw: str | None) -> int:
    year = parse_optional_int(raw, "fiscalYear", INVALID_FISCAL_YEAR)
    return current_fiscal_year() if year is None else year


@router.get("")
async def get_budget_data(
    city: str | None = Query(None),
    fiscal_year: str | None = Query(None, alias="fiscalYear"),
    budget: BudgetService = Depends(get_budget_service),
):
    """Budget allocations for a city and fiscal year."""
    city = require_city(city)
    year = _fiscal_year(fiscal_year)
    async with delegate_call("budget", "Failed to fetch budget data", city=city):
        data = await budget.fetch_budget_data(city, year)
    return {"success": True, "data": data, "city": city, "fiscalYear": year}


@router.post("")
async def refresh_budget_data(
    body: BudgetRefreshRequest | None = None,
    budget: BudgetService = Depends(get_budget_service),
):
    """Re-fetch budget data; success mirrors whether anything came back."""
    body = body or BudgetRefreshRequest()
    city = require_text(body.city, "city", "City is required")
    year = current_fiscal_year() if body.fiscal_year is None else body.fiscal_year
    async with delegate_call(
        "budget.refresh", "Failed to refresh budget data", city=city,
    ):
        refreshed = await budget.refresh_budget_data(city, year)
    if not refreshed:
        logger.warning(
            f"Budget refresh for FY{year} returned no data", extra={"city": city},
        )
    return {
        "success": refreshed,
        "message": (
            "Budget data refreshed successfully" if refreshed
            else "Failed to refresh budget data"
        ),
        "city": city,
        "fiscalYear": year,
    }


@router.get("/analysis")
async def get_cost_analysis(
    city: str | None = Query(None),
    ward_district: str | None = Query(None, alias="wardDistrict"),
    budget: BudgetService = Depends(get_budget_service),
):
    """Average repair cost and efficiency rating."""
    city = require_city(city)
    ward = optional_text(ward_district)
    async with delegate_call(
        "budget.analysis", "Failed to calculate cost analysis", city=city,
    ):
        data = await budget.calculate_cost_analysis(city, ward)
    return {
        "success": True,
        "data": data,
        "city": city,
        "wardDistrict": ward or "All Wards",
    }


@router.get("/summary")
async def get_budget_summary(
    city: str | None = Query(None),
    fiscal_year: str | None = Query(None, alias="fiscalYear"),
    budget: BudgetService = Depends(get_budget_service),
):
    city = require_city(city)
    year = _fiscal_year(fiscal_year)
    async with delegate_call(
        "budget.summary", "Failed to fetch budget summary", city=city,
    ):
        data = await budget.get_budget_summary(city, year)
    return {"success": True, "data": data}
