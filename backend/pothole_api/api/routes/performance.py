"""Performance Routes: repair metrics, accountability alerts, report cards, seasonal patterns.

Invariants:
    - city is required on every route; metric is also required on /seasonal
    - startDate/endDate must be ISO dates when present; echoed back as ISO strings or null
    - severityBreakdown always carries critical/high/medium/low, zero-filled

Design Decisions:
    - Breakdown counts computed here from the returned alerts (core/breakdowns.py), never by the service
"""

from fastapi import APIRouter, Depends, Query

from pothole_api.api.delegation import delegate_call
from pothole_api.api.dependencies import get_performance_service
from pothole_api.core.breakdowns import severity_breakdown
from pothole_api.core.query_params import (
    iso_or_none,
    optional_text,
    parse_optional_date,
    require_city,
    require_text,
)
from pothole_api.core.repository_protocols import PerformanceService

router = APIRouter(prefix="/api/performance", tags=["performance"])


@router.get("")
async def get_performance_data(
    city: str | None = Query(None),
    start_date: str | None = Query(None, alias="startDate"),
    end_date: str | None = Query(None, alias="endDate"),
    performance: PerformanceService = Depends(get_performance_service),
):
    """Ward-level repair metrics for a period."""
    city = require_city(city)
    start = parse_optional_date(start_date, "startDate", "Invalid start date format")
    end = parse_optional_date(end_date, "endDate", "Invalid end date format")
    async with delegate_call(
        "performance", "Failed to fetch performance data", city=city,
    ):
        data = await performance.fetch_city_performance_data(city, start, end)
    return {
        "success": True,
        "data": data,
        "city": city,
        "period": {"start": iso_or_none(start), "end": iso_or_none(end)},
    }


@router.get("/alerts")
async def get_accountability_alerts(
    city: str | None = Query(None),
    performance: PerformanceService = Depends(get_performance_service),
):
    """Metrics missing target by more than 20%."""
    city = require_city(city)
    async with delegate_call(
        "performance.alerts", "Failed to generate accountability alerts", city=city,
    ):
        alerts = await performance.generate_accountability_alerts(city)
    return {
        "success": True,
        "data": alerts,
        "city": city,
        "alertCount": len(alerts),
        "severityBreakdown": severity_breakdown(alerts),
    }


@router.get("/report")
async def get_performance_report(
    city: str | None = Query(None),
    ward_district: str | None = Query(None, alias="wardDistrict"),
    period: str | None = Query(None),
    performance: PerformanceService = Depends(get_performance_service),
):
    """Graded report card for one ward (default: all wards)."""
    city = require_city(city)
    async with delegate_call(
        "performance.report", "Failed to generate performance report", city=city,
    ):
        report = await performance.generate_performance_report(
            city, optional_text(ward_district), optional_text(period),
        )
    return {"success": True, "data": report}


@router.get("/seasonal")
async def get_seasonal_patterns(
    city: str | None = Query(None),
    metric: str | None = Query(None),
    performance: PerformanceService = Depends(get_performance_service),
):
    city = require_city(city)
    metric = require_text(metric, "metric", "Metric parameter is required")
    async with delegate_call(
        "performance.seasonal", "Failed to fetch seasonal patterns", city=city,
    ):
        patterns = await performance.get_seasonal_patterns(city, metric)
    return {"success": True, "data": patterns, "city": city, "metric": metric}
