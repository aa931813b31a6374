"""Report Routes: list, create, confirm and count pothole reports.

Invariants:
    - lat/lng filter only when both are present; radius defaults to 20 m
    - Create refuses a location already reported within duplicate_radius_meters (409)
    - Confirm re-applies on every call; unknown id → 404 "Report not found"
    - /stats counts shaped by core/report_stats.py (floor/ceil derivations live there)

Design Decisions:
    - The repository checks for duplicates and inserts in one transaction; its
      DuplicateReportError passes through delegation as the 409
"""

import logging

from fastapi import APIRouter, Depends, Query, status

from pothole_api.api.delegation import delegate_call
from pothole_api.api.dependencies import get_report_repository
from pothole_api.config import get_settings
from pothole_api.core.errors import ParameterValidationError
from pothole_api.core.query_params import (
    parse_bounded_int,
    parse_optional_float,
    require_text,
)
from pothole_api.core.report_stats import summarize_report_counts
from pothole_api.core.repository_protocols import ReportRepository
from pothole_api.schemas.report import ReportCreate

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/reports", tags=["reports"])

INVALID_COORDINATES = "Invalid coordinates"


@router.get("")
async def list_reports(
    lat: str | None = Query(None),
    lng: str | None = Query(None),
    radius: str | None = Query(None),
    reports: ReportRepository = Depends(get_report_repository),
):
    """All reports newest first, or those within `radius` meters of lat/lng."""
    latitude = parse_optional_float(lat, "lat", INVALID_COORDINATES)
    longitude = parse_optional_float(lng, "lng", INVALID_COORDINATES)
    if (latitude is None) != (longitude is None):
        raise ParameterValidationError(INVALID_COORDINATES, "lat" if latitude is None else "lng")
    radius_meters = parse_bounded_int(
        radius, "radius", default=20, minimum=1, maximum=None,
        message="Radius must be a positive integer",
    )
    async with delegate_call("reports.list", "Failed to fetch reports"):
        if latitude is not None:
            rows = await reports.find_nearby_reports(latitude, longitude, radius_meters)
        else:
            rows = await reports.get_all_reports()
    return {"success": True, "reports": rows, "count": len(rows)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_report(
    body: ReportCreate,
    reports: ReportRepository = Depends(get_report_repository),
):
    radius = get_settings().duplicate_radius_meters
    async with delegate_call("reports.create", "Failed to create report"):
        report = await reports.create_report(
            body.latitude, body.longitude, body.photo_url, body.notes,
            duplicate_radius_meters=radius,
        )
    logger.info("Pothole report created", extra={"report_id": str(report.get("id"))})
    return {
        "success": True,
        "report": report,
        "message": "Pothole report created successfully",
    }


@router.get("/stats")
async def get_report_stats(
    reports: ReportRepository = Depends(get_report_repository),
):
    async with delegate_call("reports.stats", "Failed to fetch statistics"):
        counts = await reports.get_report_counts()
    return {"success": True, "stats": summarize_report_counts(counts)}


@router.post("/{report_id}/confirm")
async def confirm_report(
    report_id: str,
    reports: ReportRepository = Depends(get_report_repository),
):
    """Add one community confirmation to a report."""
    report_id = require_text(report_id, "id", "Report ID is required")
    async with delegate_call(
        "reports.confirm", "Failed to confirm report", report_id=report_id,
    ):
        report = await reports.confirm_report(report_id)
    return {
        "success": True,
        "report": report,
        "message": "Report confirmed successfully",
    }
