"""Representative Routes: who to contact about a pothole, logging contacts, contact history.

Invariants:
    - Lookup requires both lat and lng; non-numeric or out-of-range values are rejected
    - Logging requires potholeReportId, representative and contactType; one message names all three
    - History requires reportId and echoes it back
"""

from fastapi import APIRouter, Depends, Query

from pothole_api.api.delegation import delegate_call
from pothole_api.api.dependencies import get_representative_service
from pothole_api.core.errors import MissingParameterError, ParameterValidationError
from pothole_api.core.query_params import parse_optional_float, require_text
from pothole_api.core.repository_protocols import RepresentativeService
from pothole_api.schemas.representative import ContactRecordCreate

router = APIRouter(prefix="/api/representatives", tags=["representatives"])

INVALID_LOCATION = "Invalid latitude or longitude values"


@router.get("")
async def find_representatives(
    lat: str | None = Query(None),
    lng: str | None = Query(None),
    representatives: RepresentativeService = Depends(get_representative_service),
):
    """Officials responsible for the location, each with a ready-to-send letter."""
    latitude = parse_optional_float(lat, "lat", INVALID_LOCATION)
    longitude = parse_optional_float(lng, "lng", INVALID_LOCATION)
    if latitude is None or longitude is None:
        raise MissingParameterError(
            "Latitude and longitude are required", "lat" if latitude is None else "lng",
        )
    if not (-90 <= latitude <= 90 and -180 <= longitude <= 180):
        raise ParameterValidationError(INVALID_LOCATION, "lat")
    async with delegate_call("representatives", "Failed to find representatives"):
        data = await representatives.find_representatives(latitude, longitude)
    return {
        "success": True,
        "data": data,
        "location": {"latitude": latitude, "longitude": longitude},
    }


@router.post("")
async def save_contact_record(
    body: ContactRecordCreate,
    representatives: RepresentativeService = Depends(get_representative_service),
):
    report_id = (body.pothole_report_id or "").strip()
    if not (report_id and body.representative and body.contact_type):
        raise MissingParameterError(
            "Missing required fields: potholeReportId, representative, contactType",
            "potholeReportId",
        )
    async with delegate_call(
        "representatives.contact", "Failed to save contact record",
        report_id=report_id,
    ):
        record = await representatives.save_contact_record(
            report_id,
            body.representative.model_dump(mode="json", by_alias=True),
            body.contact_type.value,
            user_id=body.user_id,
            message_template_used=body.message_template,
        )
    return {
        "success": True,
        "data": record,
        "message": "Contact record saved successfully",
    }


@router.get("/history")
async def get_contact_history(
    report_id: str | None = Query(None, alias="reportId"),
    representatives: RepresentativeService = Depends(get_representative_service),
):
    report_id = require_text(report_id, "reportId", "Report ID is required")
    async with delegate_call(
        "representatives.history", "Failed to fetch contact history",
        report_id=report_id,
    ):
        history = await representatives.get_contact_history(report_id)
    return {"success": True, "data": history, "reportId": report_id}
