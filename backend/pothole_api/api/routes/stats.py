"""Activity Stats Route: community-wide figures computed from every report.

Invariants:
    - No parameters; one repository call per request
    - timestamp is the response time in UTC ISO-8601
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from pothole_api.api.delegation import delegate_call
from pothole_api.api.dependencies import get_report_repository
from pothole_api.core.report_stats import compute_activity_stats
from pothole_api.core.repository_protocols import ReportRepository

router = APIRouter(prefix="/api/stats", tags=["stats"])


@router.get("")
async def get_stats(
    reports: ReportRepository = Depends(get_report_repository),
):
    async with delegate_call("stats", "Failed to fetch stats"):
        rows = await reports.get_all_reports()
    return {
        "success": True,
        "stats": compute_activity_stats(rows),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
