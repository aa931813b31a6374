"""Report Stats: pure derivations over report counts and report rows.

Invariants:
    - Inputs come from the report repository (no IO here)
    - Missing or null counts are treated as 0
    - communityMembers = floor(total * 0.7), activeAreas = ceil(total / 5) for /reports/stats
    - /stats buckets statuses new -> reportedCount, confirmed -> inProgressCount, fixed -> fixedCount

Design Decisions:
    - Two functions, one per route: the two stat views grew separately and clients
      depend on both shapes
    - Half-up rounding for avgReportsPerDay to match what dashboards already show
"""

import math
from collections.abc import Mapping, Sequence
from datetime import date, datetime

from pothole_api.core.breakdowns import count_by
from pothole_api.core.domain_types import ReportStatus

MIN_COMMUNITY_MEMBERS = 12


def _count(counts: Mapping, key: str) -> int:
    value = counts.get(key)
    return int(value) if value else 0


def summarize_report_counts(counts: Mapping) -> dict:
    """Shape repository counts into the /reports/stats payload."""
    total = _count(counts, "total")
    return {
        "totalReports": total,
        "newReports": _count(counts, "new"),
        "confirmedReports": _count(counts, "confirmed"),
        "fixedReports": _count(counts, "fixed"),
        "activeDays": _count(counts, "active_days"),
        "communityMembers": math.floor(total * 0.7),
        "activeAreas": math.ceil(total / 5),
    }


def _as_datetime(value: datetime | str) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def _report_day(report: Mapping) -> date:
    return _as_datetime(report["created_at"]).date()


def compute_activity_stats(reports: Sequence[Mapping]) -> dict:
    """Aggregate /stats figures from full report rows."""
    total = len(reports)
    statuses = count_by(reports, "status", [s.value for s in ReportStatus])
    fixed = statuses[ReportStatus.FIXED.value]
    active_days = len({_report_day(r) for r in reports})
    last_report = max((_as_datetime(r["created_at"]) for r in reports), default=None)

    return {
        "totalReports": total,
        "reportedCount": statuses[ReportStatus.NEW.value],
        "inProgressCount": statuses[ReportStatus.CONFIRMED.value],
        "fixedCount": fixed,
        "activeDays": active_days,
        "avgReportsPerDay": (
            math.floor(total / max(1, active_days) + 0.5) if total else 0
        ),
        "lastReportTime": last_report.isoformat() if last_report else None,
        "communityMembers": max(total, MIN_COMMUNITY_MEMBERS),
        "impactScore": min(100, total * 8 + fixed * 25),
    }
