"""Report Repository: SQLAlchemy-backed persistence for pothole reports.

Invariants:
    - Rows leave this module as dicts (PotholeReport.to_dict), newest first where ordered
    - confirm_report increments confirmations on every call and raises ReportNotFoundError
      for unknown or malformed ids
    - Distances are metres (haversine, R = 6,371 km), nearest first
    - Commits happen here; routes never touch the session
    - create_report with a radius checks and inserts atomically; the 409 lists only
      id, distance and created_at of the reports it collided with

Design Decisions:
    - Proximity computed in Python after a bounding-box prefilter: portable across
      PostgreSQL and SQLite, no PostGIS dependency
    - Hotspot cells are 3-decimal coordinate buckets (about 100 m)
"""

import logging
import uuid
from collections import defaultdict
from datetime import datetime, timedelta, timezone

from sqlalchemy import case, distinct, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from pothole_api.core.domain_types import ReportStatus
from pothole_api.core.errors import DuplicateReportError, ReportNotFoundError
from pothole_api.core.geo import bounding_box, covering_cells, haversine
from pothole_api.models.pothole_report import PotholeReport

logger = logging.getLogger(__name__)

HOTSPOT_PRECISION = 3
HOTSPOT_WINDOW = timedelta(days=365)
# wider than the 360,000 longitude cells, so cell keys never collide
LOCK_KEY_STRIDE = 1_000_000


def _duplicate_summary(distance: float, report: PotholeReport) -> dict:
    """The fields a 409 reveals about an existing report."""
    data = report.to_dict(distance_meters=distance)
    return {
        "id": data["id"],
        "distance": data["distance_meters"],
        "created_at": data["created_at"],
    }


class SqlReportRepository:
    """ReportRepository over one AsyncSession."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def get_all_reports(self) -> list[dict]:
        result = await self._db.execute(
            select(PotholeReport).order_by(PotholeReport.created_at.desc()),
        )
        return [report.to_dict() for report in result.scalars().all()]

    async def find_nearby_reports(
        self, latitude: float, longitude: float, radius_meters: float,
    ) -> list[dict]:
        nearby = await self._nearby(latitude, longitude, radius_meters)
        return [report.to_dict(distance_meters=d) for d, report in nearby]

    async def _nearby(
        self, latitude: float, longitude: float, radius_meters: float,
    ) -> list[tuple[float, PotholeReport]]:
        min_lat, max_lat, min_lng, max_lng = bounding_box(
            latitude, longitude, radius_meters,
        )
        result = await self._db.execute(
            select(PotholeReport).where(
                PotholeReport.latitude.between(min_lat, max_lat),
                PotholeReport.longitude.between(min_lng, max_lng),
            ),
        )
        nearby = []
        for report in result.scalars().all():
            distance = haversine(
                latitude, longitude, report.latitude, report.longitude,
            )
            if distance <= radius_meters:
                nearby.append((distance, report))
        nearby.sort(key=lambda pair: pair[0])
        return nearby

    async def create_report(
        self,
        latitude: float,
        longitude: float,
        photo_url: str,
        notes: str | None,
        duplicate_radius_meters: int | None = None,
    ) -> dict:
        """Insert a report; with a radius, refuse when one already lies within it.

        The proximity check and the insert share one transaction. On PostgreSQL
        the grid cells around the point are advisory-locked first, so two
        creates at the same spot run one after the other and the second sees
        the first.
        """
        if duplicate_radius_meters is not None:
            await self._lock_cells(latitude, longitude, duplicate_radius_meters)
            nearby = await self._nearby(latitude, longitude, duplicate_radius_meters)
            if nearby:
                await self._db.rollback()
                raise DuplicateReportError(
                    duplicate_radius_meters,
                    [_duplicate_summary(d, report) for d, report in nearby],
                )

        report = PotholeReport(
            latitude=latitude, longitude=longitude,
            photo_url=photo_url, notes=notes,
        )
        self._db.add(report)
        await self._db.commit()
        await self._db.refresh(report)
        logger.info("Pothole report created", extra={"report_id": str(report.id)})
        return report.to_dict()

    async def _lock_cells(
        self, latitude: float, longitude: float, radius_meters: float,
    ) -> None:
        # transaction-scoped: released by the commit or rollback that follows
        if self._db.get_bind().dialect.name != "postgresql":
            return
        for lat_cell, lng_cell in covering_cells(latitude, longitude, radius_meters):
            await self._db.execute(
                select(func.pg_advisory_xact_lock(lat_cell * LOCK_KEY_STRIDE + lng_cell)),
            )

    async def confirm_report(self, report_id: str) -> dict:
        """Add one confirmation; re-applies on every call."""
        try:
            parsed = uuid.UUID(report_id)
        except ValueError:
            raise ReportNotFoundError(report_id)

        result = await self._db.execute(
            update(PotholeReport)
            .where(PotholeReport.id == parsed)
            .values(
                confirmations=PotholeReport.confirmations + 1,
                updated_at=datetime.now(timezone.utc),
            ),
        )
        if result.rowcount == 0:
            await self._db.rollback()
            raise ReportNotFoundError(report_id)
        await self._db.commit()

        refreshed = await self._db.execute(
            select(PotholeReport)
            .where(PotholeReport.id == parsed)
            .execution_options(populate_existing=True),
        )
        report = refreshed.scalar_one()
        logger.info(
            f"Report confirmed ({report.confirmations} confirmations)",
            extra={"report_id": report_id},
        )
        return report.to_dict()

    async def get_report_counts(self) -> dict:
        status = PotholeReport.status
        result = await self._db.execute(
            select(
                func.count(PotholeReport.id),
                func.count(case((status == ReportStatus.NEW.value, 1))),
                func.count(case((status == ReportStatus.CONFIRMED.value, 1))),
                func.count(case((status == ReportStatus.FIXED.value, 1))),
                func.count(distinct(func.date(PotholeReport.created_at))),
            ),
        )
        total, new, confirmed, fixed, active_days = result.one()
        return {
            "total": total,
            "new": new,
            "confirmed": confirmed,
            "fixed": fixed,
            "active_days": active_days,
        }

    async def count_reports(self, status: str | None = None) -> int:
        stmt = select(func.count(PotholeReport.id))
        if status:
            stmt = stmt.where(PotholeReport.status == status)
        result = await self._db.execute(stmt)
        return result.scalar_one()

    async def get_hotspots(self, min_reports: int, limit: int) -> list[dict]:
        """Coordinate cells with at least `min_reports` reports in the past year, busiest first."""
        since = datetime.now(timezone.utc) - HOTSPOT_WINDOW
        result = await self._db.execute(
            select(PotholeReport.latitude, PotholeReport.longitude)
            .where(PotholeReport.created_at >= since),
        )
        cells: dict[tuple[float, float], list[tuple[float, float]]] = defaultdict(list)
        for lat, lng in result.all():
            key = (round(lat, HOTSPOT_PRECISION), round(lng, HOTSPOT_PRECISION))
            cells[key].append((lat, lng))

        hotspots = [
            {
                "latitude": sum(p[0] for p in points) / len(points),
                "longitude": sum(p[1] for p in points) / len(points),
                "report_count": len(points),
            }
            for points in cells.values()
            if len(points) >= min_reports
        ]
        hotspots.sort(key=lambda h: h["report_count"], reverse=True)
        return hotspots[:limit]
