"""Budget Data Service: baseline municipal budget figures and repair cost analysis.

Invariants:
    - Every city/year gets the same two categories (road_maintenance, pothole_repair)
    - remainingAmount = allocatedAmount - spentAmount, per row and in totals
    - Cost analysis divides pothole_repair spend by fixed reports; 165.0 when none are fixed
    - refresh_budget_data is safe to repeat; it reports whether any rows came back

Design Decisions:
    - Deterministic figures instead of open-data portal scraping: the gateway needs a
      stable delegate, real portals plug in behind BudgetService
    - Repair counts come from the report repository so the analysis reflects actual fixes
"""

import logging
from datetime import datetime, timezone

from pothole_api.core.domain_types import ReportStatus, Trend
from pothole_api.core.repository_protocols import ReportRepository

logger = logging.getLogger(__name__)

DATA_SOURCE = "Baseline"
DEFAULT_WARD = "All Districts"
CITY_AVERAGE_COST = 165.0

# (category, allocated, spent)
BASELINE_ALLOCATIONS: tuple[tuple[str, float, float], ...] = (
    ("road_maintenance", 5_000_000.0, 2_800_000.0),
    ("pothole_repair", 1_500_000.0, 850_000.0),
)


def efficiency_rating(avg_cost: float) -> str:
    if avg_cost < 120:
        return "Excellent"
    if avg_cost < 150:
        return "Good"
    if avg_cost > 200:
        return "Poor"
    return "Average"


def cost_trend(avg_cost: float) -> Trend:
    if avg_cost < 160:
        return Trend.IMPROVING
    if avg_cost > 180:
        return Trend.DECLINING
    return Trend.STABLE


class BudgetDataService:
    """BudgetService backed by fixed allocations and the report repository."""

    def __init__(self, reports: ReportRepository):
        self._reports = reports

    async def fetch_budget_data(self, city: str, fiscal_year: int) -> list[dict]:
        now = datetime.now(timezone.utc).isoformat()
        return [
            {
                "city": city,
                "wardDistrict": DEFAULT_WARD,
                "fiscalYear": fiscal_year,
                "category": category,
                "allocatedAmount": allocated,
                "spentAmount": spent,
                "remainingAmount": allocated - spent,
                "dataSource": DATA_SOURCE,
                "lastUpdated": now,
            }
            for category, allocated, spent in BASELINE_ALLOCATIONS
        ]

    async def refresh_budget_data(self, city: str, fiscal_year: int) -> bool:
        rows = await self.fetch_budget_data(city, fiscal_year)
        logger.info(
            f"Budget data refreshed for FY{fiscal_year}: {len(rows)} rows",
            extra={"city": city},
        )
        return len(rows) > 0

    async def get_budget_summary(self, city: str, fiscal_year: int) -> dict:
        rows = await self.fetch_budget_data(city, fiscal_year)
        categories = [
            {
                "category": row["category"],
                "allocated": row["allocatedAmount"],
                "spent": row["spentAmount"],
                "remaining": row["remainingAmount"],
                "percentSpent": (
                    row["spentAmount"] / row["allocatedAmount"] * 100
                    if row["allocatedAmount"] else 0.0
                ),
            }
            for row in rows
        ]
        return {
            "city": city,
            "fiscalYear": fiscal_year,
            "totalAllocated": sum(c["allocated"] for c in categories),
            "totalSpent": sum(c["spent"] for c in categories),
            "totalRemaining": sum(c["remaining"] for c in categories),
            "categories": categories,
            "lastUpdated": datetime.now(timezone.utc).isoformat(),
        }

    async def calculate_cost_analysis(
        self, city: str, ward_district: str | None,
    ) -> dict:
        # Reports are not ward-scoped, so the ward only labels the result
        repairs = await self._reports.count_reports(ReportStatus.FIXED.value)
        repair_spend = next(
            spent for category, _, spent in BASELINE_ALLOCATIONS
            if category == "pothole_repair"
        )
        avg_cost = repair_spend / repairs if repairs else CITY_AVERAGE_COST
        return {
            "avgCostPerRepair": round(avg_cost, 2),
            "totalRepairs": repairs,
            "costEfficiencyRating": efficiency_rating(avg_cost),
            "comparison": {
                "previousYear": round(avg_cost * 0.95, 2),
                "cityAverage": CITY_AVERAGE_COST,
                "trend": cost_trend(avg_cost).value,
            },
        }
