"""Performance Tracking Service: baseline repair metrics, report cards and accountability alerts.

Invariants:
    - Metrics exist for Ward 1-3 and "All Wards", two metric types each
    - Status is on-track within 5% of target; otherwise ahead/behind by the metric's direction
    - An alert fires only when value > target * 1.2; severity by value/target ratio
    - Grades: A >= 90, B >= 80, C >= 70, D >= 60, else F

Design Decisions:
    - Fixed per-ward values instead of 311 feeds: deterministic delegate for the gateway
    - Score bands and suggested actions kept as plain tables at module level
"""

import logging
import math
from datetime import datetime, timezone

from pothole_api.core.domain_types import AlertSeverity, Season, Trend

logger = logging.getLogger(__name__)

REPAIR_TIME = "avg_repair_time_days"
COMPLETION_RATE = "completion_rate_percent"
ALL_WARDS = "All Wards"

TARGETS = {REPAIR_TIME: 7.0, COMPLETION_RATE: 95.0}

# ward -> (avg repair days, completion %)
WARD_METRICS: dict[str, tuple[float, float]] = {
    "Ward 1": (9.5, 88.4),
    "Ward 2": (11.8, 86.1),
    "Ward 3": (8.2, 91.3),
    ALL_WARDS: (10.1, 88.9),
}

ALERT_THRESHOLD = 1.2

SUGGESTED_ACTIONS: dict[str, list[str]] = {
    REPAIR_TIME: [
        "Increase crew allocation to affected areas",
        "Review and optimize dispatch procedures",
        "Consider emergency contractor support",
        "Implement priority queue for high-traffic areas",
    ],
    COMPLETION_RATE: [
        "Audit incomplete service requests",
        "Provide additional training to field crews",
        "Review resource allocation policies",
        "Implement quality assurance checkpoints",
    ],
    "cost_per_repair_dollars": [
        "Review contractor pricing agreements",
        "Optimize material procurement processes",
        "Implement bulk purchasing strategies",
        "Evaluate crew efficiency metrics",
    ],
}
DEFAULT_ACTIONS = ["Review performance and implement corrective measures"]

# season -> (repair-time average, completion average, expected variation, trend)
SEASONAL_BASELINE: dict[Season, tuple[float, float, float, Trend]] = {
    Season.SPRING: (12.5, 88.2, 2.1, Trend.DECLINING),
    Season.SUMMER: (7.8, 94.1, 1.5, Trend.IMPROVING),
    Season.FALL: (9.2, 91.7, 1.8, Trend.STABLE),
    Season.WINTER: (15.3, 82.4, 3.2, Trend.DECLINING),
}


def _variance(actual: float, target: float) -> float:
    return abs(actual - target) / target


def metric_trend(actual: float, target: float) -> Trend:
    if _variance(actual, target) <= 0.05:
        return Trend.STABLE
    return Trend.IMPROVING if actual < target else Trend.DECLINING


def metric_status(actual: float, target: float, lower_is_better: bool) -> str:
    if _variance(actual, target) <= 0.05:
        return "on-track"
    if lower_is_better:
        return "ahead" if actual < target else "behind"
    return "ahead" if actual > target else "behind"


def metric_score(actual: float, target: float) -> int:
    variance = _variance(actual, target)
    if variance <= 0.05:
        return 100
    if variance <= 0.1:
        return 85
    if variance <= 0.2:
        return 70
    if variance <= 0.3:
        return 55
    return 40


def grade_for(score: float) -> str:
    for threshold, grade in ((90, "A"), (80, "B"), (70, "C"), (60, "D")):
        if score >= threshold:
            return grade
    return "F"


def alert_severity(actual: float, target: float) -> AlertSeverity:
    ratio = actual / target
    if ratio >= 2.0:
        return AlertSeverity.CRITICAL
    if ratio >= 1.5:
        return AlertSeverity.HIGH
    if ratio >= 1.2:
        return AlertSeverity.MEDIUM
    return AlertSeverity.LOW


def _metric_label(metric_type: str) -> str:
    return metric_type.replace("_", " ").title()


class PerformanceTrackingService:
    """PerformanceService over fixed ward metrics."""

    async def fetch_city_performance_data(
        self,
        city: str,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
    ) -> list[dict]:
        metric_date = (end_date or datetime.now(timezone.utc)).date().isoformat()
        metrics = []
        for ward, (repair_days, completion) in WARD_METRICS.items():
            for metric_type, value in (
                (REPAIR_TIME, repair_days), (COMPLETION_RATE, completion),
            ):
                target = TARGETS[metric_type]
                metrics.append({
                    "city": city,
                    "wardDistrict": ward,
                    "metricType": metric_type,
                    "metricValue": value,
                    "targetValue": target,
                    "metricDate": metric_date,
                    "comparisonPeriod": "month",
                    "trend": metric_trend(value, target).value,
                })
        return metrics

    async def generate_performance_report(
        self, city: str, ward_district: str | None, period: str | None,
    ) -> dict:
        ward = ward_district or ALL_WARDS
        metrics = await self.fetch_city_performance_data(city)
        by_type = {
            m["metricType"]: m for m in metrics if m["wardDistrict"] == ward
        }

        def _entry(metric_type: str, lower_is_better: bool) -> dict:
            metric = by_type.get(metric_type)
            actual = metric["metricValue"] if metric else 0.0
            target = TARGETS[metric_type]
            return {
                "actual": actual,
                "target": target,
                "trend": metric["trend"] if metric else Trend.STABLE.value,
                "status": metric_status(actual, target, lower_is_better),
            }

        report_metrics = {
            "avgRepairTime": _entry(REPAIR_TIME, lower_is_better=True),
            "completionRate": _entry(COMPLETION_RATE, lower_is_better=False),
            "costPerRepair": {
                "actual": 165.0, "target": 150.0,
                "trend": Trend.STABLE.value, "status": "behind",
            },
            "citizenSatisfaction": {
                "actual": 78.0, "target": 85.0,
                "trend": Trend.IMPROVING.value, "status": "behind",
            },
        }
        scores = [
            metric_score(m["actual"], m["target"]) for m in report_metrics.values()
        ]
        overall = sum(scores) / len(scores)
        return {
            "city": city,
            "wardDistrict": ward,
            "period": period or "month",
            "metrics": report_metrics,
            "overallScore": overall,
            "grade": grade_for(overall),
            "lastUpdated": datetime.now(timezone.utc).isoformat(),
        }

    async def generate_accountability_alerts(self, city: str) -> list[dict]:
        alerts = []
        now = datetime.now(timezone.utc).isoformat()
        for metric in await self.fetch_city_performance_data(city):
            value, target = metric["metricValue"], metric["targetValue"]
            if value <= target * ALERT_THRESHOLD:
                continue
            alerts.append({
                "city": city,
                "wardDistrict": metric["wardDistrict"],
                "metricType": metric["metricType"],
                "severity": alert_severity(value, target).value,
                "message": (
                    f"{_metric_label(metric['metricType'])} in "
                    f"{metric['wardDistrict']} is {value:.1f} (target: {target:.1f}). "
                    "Immediate attention required."
                ),
                "targetMissedBy": (value - target) / target * 100,
                "daysOverdue": math.ceil((value - target) * 7),
                "suggestedActions": SUGGESTED_ACTIONS.get(
                    metric["metricType"], DEFAULT_ACTIONS,
                ),
                "createdAt": now,
            })
        if alerts:
            logger.info(f"{len(alerts)} accountability alerts", extra={"city": city})
        return alerts

    async def get_seasonal_patterns(self, city: str, metric: str) -> list[dict]:
        repair_metric = "repair_time" in metric
        return [
            {
                "city": city,
                "metric": metric,
                "season": season.value,
                "averageValue": repair_avg if repair_metric else completion_avg,
                "expectedVariation": variation,
                "historicalTrend": trend.value,
            }
            for season, (repair_avg, completion_avg, variation, trend)
            in SEASONAL_BASELINE.items()
        ]
