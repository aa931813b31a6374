"""Weather Correlation Service: synthetic daily weather, freeze-thaw detection and pothole risk.

Invariants:
    - Weather is a pure function of (date): same dates always yield the same readings
    - A freeze-thaw cycle happens when low < 32°F < high; its count is
      clamp(floor((high - low) / 10), 1, 3)
    - Prediction probability is clamped to [10, 95]
    - Predictions only exist for report hotspots (>= 2 reports in one cell)

Design Decisions:
    - Seasonal climate table plus fixed day-of-year offsets instead of a weather API:
      deterministic delegate, real feeds plug in behind WeatherService
    - Correlation figures are the long-run defaults the dashboards were calibrated on
    - Date ranges longer than MAX_RANGE_DAYS are truncated at the end
"""

import logging
import math
from datetime import date, datetime, timedelta, timezone

from pothole_api.core.domain_types import (
    PREDICTION_MODEL_VERSION,
    AlertSeverity,
    RiskLevel,
    Season,
    season_for_month,
)
from pothole_api.core.repository_protocols import ReportRepository

logger = logging.getLogger(__name__)

FREEZING_F = 32.0
MAX_RANGE_DAYS = 366
HOTSPOT_MIN_REPORTS = 2
PREDICTION_TTL = timedelta(days=30)

# season -> (base high, base low) in °F
SEASON_TEMPERATURES: dict[Season, tuple[float, float]] = {
    Season.WINTER: (40.0, 22.0),
    Season.SPRING: (64.0, 44.0),
    Season.SUMMER: (84.0, 64.0),
    Season.FALL: (62.0, 40.0),
}

DEFAULT_CORRELATION = {
    "correlationStrength": 0.65,
    "freezeThawImpact": 12.5,
    "precipitationImpact": 8.2,
    "temperatureThreshold": FREEZING_F,
    "seasonalPatterns": {
        "spring": 15.2, "summer": 6.1, "fall": 9.8, "winter": 18.7,
    },
}


def daily_reading(day: date) -> tuple[float, float, float]:
    """(high, low, precipitation inches) for a calendar day."""
    base_high, base_low = SEASON_TEMPERATURES[season_for_month(day.month)]
    ordinal = day.toordinal()
    high = base_high + (ordinal * 7) % 13 - 6
    low = base_low + (ordinal * 5) % 11 - 5
    if ordinal % 23 == 0:
        precipitation = 3.2
    elif ordinal % 11 == 0:
        precipitation = 1.9
    elif ordinal % 5 == 0:
        precipitation = 0.8
    else:
        precipitation = 0.0
    return high, low, precipitation


def detect_freeze_thaw(high: float, low: float) -> tuple[bool, int]:
    crosses = low < FREEZING_F < high
    if not crosses:
        return False, 0
    return True, max(1, min(math.floor((high - low) / 10), 3))


def freeze_thaw_risk(high: float, low: float, precipitation: float) -> RiskLevel:
    swing = high - low
    if swing > 30 and precipitation > 0.5:
        return RiskLevel.HIGH
    if swing > 20 or precipitation > 1.0:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def prediction_timeframe(score: float) -> str:
    if score >= 80:
        return "Next 1-2 weeks"
    if score >= 60:
        return "Next 2-4 weeks"
    if score >= 40:
        return "Next 1-2 months"
    return "Next 2-3 months"


def preventive_actions(score: float) -> list[str]:
    actions = ["Regular pavement inspection"]
    if score >= 70:
        actions += [
            "Emergency pothole repair materials ready",
            "Increase inspection frequency to weekly",
        ]
    if score >= 50:
        actions += ["Apply preventive sealant", "Monitor after weather events"]
    if score >= 30:
        actions.append("Schedule routine maintenance")
    return actions


def _traffic_volume(report_count: int) -> str:
    if report_count >= 6:
        return "high"
    if report_count >= 3:
        return "medium"
    return "low"


def _today() -> date:
    return datetime.now(timezone.utc).date()


class WeatherCorrelationService:
    """WeatherService over the synthetic climate and report hotspots."""

    def __init__(self, reports: ReportRepository):
        self._reports = reports

    def _events(self, city: str, start: date, end: date) -> list[dict]:
        span = timedelta(days=MAX_RANGE_DAYS - 1)
        if end - start > span:
            end = start + span
        events = []
        # ordinals, so the walk never steps past date.max
        for ordinal in range(start.toordinal(), end.toordinal() + 1):
            day = date.fromordinal(ordinal)
            high, low, precipitation = daily_reading(day)
            crosses, count = detect_freeze_thaw(high, low)
            events.append({
                "city": city,
                "eventDate": day.isoformat(),
                "tempHigh": high,
                "tempLow": low,
                "precipitation": precipitation,
                "freezeThawCycle": crosses,
                "freezeThawCount": count,
            })
        return events

    async def fetch_weather_data(
        self,
        city: str,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
    ) -> list[dict]:
        """Daily readings; defaults to the past week plus a five-day outlook."""
        today = _today()
        start = start_date.date() if start_date else today - timedelta(days=7)
        end = end_date.date() if end_date else today + timedelta(days=5)
        return self._events(city, start, end)

    async def calculate_weather_correlation(self, city: str) -> dict:
        return {
            "city": city,
            **DEFAULT_CORRELATION,
            "seasonalPatterns": dict(DEFAULT_CORRELATION["seasonalPatterns"]),
            "lastAnalyzed": datetime.now(timezone.utc).isoformat(),
        }

    async def get_freeze_thaw_cycles(self, city: str, days: int) -> list[dict]:
        today = _today()
        events = self._events(city, today, today + timedelta(days=days - 1))
        return [
            {
                "date": e["eventDate"],
                "city": city,
                "morningTemp": e["tempLow"],
                "afternoonTemp": e["tempHigh"],
                "crossedFreezing": True,
                "precipitationLast24h": e["precipitation"],
                "riskLevel": freeze_thaw_risk(
                    e["tempHigh"], e["tempLow"], e["precipitation"],
                ).value,
            }
            for e in events
            if e["freezeThawCycle"]
        ]

    async def generate_pothole_predictions(self, city: str, limit: int) -> list[dict]:
        today = _today()
        upcoming = self._events(city, today, today + timedelta(days=13))
        freeze_days = sum(1 for e in upcoming if e["freezeThawCycle"])
        wet_days = sum(1 for e in upcoming[:7] if e["precipitation"] > 0.5)
        heavy_rain = any(e["precipitation"] > 1.0 for e in upcoming)
        correlation = await self.calculate_weather_correlation(city)
        hotspots = await self._reports.get_hotspots(HOTSPOT_MIN_REPORTS, limit)

        now = datetime.now(timezone.utc)
        predictions = []
        for spot in hotspots:
            score = (
                30
                + min(spot["report_count"] * 10, 30)
                + freeze_days * 15
                + wet_days * 8
                + correlation["correlationStrength"] * 20
            )
            predictions.append({
                "locationLat": spot["latitude"],
                "locationLng": spot["longitude"],
                "address": f"{spot['latitude']:.5f}, {spot['longitude']:.5f}",
                "probabilityScore": min(max(score, 10), 95),
                "predictedTimeframe": prediction_timeframe(score),
                "riskFactors": {
                    "recentFreezeThaw": freeze_days > 0,
                    "highPrecipitation": heavy_rain,
                    "historicalHotspot": spot["report_count"] > 3,
                    "trafficVolume": _traffic_volume(spot["report_count"]),
                },
                "preventiveActions": preventive_actions(score),
                "modelVersion": PREDICTION_MODEL_VERSION,
                "isActive": True,
                "expiresAt": (now + PREDICTION_TTL).isoformat(),
                "createdAt": now.isoformat(),
            })
        logger.info(f"{len(predictions)} pothole predictions", extra={"city": city})
        return predictions

    async def generate_weather_alerts(self, city: str) -> list[dict]:
        today = _today()
        outlook = self._events(
            city, today + timedelta(days=1), today + timedelta(days=5),
        )
        correlation = await self.calculate_weather_correlation(city)
        now = datetime.now(timezone.utc)
        alerts = []

        freeze = [e for e in outlook if e["freezeThawCycle"]]
        if freeze:
            alerts.append({
                "city": city,
                "alertType": "freeze_thaw_warning",
                "severity": (
                    AlertSeverity.HIGH if len(freeze) > 2 else AlertSeverity.MEDIUM
                ).value,
                "message": (
                    f"{len(freeze)} freeze-thaw cycle(s) expected in the next 5 days. "
                    "Increased pothole formation likely."
                ),
                "expectedPotholeIncrease": correlation["freezeThawImpact"] * len(freeze),
                "affectedAreas": ["City-wide"],
                "validUntil": (now + timedelta(days=7)).isoformat(),
                "recommendedActions": [
                    "Prepare emergency repair crews",
                    "Stock additional pothole repair materials",
                    "Increase citizen reporting awareness campaigns",
                ],
                "createdAt": now.isoformat(),
            })

        heavy = [e for e in outlook if e["precipitation"] > 1.5]
        if heavy:
            alerts.append({
                "city": city,
                "alertType": "heavy_precipitation",
                "severity": (
                    AlertSeverity.HIGH
                    if any(e["precipitation"] > 3 for e in heavy)
                    else AlertSeverity.MEDIUM
                ).value,
                "message": "Heavy precipitation expected. Monitor for accelerated road deterioration.",
                "expectedPotholeIncrease": correlation["precipitationImpact"] * len(heavy),
                "affectedAreas": ["City-wide"],
                "validUntil": (now + timedelta(days=3)).isoformat(),
                "recommendedActions": [
                    "Inspect drainage systems",
                    "Monitor low-lying areas",
                    "Prepare rapid response teams",
                ],
                "createdAt": now.isoformat(),
            })
        return alerts
