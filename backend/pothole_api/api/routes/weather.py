"""Weather Routes: readings, report correlation, freeze-thaw outlook, predictions and alerts.

Invariants:
    - city is required on every route
    - days ∈ [1, 14] (default 7); limit ∈ [1, 50] (default 10); non-numeric is rejected like out-of-range
    - startDate/endDate must be ISO dates when present
    - riskLevels / severityBreakdown are zero-filled per known category

Design Decisions:
    - modelVersion in the envelope is the same constant the service stamps on each
      prediction, so the two can never disagree
"""

from fastapi import APIRouter, Depends, Query

from pothole_api.api.delegation import delegate_call
from pothole_api.api.dependencies import get_weather_service
from pothole_api.core.breakdowns import risk_level_breakdown, severity_breakdown
from pothole_api.core.domain_types import PREDICTION_MODEL_VERSION
from pothole_api.core.query_params import (
    iso_or_none,
    parse_bounded_int,
    parse_optional_date,
    require_city,
)
from pothole_api.core.repository_protocols import WeatherService

router = APIRouter(prefix="/api/weather", tags=["weather"])


@router.get("")
async def get_weather_data(
    city: str | None = Query(None),
    start_date: str | None = Query(None, alias="startDate"),
    end_date: str | None = Query(None, alias="endDate"),
    weather: WeatherService = Depends(get_weather_service),
):
    """Daily weather readings with freeze-thaw flags."""
    city = require_city(city)
    start = parse_optional_date(start_date, "startDate", "Invalid start date format")
    end = parse_optional_date(end_date, "endDate", "Invalid end date format")
    async with delegate_call("weather", "Failed to fetch weather data", city=city):
        data = await weather.fetch_weather_data(city, start, end)
    return {
        "success": True,
        "data": data,
        "city": city,
        "period": {"start": iso_or_none(start), "end": iso_or_none(end)},
    }


@router.get("/correlation")
async def get_weather_correlation(
    city: str | None = Query(None),
    weather: WeatherService = Depends(get_weather_service),
):
    city = require_city(city)
    async with delegate_call(
        "weather.correlation", "Failed to calculate weather correlation", city=city,
    ):
        data = await weather.calculate_weather_correlation(city)
    return {"success": True, "data": data, "city": city}


@router.get("/freeze-thaw")
async def get_freeze_thaw_cycles(
    city: str | None = Query(None),
    days: str | None = Query(None),
    weather: WeatherService = Depends(get_weather_service),
):
    """Upcoming freeze-thaw cycles with a risk-level breakdown."""
    city = require_city(city)
    forecast_days = parse_bounded_int(
        days, "days", default=7, minimum=1, maximum=14,
        message="Days must be between 1 and 14",
    )
    async with delegate_call(
        "weather.freeze_thaw", "Failed to fetch freeze-thaw cycles", city=city,
    ):
        cycles = await weather.get_freeze_thaw_cycles(city, forecast_days)
    return {
        "success": True,
        "data": cycles,
        "city": city,
        "forecastDays": forecast_days,
        "cycleCount": len(cycles),
        "riskLevels": risk_level_breakdown(cycles),
    }


@router.get("/predictions")
async def get_pothole_predictions(
    city: str | None = Query(None),
    limit: str | None = Query(None),
    weather: WeatherService = Depends(get_weather_service),
):
    """Locations most likely to develop potholes soon."""
    city = require_city(city)
    max_predictions = parse_bounded_int(
        limit, "limit", default=10, minimum=1, maximum=50,
        message="Limit must be between 1 and 50",
    )
    async with delegate_call(
        "weather.predictions", "Failed to generate pothole predictions", city=city,
    ):
        predictions = await weather.generate_pothole_predictions(city, max_predictions)
    return {
        "success": True,
        "data": predictions,
        "city": city,
        "totalPredictions": len(predictions),
        "modelVersion": PREDICTION_MODEL_VERSION,
    }


@router.get("/alerts")
async def get_weather_alerts(
    city: str | None = Query(None),
    weather: WeatherService = Depends(get_weather_service),
):
    city = require_city(city)
    async with delegate_call(
        "weather.alerts", "Failed to generate weather alerts", city=city,
    ):
        alerts = await weather.generate_weather_alerts(city)
    return {
        "success": True,
        "data": alerts,
        "city": city,
        "alertCount": len(alerts),
        "severityBreakdown": severity_breakdown(alerts),
    }
