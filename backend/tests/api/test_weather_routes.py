"""Weather Routes: days/limit bounds, risk-level breakdown, model version."""

import pytest

from pothole_api.api.dependencies import get_weather_service


async def test_weather_requires_city(client, override_service):
    weather = override_service(get_weather_service)
    res = await client.get("/api/weather")
    assert res.status_code == 400
    weather.fetch_weather_data.assert_not_awaited()


async def test_weather_invalid_date(client, override_service):
    weather = override_service(get_weather_service)
    res = await client.get("/api/weather", params={"city": "Chicago", "startDate": "2024-13-45"})
    assert res.status_code == 400
    assert res.json()["error"] == "Invalid start date format"
    weather.fetch_weather_data.assert_not_awaited()


async def test_weather_start_date_overflowing_utc_is_rejected(client, override_service):
    weather = override_service(get_weather_service)
    res = await client.get(
        "/api/weather",
        params={"city": "Chicago", "startDate": "9999-12-31T23:00:00-05:00"},
    )
    assert res.status_code == 400
    assert res.json() == {"success": False, "error": "Invalid start date format"}
    weather.fetch_weather_data.assert_not_awaited()


async def test_weather_on_last_calendar_day_with_real_service(client):
    res = await client.get(
        "/api/weather",
        params={"city": "Chicago", "startDate": "9999-12-31", "endDate": "9999-12-31"},
    )
    assert res.status_code == 200
    assert [e["eventDate"] for e in res.json()["data"]] == ["9999-12-31"]


async def test_weather_echoes_period(client, override_service):
    weather = override_service(get_weather_service)
    weather.fetch_weather_data.return_value = []
    res = await client.get(
        "/api/weather",
        params={"city": "Chicago", "startDate": "2024-02-01", "endDate": "2024-02-07"},
    )
    assert res.status_code == 200
    assert res.json()["period"] == {
        "start": "2024-02-01T00:00:00+00:00",
        "end": "2024-02-07T00:00:00+00:00",
    }


async def test_correlation(client, override_service):
    weather = override_service(get_weather_service)
    weather.calculate_weather_correlation.return_value = {"correlationStrength": 0.65}
    res = await client.get("/api/weather/correlation", params={"city": "Chicago"})
    assert res.json() == {
        "success": True, "data": {"correlationStrength": 0.65}, "city": "Chicago",
    }


async def test_correlation_failure(client, override_service):
    weather = override_service(get_weather_service)
    weather.calculate_weather_correlation.side_effect = RuntimeError("api key expired")
    res = await client.get("/api/weather/correlation", params={"city": "Chicago"})
    assert res.status_code == 500
    assert res.json() == {"success": False, "error": "Failed to calculate weather correlation"}


@pytest.mark.parametrize("days", ["1", "14"])
async def test_freeze_thaw_accepts_bounds(client, override_service, days):
    weather = override_service(get_weather_service)
    weather.get_freeze_thaw_cycles.return_value = []
    res = await client.get("/api/weather/freeze-thaw", params={"city": "Chicago", "days": days})
    assert res.status_code == 200
    assert res.json()["forecastDays"] == int(days)
    weather.get_freeze_thaw_cycles.assert_awaited_once_with("Chicago", int(days))


@pytest.mark.parametrize("days", ["0", "15", "abc", "7abc", "1" * 5000])
async def test_freeze_thaw_rejects_out_of_range(client, override_service, days):
    weather = override_service(get_weather_service)
    res = await client.get("/api/weather/freeze-thaw", params={"city": "Chicago", "days": days})
    assert res.status_code == 400
    assert res.json() == {"success": False, "error": "Days must be between 1 and 14"}
    weather.get_freeze_thaw_cycles.assert_not_awaited()


async def test_freeze_thaw_default_days_and_breakdown(client, override_service):
    weather = override_service(get_weather_service)
    weather.get_freeze_thaw_cycles.return_value = [
        {"riskLevel": "high"}, {"riskLevel": "high"}, {"riskLevel": "low"},
    ]
    res = await client.get("/api/weather/freeze-thaw", params={"city": "Chicago"})
    body = res.json()
    assert body["forecastDays"] == 7
    assert body["cycleCount"] == 3
    assert body["riskLevels"] == {"high": 2, "medium": 0, "low": 1}


@pytest.mark.parametrize("limit", ["1", "50"])
async def test_predictions_accept_bounds(client, override_service, limit):
    weather = override_service(get_weather_service)
    weather.generate_pothole_predictions.return_value = [{"probabilityScore": 80}]
    res = await client.get("/api/weather/predictions", params={"city": "Chicago", "limit": limit})
    body = res.json()
    assert res.status_code == 200
    assert body["totalPredictions"] == 1
    assert body["modelVersion"] == "v1.0"
    weather.generate_pothole_predictions.assert_awaited_once_with("Chicago", int(limit))


@pytest.mark.parametrize("limit", ["0", "51", "ten"])
async def test_predictions_reject_out_of_range(client, override_service, limit):
    weather = override_service(get_weather_service)
    res = await client.get("/api/weather/predictions", params={"city": "Chicago", "limit": limit})
    assert res.status_code == 400
    assert res.json()["error"] == "Limit must be between 1 and 50"
    weather.generate_pothole_predictions.assert_not_awaited()


async def test_predictions_default_limit(client, override_service):
    weather = override_service(get_weather_service)
    weather.generate_pothole_predictions.return_value = []
    await client.get("/api/weather/predictions", params={"city": "Chicago"})
    weather.generate_pothole_predictions.assert_awaited_once_with("Chicago", 10)


async def test_weather_alerts(client, override_service):
    weather = override_service(get_weather_service)
    weather.generate_weather_alerts.return_value = [{"severity": "high"}]
    res = await client.get("/api/weather/alerts", params={"city": "Chicago"})
    body = res.json()
    assert body["alertCount"] == 1
    assert body["severityBreakdown"] == {"critical": 0, "high": 1, "medium": 0, "low": 0}


async def test_predictions_with_real_service_and_empty_db(client):
    res = await client.get("/api/weather/predictions", params={"city": "Chicago"})
    assert res.status_code == 200
    assert res.json()["data"] == []


async def test_prediction_model_version_matches_envelope(client):
    # ~33 m apart: clear of the duplicate guard, same hotspot cell
    for latitude in (41.88001, 41.88030):
        res = await client.post("/api/reports", json={
            "latitude": latitude, "longitude": -87.63, "photoUrl": "https://img.example/p.jpg",
        })
        assert res.status_code == 201
    res = await client.get("/api/weather/predictions", params={"city": "Chicago"})
    body = res.json()
    assert body["totalPredictions"] == 1
    assert {p["modelVersion"] for p in body["data"]} == {body["modelVersion"]}
