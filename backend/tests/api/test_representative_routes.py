"""Representative Routes: coordinate checks, contact logging, history."""

import pytest

from pothole_api.api.dependencies import get_representative_service

CONTACT = {
    "potholeReportId": "0b7c6a52-9f0e-4a43-9f4e-1d2c3b4a5e6f",
    "representative": {
        "name": "Brandon Johnson",
        "office": "Mayor of Chicago",
        "level": "local",
        "messageTemplate": "Dear Mayor Johnson,",
    },
    "contactType": "email",
}


async def test_find_representatives(client, override_service):
    reps = override_service(get_representative_service)
    reps.find_representatives.return_value = [{"name": "Chicago 311"}]
    res = await client.get("/api/representatives", params={"lat": "41.88", "lng": "-87.63"})
    assert res.status_code == 200
    assert res.json() == {
        "success": True,
        "data": [{"name": "Chicago 311"}],
        "location": {"latitude": 41.88, "longitude": -87.63},
    }
    reps.find_representatives.assert_awaited_once_with(41.88, -87.63)


@pytest.mark.parametrize("params", [{}, {"lat": "41.88"}, {"lng": "-87.63"}])
async def test_find_representatives_requires_both_coordinates(client, override_service, params):
    reps = override_service(get_representative_service)
    res = await client.get("/api/representatives", params=params)
    assert res.status_code == 400
    assert res.json()["error"] == "Latitude and longitude are required"
    reps.find_representatives.assert_not_awaited()


@pytest.mark.parametrize("lat", ["north", "nan", "91"])
async def test_find_representatives_rejects_bad_values(client, override_service, lat):
    reps = override_service(get_representative_service)
    res = await client.get("/api/representatives", params={"lat": lat, "lng": "-87.63"})
    assert res.status_code == 400
    assert res.json()["error"] == "Invalid latitude or longitude values"
    reps.find_representatives.assert_not_awaited()


async def test_find_representatives_failure(client, override_service):
    reps = override_service(get_representative_service)
    reps.find_representatives.side_effect = RuntimeError("civic api down")
    res = await client.get("/api/representatives", params={"lat": "41.88", "lng": "-87.63"})
    assert res.status_code == 500
    assert res.json() == {"success": False, "error": "Failed to find representatives"}


async def test_save_contact_record(client, override_service):
    reps = override_service(get_representative_service)
    reps.save_contact_record.return_value = {"id": 1}
    res = await client.post("/api/representatives", json={**CONTACT, "userId": 7})
    assert res.status_code == 200
    assert res.json()["message"] == "Contact record saved successfully"
    reps.save_contact_record.assert_awaited_once_with(
        CONTACT["potholeReportId"],
        {
            "name": "Brandon Johnson",
            "office": "Mayor of Chicago",
            "level": "local",
            "messageTemplate": "Dear Mayor Johnson,",
        },
        "email",
        user_id=7,
        message_template_used=None,
    )


@pytest.mark.parametrize("missing", ["potholeReportId", "representative", "contactType"])
async def test_save_contact_record_requires_fields(client, override_service, missing):
    reps = override_service(get_representative_service)
    body = {k: v for k, v in CONTACT.items() if k != missing}
    res = await client.post("/api/representatives", json=body)
    assert res.status_code == 400
    assert res.json()["error"] == (
        "Missing required fields: potholeReportId, representative, contactType"
    )
    reps.save_contact_record.assert_not_awaited()


async def test_save_contact_record_rejects_unknown_contact_type(client, override_service):
    reps = override_service(get_representative_service)
    res = await client.post("/api/representatives", json={**CONTACT, "contactType": "fax"})
    assert res.status_code == 400
    assert res.json()["error"] == "Invalid data provided"
    reps.save_contact_record.assert_not_awaited()


async def test_save_contact_record_failure(client, override_service):
    reps = override_service(get_representative_service)
    reps.save_contact_record.side_effect = RuntimeError("disk full")
    res = await client.post("/api/representatives", json=CONTACT)
    assert res.status_code == 500
    assert res.json() == {"success": False, "error": "Failed to save contact record"}


async def test_history_requires_report_id(client, override_service):
    reps = override_service(get_representative_service)
    res = await client.get("/api/representatives/history", params={"reportId": " "})
    assert res.status_code == 400
    assert res.json()["error"] == "Report ID is required"
    reps.get_contact_history.assert_not_awaited()


async def test_history_failure(client, override_service):
    reps = override_service(get_representative_service)
    reps.get_contact_history.side_effect = RuntimeError("gone")
    res = await client.get("/api/representatives/history", params={"reportId": "r1"})
    assert res.status_code == 500
    assert res.json() == {"success": False, "error": "Failed to fetch contact history"}


async def test_contact_then_history_with_real_service(client):
    res = await client.get("/api/representatives", params={"lat": "40.7128", "lng": "-74.006"})
    mayor = res.json()["data"][0]
    assert mayor["name"] == "Eric Adams"

    res = await client.post("/api/representatives", json={
        "potholeReportId": "r1", "representative": mayor, "contactType": "phone",
    })
    assert res.status_code == 200
    assert res.json()["data"]["message_template_used"] == mayor["messageTemplate"]

    res = await client.get("/api/representatives/history", params={"reportId": "r1"})
    body = res.json()
    assert body["reportId"] == "r1"
    assert [h["representative_name"] for h in body["data"]] == ["Eric Adams"]
