import pytest
from httpx import ASGITransport, AsyncClient

from roombook.app.core.errors import PersistenceError
from roombook.app.routers.dependencies import get_store


pytestmark = pytest.mark.asyncio(loop_scope="module")

PREFIX = "/api/v1"


def _client(app) -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


async def test_create_and_read_reservation(api, payload):
    async with _client(api) as client:
        response = await client.post(f"{PREFIX}/reservations", json=payload)
        assert response.status_code == 201, response.text
        created = response.json()
        assert created["pin"] == "1234"
        assert created["date"] == "2025-06-01T00:00:00.000Z"

        single = await client.get(f"{PREFIX}/reservations/{created['id']}")
        listing = await client.get(f"{PREFIX}/reservations")

    assert single.status_code == 200
    assert single.json() == {key: value for key, value in created.items() if key != "pin"}
    assert listing.status_code == 200
    assert [item["id"] for item in listing.json()] == [created["id"]]
    assert "pin" not in listing.json()[0]


async def test_create_validation_errors(api, payload):
    payload["endTime"] = "08:00"
    payload["mobileNumber"] = "555"

    async with _client(api) as client:
        response = await client.post(f"{PREFIX}/reservations", json=payload)

    assert response.status_code == 422
    body = response.json()
    assert body["detail"] == "Validation failed."
    assert body["errors"]["endTime"] == ["End time must be after start time."]
    assert body["errors"]["mobileNumber"] == ["Mobile number must be in XXX-XXX-XXXX format"]


async def test_get_unknown_reservation(api):
    async with _client(api) as client:
        response = await client.get(f"{PREFIX}/reservations/missing")

    assert response.status_code == 404
    assert response.json() == {"detail": "Reservation not found."}


async def test_update_requires_matching_pin(api, payload):
    async with _client(api) as client:
        created = (await client.post(f"{PREFIX}/reservations", json=payload)).json()
        url = f"{PREFIX}/reservations/{created['id']}"
        changes = {**payload, "meetingName": "Planning"}

        missing_pin = await client.put(url, json=changes)
        wrong_pin = await client.put(url, json=changes, headers={"X-Reservation-Pin": "0000"})
        ok = await client.put(url, json=changes, headers={"X-Reservation-Pin": "1234"})

    assert missing_pin.status_code == 422
    assert missing_pin.json()["detail"] == "Validation failed."
    assert "X-Reservation-Pin" in missing_pin.json()["errors"]
    assert wrong_pin.status_code == 403
    assert wrong_pin.json() == {"detail": "Invalid PIN."}
    assert ok.status_code == 200, ok.text
    assert ok.json()["meetingName"] == "Planning"
    assert ok.json()["id"] == created["id"]
    assert "pin" not in ok.json()


async def test_update_unknown_reservation(api, payload):
    async with _client(api) as client:
        response = await client.put(
            f"{PREFIX}/reservations/missing",
            json=payload,
            headers={"X-Reservation-Pin": "1234"},
        )

    assert response.status_code == 404


async def test_delete_reservation(api, payload):
    async with _client(api) as client:
        created = (await client.post(f"{PREFIX}/reservations", json=payload)).json()
        url = f"{PREFIX}/reservations/{created['id']}"

        wrong_pin = await client.delete(url, headers={"X-Reservation-Pin": "9999"})
        deleted = await client.delete(url, headers={"X-Reservation-Pin": "itisesc"})
        after = await client.get(url)
        again = await client.delete(url, headers={"X-Reservation-Pin": "1234"})
        listing = await client.get(f"{PREFIX}/reservations")

    assert wrong_pin.status_code == 403
    assert deleted.status_code == 200
    assert deleted.json() == {"message": "Reservation deleted successfully."}
    assert after.status_code == 404
    assert again.status_code == 404
    assert listing.json() == []


async def test_verify_pin(api, payload):
    async with _client(api) as client:
        created = (await client.post(f"{PREFIX}/reservations", json=payload)).json()
        url = f"{PREFIX}/reservations/{created['id']}/verify-pin"

        ok = await client.post(url, json={"pin": "1234"})
        rejected = await client.post(url, json={"pin": "4321"})

    assert ok.json() == {"ok": True}
    assert rejected.status_code == 403


async def test_calendar(api, payload):
    async with _client(api) as client:
        for date in ("2025-01-01T09:00:00Z", "2025-01-01T15:00:00Z", "2025-01-02T09:00:00Z"):
            response = await client.post(f"{PREFIX}/reservations", json={**payload, "date": date})
            assert response.status_code == 201

        calendar = await client.get(f"{PREFIX}/reservations/calendar")
        february = await client.get(f"{PREFIX}/reservations/calendar", params={"month": "2025-02"})
        bad_month = await client.get(f"{PREFIX}/reservations/calendar", params={"month": "Jan"})

    days = calendar.json()["days"]
    assert {day: len(items) for day, items in days.items()} == {"2025-01-01": 2, "2025-01-02": 1}
    assert all("pin" not in item for items in days.values() for item in items)
    assert february.json() == {"days": {}}
    assert bad_month.status_code == 422


async def test_time_slots(api):
    async with _client(api) as client:
        everything = await client.get(f"{PREFIX}/time-slots")
        after_nine = await client.get(f"{PREFIX}/time-slots", params={"start_time": "09:00"})

    assert everything.json()["startTimes"][0] == "08:00"
    assert everything.json()["endTimes"][-1] == "24:00"
    assert after_nine.json()["endTimes"][0] == "09:30"


async def test_healthz(api):
    async with _client(api) as client:
        response = await client.get(f"{PREFIX}/healthz")

    assert response.status_code == 200
    assert response.json() == {"ok": True}


async def test_store_outage_is_reported(api, payload):
    class UnavailableStore:
        async def create(self, collection, data):
            raise PersistenceError()

        async def query_all(self, collection, order_by, direction="desc"):
            raise PersistenceError()

    api.dependency_overrides[get_store] = UnavailableStore

    async with _client(api) as client:
        created = await client.post(f"{PREFIX}/reservations", json=payload)
        listing = await client.get(f"{PREFIX}/reservations")

    assert created.status_code == 503
    assert listing.status_code == 503
    assert listing.json() == {"detail": "Storage unavailable, please try again."}
