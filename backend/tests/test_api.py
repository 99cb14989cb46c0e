"""API tests using FastAPI's TestClient with a mocked iCal transport."""
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from hostly import main
from hostly.main import create_app
from tests.helpers import EMPTY_FEED, SAMPLE_FEED, feed_handler, make_fetcher

GOOD_URL = "https://example.com/good.ics"
EMPTY_URL = "https://example.com/empty.ics"
BROKEN_URL = "https://example.com/broken.ics"


@pytest.fixture
def client(test_settings):
    fetcher = make_fetcher(feed_handler({
        GOOD_URL: SAMPLE_FEED,
        EMPTY_URL: EMPTY_FEED,
        BROKEN_URL: 500,
    }))
    app = create_app(test_settings, fetcher=fetcher)
    with TestClient(app) as test_client:
        yield test_client


def register(client, property_id="p1", ical_url=GOOD_URL, **extra):
    return client.post("/properties", json={"propertyId": property_id, "icalUrl": ical_url, **extra})


class TestHealth:
    def test_health(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json() == {
            "status": "ok",
            "message": "Hostly iCal Sync Backend",
            "version": "1.0.0",
        }


class TestRegisterProperty:
    """POST /properties"""

    def test_register_and_sync(self, client):
        response = register(client, name="Beach House")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["propertyId"] == "p1"
        assert body["name"] == "Beach House"
        assert body["reservationCount"] == 2
        assert body["lastSynced"] is not None

    def test_default_name(self, client):
        assert register(client, property_id="7").json()["name"] == "Property 7"

    def test_numeric_property_id(self, client):
        response = client.post("/properties", json={"propertyId": 42, "icalUrl": GOOD_URL})

        assert response.status_code == 200
        assert response.json()["propertyId"] == "42"

    def test_empty_feed(self, client):
        response = register(client, ical_url=EMPTY_URL)

        assert response.status_code == 200
        assert response.json()["reservationCount"] == 0

    @pytest.mark.parametrize("payload", [
        {"icalUrl": GOOD_URL},
        {"propertyId": "p1"},
        {},
    ])
    def test_missing_fields(self, client, payload):
        response = client.post("/properties", json=payload)

        assert response.status_code == 400
        assert response.json() == {"error": "propertyId and icalUrl are required"}
        assert client.get("/properties").json() == {"properties": []}

    def test_insecure_url(self, client):
        response = register(client, ical_url="http://example.com/good.ics")

        assert response.status_code == 400
        assert response.json() == {"error": "icalUrl must be a valid https:// URL"}
        assert client.get("/properties").json() == {"properties": []}

    def test_non_json_body(self, client):
        response = client.post("/properties", content="not json", headers={"Content-Type": "application/json"})

        assert response.status_code == 400
        assert "error" in response.json()

    def test_fetch_failure(self, client):
        response = register(client, ical_url=BROKEN_URL)

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Failed to fetch or parse iCal URL. Please check the URL and try again."
        assert "HTTP 500" in body["cause"]

        properties = client.get("/properties").json()["properties"]
        assert properties == [
            {"propertyId": "p1", "name": "Property p1", "lastSynced": None, "reservationCount": 0},
        ]

    def test_failed_reregister_keeps_previous_reservations(self, client):
        first = register(client).json()

        response = register(client, ical_url=BROKEN_URL)

        assert response.status_code == 500
        status = client.get("/properties/p1").json()
        assert status["reservationCount"] == 2
        assert status["lastSynced"] == first["lastSynced"]
        assert status["icalUrl"] == BROKEN_URL


class TestReservations:
    """GET /reservations"""

    def test_list_all(self, client):
        register(client, property_id="p1", name="Beach House")
        register(client, property_id="p2", ical_url=EMPTY_URL)

        body = client.get("/reservations").json()

        assert body["totalProperties"] == 2
        assert len(body["reservations"]) == 2
        assert body["reservations"][0] == {
            "id": "1418fb94e984-hm1234@airbnb.com",
            "propertyId": "p1",
            "guestName": "Airbnb (HM1234)",
            "checkIn": "2026-02-01",
            "checkOut": "2026-02-05",
            "nights": 4,
            "total": 0,
            "source": "airbnb",
            "summary": "Reserved - Airbnb (HM1234)",
        }
        assert [s["propertyId"] for s in body["syncStatus"]] == ["p1", "p2"]
        assert body["syncStatus"][0]["name"] == "Beach House"
        assert body["syncStatus"][0]["reservationCount"] == 2
        assert body["syncStatus"][1]["reservationCount"] == 0

    def test_filter_by_property(self, client):
        register(client, property_id="p1")
        register(client, property_id="p2")

        body = client.get("/reservations", params={"propertyId": "p2"}).json()

        assert {r["propertyId"] for r in body["reservations"]} == {"p2"}
        assert len(body["reservations"]) == 2
        assert len(body["syncStatus"]) == 2
        assert body["totalProperties"] == 2

    def test_empty_store(self, client):
        assert client.get("/reservations").json() == {
            "reservations": [],
            "syncStatus": [],
            "totalProperties": 0,
        }


class TestSync:
    """POST /sync and POST /properties/{id}/sync"""

    def test_sync_all(self, client):
        register(client, property_id="p1")
        register(client, property_id="p2", ical_url=BROKEN_URL)

        response = client.post("/sync")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        statuses = {s["propertyId"]: s for s in body["syncStatus"]}
        assert statuses["p1"]["reservationCount"] == 2
        assert statuses["p1"]["lastSynced"] is not None
        assert statuses["p2"]["reservationCount"] == 0
        assert statuses["p2"]["lastSynced"] is None

    def test_sync_one(self, client):
        register(client, property_id="p1")

        response = client.post("/properties/p1/sync")

        assert response.status_code == 200
        assert response.json()["reservationCount"] == 2

    def test_sync_one_failure(self, client):
        register(client, property_id="p1", ical_url=BROKEN_URL)

        response = client.post("/properties/p1/sync")

        assert response.status_code == 500

    def test_sync_one_unknown(self, client):
        response = client.post("/properties/nope/sync")

        assert response.status_code == 404
        assert response.json() == {"error": "Property not found"}


class TestPropertyManagement:
    """GET/DELETE /properties, POST /reset"""

    def test_list_properties(self, client):
        register(client, property_id="p1", name="Beach House")

        properties = client.get("/properties").json()["properties"]

        assert len(properties) == 1
        assert properties[0]["propertyId"] == "p1"
        assert properties[0]["name"] == "Beach House"
        assert properties[0]["reservationCount"] == 2
        assert set(properties[0]) == {"propertyId", "name", "lastSynced", "reservationCount"}

    def test_get_property(self, client):
        register(client, property_id="p1")

        body = client.get("/properties/p1").json()

        assert body["icalUrl"] == GOOD_URL
        assert body["reservationCount"] == 2

    def test_get_unknown_property(self, client):
        assert client.get("/properties/nope").status_code == 404

    def test_remove_property(self, client):
        register(client, property_id="p1")

        response = client.delete("/properties/p1")

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Property p1 removed"}
        assert client.get("/properties").json() == {"properties": []}

    def test_remove_unknown_property(self, client):
        register(client, property_id="p1")

        response = client.delete("/properties/nope")

        assert response.status_code == 404
        assert response.json() == {"error": "Property not found"}
        assert len(client.get("/properties").json()["properties"]) == 1

    @pytest.mark.parametrize("count", [0, 2])
    def test_reset(self, client, count):
        for i in range(count):
            register(client, property_id=f"p{i}")

        response = client.post("/reset")

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "All properties cleared"}
        assert client.get("/reservations").json()["totalProperties"] == 0


class TestSchedulerStatus:
    def test_disabled_scheduler(self, client):
        assert client.get("/scheduler/status").json() == {
            "running": False,
            "nextRun": None,
            "cronMinute": 0,
        }


class TestModuleApp:
    """`uvicorn hostly.main:app` target."""

    def test_module_level_app(self):
        paths = {route.path for route in main.app.routes}

        assert isinstance(main.app, FastAPI)
        assert {"/", "/properties", "/reservations", "/sync", "/reset", "/scheduler/status"} <= paths
        assert isinstance(main.app.state.store, main.PropertyStore)
