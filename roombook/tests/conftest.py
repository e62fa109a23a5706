import pytest

from roombook.app.db.store import InMemoryDocumentStore
from roombook.app.main import app
from roombook.app.models.reservation import Reservation
from roombook.app.routers.dependencies import get_store


@pytest.fixture
def store():
    return InMemoryDocumentStore()


@pytest.fixture
def api(store):
    app.dependency_overrides[get_store] = lambda: store
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def payload():
    return {
        "meetingName": "Sync",
        "personName": "Al",
        "mobileNumber": "123-456-7890",
        "date": "2025-06-01",
        "startTime": "09:00",
        "endTime": "10:00",
        "roomSize": "small",
        "pin": "1234",
    }


@pytest.fixture
def make_reservation():
    def _make(reservation_id: str, date: str, **overrides) -> Reservation:
        fields = {
            "id": reservation_id,
            "meetingName": "Weekly Sync",
            "personName": "Alice",
            "mobileNumber": "123-456-7890",
            "date": date,
            "startTime": "10:00",
            "endTime": "11:00",
            "roomSize": "small",
            "pin": "1234",
        }
        fields.update(overrides)
        return Reservation(**fields)

    return _make
