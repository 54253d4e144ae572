# tests/conftest.py
from datetime import timedelta

import pytest

from hotel_backend import create_app
from hotel_backend.store.base import utcnow


@pytest.fixture(params=["mock", "sql"])
def app(request, tmp_path):
    overrides = {"MOCK_DB_PATH": str(tmp_path / "mockdb.json")}
    if request.param == "sql":
        overrides["DATABASE_URL"] = f"sqlite:///{tmp_path / 'hotel.db'}"
    app = create_app("hotel_backend.config.TestingConfig", overrides)
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def store(app):
    return app.extensions["store"]


# —— Payloads ——
@pytest.fixture
def room_payload():
    def _room_payload(**overrides):
        payload = {
            "name": "Deluxe King",
            "description": "King-sized room with city view",
            "type": "Deluxe",
            "price": 250,
            "capacity": 2,
        }
        payload.update(overrides)
        return payload
    return _room_payload


@pytest.fixture
def offer_payload():
    def _offer_payload(**overrides):
        now = utcnow()
        payload = {
            "title": "Early Bird Special",
            "description": "Book 7 days in advance and get 20% off",
            "discount": 20,
            "validFrom": (now - timedelta(days=7)).isoformat() + "Z",
            "validUntil": (now + timedelta(days=30)).isoformat() + "Z",
        }
        payload.update(overrides)
        return payload
    return _offer_payload


# —— Factories ——
@pytest.fixture
def make_room(app, store):
    def _make_room(**fields):
        record = {
            "name": "Standard Twin",
            "description": "Twin beds",
            "type": "Twin",
            "price": 150.0,
            "capacity": 2,
            "amenities": [],
            "images": [],
            "available": True,
            "rating": 4.5,
            "reviews": 0,
        }
        record.update(fields)
        with app.app_context():
            return store.rooms.create(record)
    return _make_room


@pytest.fixture
def make_offer(app, store):
    def _make_offer(valid_from=None, valid_until=None, **fields):
        now = utcnow()
        record = {
            "title": "Weekend Getaway",
            "description": "25% off Friday and Saturday stays",
            "discount": 25.0,
            "offerType": "percentage",
            "applicableRoomTypes": ["Suite"],
            "validFrom": valid_from or now - timedelta(days=1),
            "validUntil": valid_until or now + timedelta(days=1),
            "image": None,
            "code": None,
            "active": True,
        }
        record.update(fields)
        with app.app_context():
            return store.offers.create(record)
    return _make_offer


@pytest.fixture
def make_user(client):
    def _make_user(name="Ana", email="ana@example.com", password="s3cret-pass"):
        r = client.post("/api/auth/register", json={"name": name, "email": email, "password": password})
        assert r.status_code == 201
        return {"name": name, "email": email, "password": password}
    return _make_user
