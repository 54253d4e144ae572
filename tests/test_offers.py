import json
from datetime import timedelta

from hotel_backend.store.base import utcnow


def test_create_offer_applies_defaults(client, offer_payload):
    r = client.post("/api/offers", json=offer_payload(code="EARLYBIRD20"))
    assert r.status_code == 201
    offer = r.get_json()["offer"]
    assert offer["offerType"] == "percentage"
    assert offer["applicableRoomTypes"] == []
    assert offer["active"] is True
    assert offer["code"] == "EARLYBIRD20"
    assert offer["validFrom"].endswith("+00:00")


def test_create_offer_missing_fields(client, offer_payload):
    payload = offer_payload()
    del payload["validUntil"]
    r = client.post("/api/offers", json=payload)
    assert r.status_code == 400
    assert r.get_json()["message"] == "All required fields must be provided"


def test_create_offer_discount_out_of_range(client, offer_payload):
    r = client.post("/api/offers", json=offer_payload(discount=150))
    assert r.status_code == 400
    assert [e["field"] for e in r.get_json()["errors"]] == ["discount"]


def test_create_offer_unknown_offer_type(client, offer_payload):
    r = client.post("/api/offers", json=offer_payload(offerType="bogo"))
    assert r.status_code == 400


def test_create_offer_window_must_be_ordered(client, offer_payload):
    now = utcnow()
    r = client.post(
        "/api/offers",
        json=offer_payload(validFrom=now.isoformat(), validUntil=(now - timedelta(days=1)).isoformat()),
    )
    assert r.status_code == 400


def test_duplicate_offer_code_conflicts(client, offer_payload):
    assert client.post("/api/offers", json=offer_payload(code="STAY30")).status_code == 201
    r = client.post("/api/offers", json=offer_payload(code="STAY30"))
    assert r.status_code == 400
    assert r.get_json()["message"] == "Offer code already exists"


def test_offers_without_code_do_not_collide(client, offer_payload):
    assert client.post("/api/offers", json=offer_payload()).status_code == 201
    assert client.post("/api/offers", json=offer_payload()).status_code == 201
    assert len(client.get("/api/offers").get_json()["offers"]) == 2


def test_active_offers_respect_window_and_flag(client, make_offer):
    now = utcnow()
    current = make_offer(title="Current")
    make_offer(title="Expired", valid_from=now - timedelta(days=10), valid_until=now - timedelta(days=1))
    make_offer(title="Upcoming", valid_from=now + timedelta(days=1), valid_until=now + timedelta(days=10))
    make_offer(title="Switched off", active=False)

    offers = client.get("/api/offers/active").get_json()["offers"]
    assert [offer["_id"] for offer in offers] == [current["_id"]]


def test_offer_by_code(client, make_offer):
    offer = make_offer(code="WEEKEND25")
    r = client.get("/api/offers/code/WEEKEND25")
    assert r.status_code == 200
    assert r.get_json()["offer"]["_id"] == offer["_id"]


def test_offer_by_code_expired_or_unknown(client, make_offer):
    now = utcnow()
    make_offer(code="OLD10", valid_from=now - timedelta(days=10), valid_until=now - timedelta(days=1))

    for code in ("OLD10", "NOPE"):
        r = client.get(f"/api/offers/code/{code}")
        assert r.status_code == 404
        assert r.get_json()["message"] == "Invalid or expired offer code"


def test_get_offer_by_id(client, make_offer):
    offer = make_offer()
    assert client.get(f"/api/offers/{offer['_id']}").get_json()["offer"]["title"] == offer["title"]
    assert client.get("/api/offers/does-not-exist").status_code == 404


def test_update_offer(client, make_offer):
    offer = make_offer()
    r = client.put(f"/api/offers/{offer['_id']}", json={"discount": 40, "active": False})
    assert r.status_code == 200
    updated = r.get_json()["offer"]
    assert updated["discount"] == 40
    assert updated["active"] is False
    assert updated["title"] == offer["title"]


def test_update_offer_rejects_taken_code(client, make_offer):
    make_offer(code="LOYAL50")
    other = make_offer()
    r = client.put(f"/api/offers/{other['_id']}", json={"code": "LOYAL50"})
    assert r.status_code == 400
    assert r.get_json()["message"] == "Offer code already exists"


def test_update_offer_keeps_window_ordered(client, make_offer):
    offer = make_offer()
    past = (utcnow() - timedelta(days=30)).isoformat()
    r = client.put(f"/api/offers/{offer['_id']}", json={"validUntil": past})
    assert r.status_code == 400


def test_update_missing_offer(client):
    assert client.put("/api/offers/does-not-exist", json={"discount": 5}).status_code == 404


def test_delete_offer(client, make_offer):
    offer = make_offer()
    assert client.delete(f"/api/offers/{offer['_id']}").status_code == 200
    r = client.delete(f"/api/offers/{offer['_id']}")
    assert r.status_code == 404
    assert r.get_json()["message"] == "Offer not found"


def test_create_offer_rejects_nan_discount(client, offer_payload):
    body = json.dumps(offer_payload(discount=float("nan")))
    r = client.post("/api/offers", data=body, content_type="application/json")
    assert r.status_code == 400
    assert r.get_json()["message"] == "Validation failed"
    assert client.get("/api/offers").get_json()["offers"] == []
