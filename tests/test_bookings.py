import re
import uuid

import pytest

from app.models.booking import Booking
from app.services import booking_service
from conftest import auth, create_booking, register

REF_PATTERN = re.compile(r"^FLIGHT-[0-9A-Z]+-[0-9A-Z]{5}$")


def _set_status(client, admin_token, booking_id, status):
    return client.patch(f"/api/v1/bookings/{booking_id}/status", headers=auth(admin_token), json={"status": status})


def test_make_booking_ref_shape():
    ref = booking_service.make_booking_ref("hotel", now_ms=36 ** 3)
    assert ref.startswith("HOTEL-1000-")
    assert ref == ref.upper()
    assert len(ref.split("-")[2]) == 5


def test_allocate_booking_ref_retries_on_collision(db, monkeypatch, client, user_token):
    existing = create_booking(client, user_token)["bookingReference"]
    refs = iter([existing, existing, "FLIGHT-NEW-ABCDE"])
    monkeypatch.setattr(booking_service, "make_booking_ref", lambda booking_type: next(refs))
    assert booking_service.allocate_booking_ref(db, "flight") == "FLIGHT-NEW-ABCDE"


def test_allocate_booking_ref_gives_up(db, monkeypatch, client, user_token):
    existing = create_booking(client, user_token)["bookingReference"]
    monkeypatch.setattr(booking_service, "make_booking_ref", lambda booking_type: existing)
    with pytest.raises(RuntimeError):
        booking_service.allocate_booking_ref(db, "flight")


def test_create_booking_generates_reference(client, user_token):
    b = create_booking(client, user_token)
    assert REF_PATTERN.match(b["bookingReference"])
    assert b["status"] == "pending"
    assert b["currency"] == "USD"
    assert b["user"]["email"] == "traveler@example.com"
    assert "password" not in b["user"]


def test_create_booking_rejects_negative_amount_and_empty_details(client, user_token):
    r = client.post("/api/v1/bookings", headers=auth(user_token), json={
        "type": "spaceship", "totalAmount": -1, "bookingDetails": {},
    })
    assert r.status_code == 400
    fields = {e["field"] for e in r.json()["errors"]}
    assert {"type", "totalAmount", "bookingDetails"} <= fields


def test_duplicate_reference_is_conflict(client, user_token, db):
    create_booking(client, user_token, bookingReference="trip-001")
    r = client.post("/api/v1/bookings", headers=auth(user_token), json={
        "type": "hotel", "totalAmount": 10, "bookingDetails": {"checkIn": "2099-02-01"},
        "bookingReference": "TRIP-001",
    })
    assert r.status_code == 400
    assert r.json()["message"] == "Booking reference already exists"
    assert db.query(Booking).count() == 1


def test_list_bookings_filters_and_paginates(client, user_token):
    for _ in range(3):
        create_booking(client, user_token)
    create_booking(client, user_token, type="hotel", bookingDetails={"checkIn": "2099-03-01"})

    r = client.get("/api/v1/bookings", headers=auth(user_token), params={"type": "flight", "limit": 2})
    body = r.json()
    assert r.status_code == 200
    assert len(body["data"]["bookings"]) == 2
    assert body["pagination"] == {"page": 1, "limit": 2, "total": 3, "totalPages": 2}

    r = client.get("/api/v1/bookings", headers=auth(user_token), params={"type": "flight", "limit": 2, "page": 5})
    assert r.json()["data"]["bookings"] == []
    assert r.json()["pagination"]["total"] == 3

    r = client.get("/api/v1/bookings", headers=auth(user_token), params={"status": "cancelled"})
    assert r.json()["pagination"]["total"] == 0


def test_list_bookings_rejects_bad_filters(client, user_token):
    r = client.get("/api/v1/bookings", headers=auth(user_token), params={"status": "lost", "limit": 500})
    assert r.status_code == 400
    assert {e["field"] for e in r.json()["errors"]} == {"status", "limit"}


def test_list_bookings_huge_page_is_empty(client, user_token):
    create_booking(client, user_token)
    r = client.get("/api/v1/bookings", headers=auth(user_token), params={"page": 10**19})
    assert r.status_code == 200
    assert r.json()["data"]["bookings"] == []
    assert r.json()["pagination"]["total"] == 1
    assert r.json()["pagination"]["totalPages"] == 1


def test_booking_is_owner_only(client, user_token):
    b = create_booking(client, user_token)
    other = register(client, email="other@example.com")["token"]
    assert client.get(f"/api/v1/bookings/{b['id']}", headers=auth(other)).status_code == 404
    assert client.delete(f"/api/v1/bookings/{b['id']}", headers=auth(other)).status_code == 404
    r = client.get(f"/api/v1/bookings/{b['id']}", headers=auth(user_token))
    assert r.status_code == 200
    assert r.json()["data"]["booking"]["id"] == b["id"]


def test_booking_unknown_and_malformed_ids(client, user_token):
    r = client.get(f"/api/v1/bookings/{uuid.uuid4()}", headers=auth(user_token))
    assert r.status_code == 404
    assert r.json()["message"] == "Booking not found"
    r = client.get("/api/v1/bookings/not-an-id", headers=auth(user_token))
    assert r.status_code == 400


def test_cancel_pending_then_recancel_fails(client, user_token):
    b = create_booking(client, user_token)
    r = client.delete(f"/api/v1/bookings/{b['id']}", headers=auth(user_token))
    assert r.status_code == 200
    assert r.json()["data"]["booking"]["status"] == "cancelled"
    r = client.delete(f"/api/v1/bookings/{b['id']}", headers=auth(user_token))
    assert r.status_code == 400
    assert r.json()["message"] == "Booking is already cancelled"


def test_cancel_confirmed_succeeds(client, user_token, admin_token):
    b = create_booking(client, user_token)
    assert _set_status(client, admin_token, b["id"], "confirmed").status_code == 200
    r = client.delete(f"/api/v1/bookings/{b['id']}", headers=auth(user_token))
    assert r.status_code == 200


def test_cancel_completed_fails(client, user_token, admin_token):
    b = create_booking(client, user_token)
    _set_status(client, admin_token, b["id"], "confirmed")
    assert _set_status(client, admin_token, b["id"], "completed").json()["data"]["booking"]["status"] == "completed"
    r = client.delete(f"/api/v1/bookings/{b['id']}", headers=auth(user_token))
    assert r.status_code == 400
    assert r.json()["message"] == "Cannot cancel a completed booking"


def test_status_transitions_are_forward_only(client, user_token, admin_token):
    b = create_booking(client, user_token)
    r = _set_status(client, admin_token, b["id"], "completed")
    assert r.status_code == 400
    assert r.json()["message"] == "Cannot change booking status from pending to completed"
    _set_status(client, admin_token, b["id"], "cancelled")
    r = _set_status(client, admin_token, b["id"], "confirmed")
    assert r.status_code == 400


def test_status_change_is_admin_only(client, user_token):
    b = create_booking(client, user_token)
    r = _set_status(client, user_token, b["id"], "confirmed")
    assert r.status_code == 403
    assert r.json()["message"] == "Access denied. Insufficient permissions."


def test_get_by_reference_is_case_insensitive(client, user_token):
    b = create_booking(client, user_token)
    r = client.get(f"/api/v1/bookings/reference/{b['bookingReference'].lower()}", headers=auth(user_token))
    assert r.status_code == 200
    assert r.json()["data"]["booking"]["id"] == b["id"]
    r = client.get("/api/v1/bookings/reference/NOPE-1", headers=auth(user_token))
    assert r.status_code == 404
    assert r.json()["message"] == "Booking not found with this reference number"


def test_stats_summary(client, user_token):
    create_booking(client, user_token, totalAmount=100)
    create_booking(client, user_token, totalAmount=50)
    h = create_booking(client, user_token, type="hotel", totalAmount=300, bookingDetails={"checkIn": "2099-03-01"})
    client.delete(f"/api/v1/bookings/{h['id']}", headers=auth(user_token))

    r = client.get("/api/v1/bookings/stats/summary", headers=auth(user_token))
    summary = r.json()["data"]["summary"]
    assert summary["totalBookings"] == 3
    by_type = {row["type"]: row for row in summary["bookingsByType"]}
    assert by_type["flight"] == {"type": "flight", "count": 2, "totalAmount": 150.0}
    assert by_type["hotel"]["count"] == 1
    by_status = {row["status"]: row["count"] for row in summary["bookingsByStatus"]}
    assert by_status == {"pending": 2, "cancelled": 1}
    assert len(summary["recentBookings"]) == 3
