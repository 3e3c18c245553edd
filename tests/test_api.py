"""
HTTP tests for the booking API with an in-memory store and mock notifier.
"""

from __future__ import annotations

from datetime import date

import pytest
from fastapi.testclient import TestClient

from consult_booking.application.use_cases.availability import AvailabilityGenerator
from consult_booking.application.use_cases.ledger import BookingLedger
from consult_booking.application.use_cases.scheduling import SchedulingService
from consult_booking.infrastructure.notifications.mock_notifier import MockNotifier
from consult_booking.infrastructure.store.memory_store import MemoryBookingStore
from consult_booking.main import app
from consult_booking.wiring.dependencies import get_ledger, get_notifier, get_scheduling_service


@pytest.fixture
def notifier() -> MockNotifier:
    return MockNotifier()


@pytest.fixture
def client(notifier: MockNotifier):
    ledger = BookingLedger(MemoryBookingStore())
    service = SchedulingService(
        generator=AvailabilityGenerator(),
        ledger=ledger,
        notifier=notifier,
        allowed_durations=[30],
    )
    app.dependency_overrides[get_ledger] = lambda: ledger
    app.dependency_overrides[get_notifier] = lambda: notifier
    app.dependency_overrides[get_scheduling_service] = lambda: service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def _payload(**overrides):
    payload = {
        "name": "Grace Hopper",
        "email": "grace@example.com",
        "date": "2025-06-10",
        "time": "13:00",
        "duration": 30,
        "notes": "Compiler questions",
    }
    payload.update(overrides)
    return payload


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_slots_for_empty_day(client):
    response = client.get("/api/slots", params={"date": "2025-06-10", "duration": 30})

    assert response.status_code == 200
    data = response.json()
    assert data["total_count"] == 12
    assert data["available_count"] == 12
    assert data["slots"][0] == {"time": "12:00", "available": True}
    assert data["slots"][-1]["time"] == "17:30"


def test_slots_reject_bad_date(client):
    assert client.get("/api/slots", params={"date": "June 10", "duration": 30}).status_code == 400


def test_create_booking_marks_slot_taken_and_notifies(client, notifier):
    response = client.post("/api/bookings", json=_payload())

    assert response.status_code == 201
    body = response.json()
    booking = body["booking"]
    assert booking["id"]
    assert booking["createdAt"]
    assert booking["time"] == "13:00"
    assert body["calendar_links"]["google"].startswith("https://calendar.google.com/")
    # Background task ran after the response
    assert [b.id for b in notifier.sent] == [booking["id"]]

    slots = client.get("/api/slots", params={"date": "2025-06-10", "duration": 30}).json()
    assert slots["available_count"] == 11
    assert {"time": "13:00", "available": False} in slots["slots"]

    listed = client.get("/api/bookings").json()
    assert [b["id"] for b in listed] == [booking["id"]]


def test_double_booking_returns_conflict(client):
    assert client.post("/api/bookings", json=_payload()).status_code == 201

    response = client.post("/api/bookings", json=_payload(email="other@example.com"))

    assert response.status_code == 409
    assert "choose another slot" in response.json()["detail"]
    assert len(client.get("/api/bookings").json()) == 1


@pytest.mark.parametrize(
    "overrides",
    [
        {"duration": 0},
        {"email": "nope"},
        {"name": ""},
        {"time": "1pm"},
        {"duration": 45},
        {"date": "2025-6-10"},
        {"time": "9:05"},
    ],
)
def test_invalid_booking_is_rejected(client, overrides):
    response = client.post("/api/bookings", json=_payload(**overrides))

    assert response.status_code == 400
    assert client.get("/api/bookings").json() == []


def test_invite_download(client):
    booking_id = client.post("/api/bookings", json=_payload()).json()["booking"]["id"]

    response = client.get(f"/api/bookings/{booking_id}/invite.ics")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/calendar")
    assert "qaxp-booking-2025-06-10-1300.ics" in response.headers["content-disposition"]
    assert "DTSTART:20250610T130000" in response.text


def test_invite_for_unknown_booking(client):
    assert client.get("/api/bookings/missing/invite.ics").status_code == 404


def test_dates_for_future_month(client):
    response = client.get("/api/dates", params={"month": "2099-01"})

    assert response.status_code == 200
    data = response.json()
    assert data["month"] == "2099-01"
    assert len(data["dates"]) == 31
    assert data["can_go_previous"] is True
    assert data["previous_month"] == "2098-12"
    assert data["next_month"] == "2099-02"


def test_dates_for_past_month_roll_to_current(client):
    data = client.get("/api/dates", params={"month": "2000-01"}).json()

    today = date.today()
    assert data["month"] == today.strftime("%Y-%m")
    assert data["dates"][0] == today.isoformat()
    assert data["can_go_previous"] is False
    assert data["previous_month"] is None


def test_dates_reject_bad_month(client):
    assert client.get("/api/dates", params={"month": "January"}).status_code == 400


def test_send_booking_emails_endpoint(client, notifier):
    response = client.post("/api/send-booking-emails", json={"bookingData": _payload()})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["results"]["customer"]["success"] is True
    assert body["results"]["admin"]["success"] is True
    assert notifier.sent[0].email == "grace@example.com"


def test_unpadded_date_does_not_book_a_taken_slot(client):
    assert client.post("/api/bookings", json=_payload()).status_code == 201

    response = client.post("/api/bookings", json=_payload(date="2025-6-10", email="other@example.com"))

    assert response.status_code == 400
    assert len(client.get("/api/bookings").json()) == 1


def test_slots_reject_unpadded_date(client):
    assert client.get("/api/slots", params={"date": "2025-6-10", "duration": 30}).status_code == 400
