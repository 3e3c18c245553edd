#!/usr/bin/env python3
"""Smoke check for the booking API against a running server."""

import sys
from datetime import date, timedelta

import httpx


BASE_URL = "http://127.0.0.1:8001"


def check_slots(day: str) -> str | None:
    print("=" * 60)
    print(f"GET /api/slots?date={day}")
    print("=" * 60)

    try:
        response = httpx.get(f"{BASE_URL}/api/slots", params={"date": day, "duration": 30}, timeout=10.0)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        print(f"HTTP Error: {e.response.status_code}")
        print(f"Response: {e.response.text}")
        return None

    data = response.json()
    print(f"{data['available_count']} of {data['total_count']} available")
    free = [s["time"] for s in data["slots"] if s["available"]]
    return free[0] if free else None


def check_booking(day: str, slot: str) -> None:
    print("\n" + "=" * 60)
    print("POST /api/bookings (twice, second must be rejected)")
    print("=" * 60)

    payload = {
        "name": "Smoke Test",
        "email": "smoke@example.com",
        "date": day,
        "time": slot,
        "duration": 30,
        "notes": "created by scripts/smoke_api.py",
    }
    first = httpx.post(f"{BASE_URL}/api/bookings", json=payload, timeout=10.0)
    print(f"first: {first.status_code} {first.json().get('booking', {}).get('id')}")
    second = httpx.post(f"{BASE_URL}/api/bookings", json=payload, timeout=10.0)
    print(f"second: {second.status_code} {second.json().get('detail')}")


def main():
    try:
        httpx.get(f"{BASE_URL}/health", timeout=5.0)
        print("Server is running\n")
    except Exception:
        print("Server is not running!")
        print("   Please start it with: uvicorn consult_booking.main:app --reload --port 8001")
        sys.exit(1)

    day = (date.today() + timedelta(days=1)).isoformat()
    slot = check_slots(day)
    if slot is None:
        print(f"No free slot on {day}")
        sys.exit(1)
    check_booking(day, slot)


if __name__ == "__main__":
    main()
