from __future__ import annotations

from typing import Any

from consult_booking.domain.entities.booking import Booking


def serialize_booking(booking: Booking) -> dict[str, Any]:
    """Booking -> stored record, using the persisted field names."""
    return {
        "id": booking.id,
        "name": booking.name,
        "email": booking.email,
        "notes": booking.notes,
        "date": booking.date,
        "time": booking.time,
        "duration": booking.duration,
        "createdAt": booking.created_at,
    }


def deserialize_booking(data: dict[str, Any]) -> Booking:
    """Stored record -> Booking. Raises KeyError/TypeError/ValueError on malformed records."""
    return Booking(
        id=str(data["id"]),
        name=str(data["name"]),
        email=str(data["email"]),
        notes=data.get("notes") or None,
        date=str(data["date"]),
        time=str(data["time"]),
        duration=int(data["duration"]),
        created_at=str(data["createdAt"]),
    )
