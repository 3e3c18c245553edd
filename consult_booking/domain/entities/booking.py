from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BookingRequest:
    name: str
    email: str
    date: str  # YYYY-MM-DD
    time: str  # HH:MM
    duration: int  # minutes
    notes: str | None = None


@dataclass(frozen=True)
class Booking:
    id: str
    name: str
    email: str
    date: str  # YYYY-MM-DD, naive local
    time: str  # HH:MM, 24h
    duration: int  # minutes
    created_at: str  # ISO timestamp, set at commit
    notes: str | None = None


@dataclass(frozen=True)
class BookedSlot:
    time: str
    duration: int


# Anything carrying the fields a notification or calendar invite needs
BookingDetails = Booking | BookingRequest
