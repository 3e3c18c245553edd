from __future__ import annotations

from typing import Iterable

from consult_booking.application.ports.booking_store import BookingStorePort
from consult_booking.domain.entities.booking import Booking


class MemoryBookingStore(BookingStorePort):
    def __init__(self, bookings: Iterable[Booking] | None = None) -> None:
        self._bookings: list[Booking] = list(bookings or [])

    def load(self) -> list[Booking]:
        return list(self._bookings)

    def save_all(self, bookings: Iterable[Booking]) -> None:
        self._bookings = list(bookings)

    def clear(self) -> None:
        self._bookings = []
