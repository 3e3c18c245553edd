from __future__ import annotations

import logging
import threading
import uuid
from datetime import date, datetime

from consult_booking.application.exceptions import PersistenceFailure, SlotNoLongerAvailable
from consult_booking.application.ports.booking_store import BookingStorePort
from consult_booking.application.utils.time_utils import interval, parse_date
from consult_booking.application.utils.validators import validate_booking_request
from consult_booking.domain.entities.booking import BookedSlot, Booking, BookingRequest


class BookingLedger:
    """
    Single source of truth for committed bookings.

    Overlap is half-open: [start, start + duration). A booking that starts
    exactly when another ends does not conflict. Only bookings on the same
    date are compared.
    """

    def __init__(self, store: BookingStorePort) -> None:
        self._store = store
        # Serializes read-check-write so two commits in this process cannot interleave
        self._write_lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def list_bookings(self) -> list[Booking]:
        """All committed bookings in insertion order. Returns [] if the store is unreadable."""
        try:
            return self._store.load()
        except PersistenceFailure as e:
            self._logger.error("Failed to load bookings", extra={"error": str(e)})
            return []

    def booked_slots(self, date: str) -> list[BookedSlot]:
        day = parse_date(date)
        return [
            BookedSlot(time=booking.time, duration=booking.duration)
            for booking in self.list_bookings()
            if _booking_day(booking) == day
        ]

    def is_overlapping(self, date: str, time: str, duration_minutes: int) -> bool:
        return self._find_conflict(self.list_bookings(), date, time, duration_minutes) is not None

    def commit(self, request: BookingRequest) -> Booking:
        """
        Validate, re-check overlap against the current store and persist.

        Raises:
            ValidationError: bad input; the store is not touched.
            SlotNoLongerAvailable: the slot overlaps a stored booking; store unchanged.
            PersistenceFailure: the store could not be read or written.
        """
        validate_booking_request(request)

        with self._write_lock:
            # Strict read: an unreadable store must not be overwritten with a partial set
            bookings = self._store.load()

            conflict = self._find_conflict(bookings, request.date, request.time, request.duration)
            if conflict is not None:
                self._logger.info(
                    "Slot no longer available",
                    extra={
                        "date": request.date,
                        "time": request.time,
                        "duration": request.duration,
                        "reason": f"overlaps {conflict.id}",
                    },
                )
                raise SlotNoLongerAvailable(
                    f"{request.date} {request.time} ({request.duration} min) overlaps an existing booking"
                )

            booking = Booking(
                id=str(uuid.uuid4()),
                name=request.name.strip(),
                email=request.email.strip(),
                notes=request.notes or None,
                date=request.date,
                time=request.time,
                duration=request.duration,
                created_at=datetime.now().isoformat(),
            )
            self._store.save_all([*bookings, booking])

        self._logger.info(
            "Booking committed",
            extra={
                "booking_id": booking.id,
                "date": booking.date,
                "time": booking.time,
                "duration": booking.duration,
            },
        )
        return booking

    def _find_conflict(
        self,
        bookings: list[Booking],
        date: str,
        time: str,
        duration_minutes: int,
    ) -> Booking | None:
        start, end = interval(date, time, duration_minutes)
        for booking in bookings:
            try:
                booking_start, booking_end = interval(booking.date, booking.time, booking.duration)
            except ValueError:
                self._logger.warning("Skipping booking with unparseable date or time", extra={"booking_id": booking.id})
                continue
            if booking_start.date() != start.date():
                continue
            if start < booking_end and end > booking_start:
                return booking
        return None


def _booking_day(booking: Booking) -> date | None:
    try:
        return parse_date(booking.date)
    except ValueError:
        return None
