from __future__ import annotations

import logging
from datetime import date
from typing import Callable

from consult_booking.application.exceptions import DispatchFailure, ValidationError
from consult_booking.application.ports.notifier import NotificationPort
from consult_booking.application.use_cases.availability import AvailabilityGenerator
from consult_booking.application.use_cases.ledger import BookingLedger
from consult_booking.application.utils.validators import validate_booking_request, validate_date
from consult_booking.domain.entities.booking import Booking, BookingDetails, BookingRequest
from consult_booking.domain.entities.notification import DispatchReport
from consult_booking.domain.entities.slot import CalendarMonth, SlotAvailability

# Receives a zero-arg job to run after the response, e.g. BackgroundTasks.add_task
Scheduler = Callable[[Callable[[], object]], None]


class SchedulingService:
    """
    Availability and booking flow on top of the generator and the ledger.

    Booking attempt: validate fields -> ledger commit (re-checks overlap) ->
    hand the committed booking to the notifier. Notification problems are
    logged and never undo a commit.
    """

    def __init__(
        self,
        generator: AvailabilityGenerator,
        ledger: BookingLedger,
        notifier: NotificationPort | None = None,
        allowed_durations: list[int] | None = None,
        notifications_enabled: bool = True,
    ) -> None:
        self._generator = generator
        self._ledger = ledger
        self._notifier = notifier
        self._allowed_durations = list(allowed_durations or [])
        self._notifications_enabled = notifications_enabled
        self._logger = logging.getLogger(__name__)

    @property
    def allowed_durations(self) -> list[int]:
        return list(self._allowed_durations)

    def calendar_month(self, reference_month: date, today: date | None = None) -> CalendarMonth:
        return self._generator.calendar_month(reference_month, today or date.today())

    def available_slots(self, day: str, duration_minutes: int) -> list[SlotAvailability]:
        """Every candidate slot for the day, flagged free or taken."""
        validate_date(day)
        self._check_allowed_duration(duration_minutes)

        return [
            SlotAvailability(
                date=day,
                time=slot,
                duration=duration_minutes,
                available=not self._ledger.is_overlapping(day, slot, duration_minutes),
            )
            for slot in self._generator.enumerate_slots(day, duration_minutes)
        ]

    def book(self, request: BookingRequest, schedule: Scheduler | None = None) -> Booking:
        """
        Commit a booking and queue its notifications.

        `schedule` defers the dispatch (fire-and-forget); without it the
        dispatch runs inline after the commit.
        """
        validate_booking_request(request)
        self._check_allowed_duration(request.duration)

        booking = self._ledger.commit(request)

        if self._notifications_enabled and self._notifier is not None:
            if schedule is not None:
                schedule(lambda: self.dispatch_notifications(booking))
            else:
                self.dispatch_notifications(booking)

        return booking

    def dispatch_notifications(self, booking: BookingDetails) -> DispatchReport | None:
        booking_id = getattr(booking, "id", None)
        if self._notifier is None:
            return None
        try:
            report = self._notifier.send_booking_emails(booking)
        except DispatchFailure as e:
            self._logger.warning(
                "Booking notifications failed",
                extra={"booking_id": booking_id, "error": str(e)},
            )
            return None
        except Exception as e:
            self._logger.exception(
                "Unexpected error dispatching notifications",
                extra={"booking_id": booking_id, "error": str(e)},
            )
            return None

        if not report.success:
            self._logger.warning(
                "No booking notification was delivered",
                extra={"booking_id": booking_id, "reason": report.customer.error or report.customer.message},
            )
        return report

    def _check_allowed_duration(self, duration_minutes: int) -> None:
        if self._allowed_durations and duration_minutes not in self._allowed_durations:
            raise ValidationError(
                f"Duration must be one of {self._allowed_durations} minutes, got {duration_minutes!r}"
            )
