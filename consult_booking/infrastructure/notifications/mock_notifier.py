from __future__ import annotations

import logging

from consult_booking.application.ports.notifier import NotificationPort
from consult_booking.domain.entities.booking import BookingDetails
from consult_booking.domain.entities.notification import DispatchReport, EmailResult


class MockNotifier(NotificationPort):
    def __init__(self) -> None:
        self.sent: list[BookingDetails] = []
        self._logger = logging.getLogger(__name__)

    def send_booking_emails(self, booking: BookingDetails) -> DispatchReport:
        self.sent.append(booking)
        self._logger.info(
            "Mock booking emails sent",
            extra={"recipient": booking.email, "date": booking.date, "time": booking.time},
        )
        return DispatchReport(
            customer=EmailResult(success=True, message="Customer email sent successfully"),
            admin=EmailResult(success=True, message="Admin email sent successfully"),
        )
