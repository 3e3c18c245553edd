from __future__ import annotations

import logging
from typing import Any

import httpx

from consult_booking.application.exceptions import DispatchFailure
from consult_booking.application.ports.notifier import NotificationPort
from consult_booking.core.config import settings
from consult_booking.domain.entities.booking import BookingDetails
from consult_booking.domain.entities.notification import DispatchReport, EmailResult


class HttpEmailNotifier(NotificationPort):
    """Delegates delivery to a remote email service (POST {base}/api/send-booking-emails)."""

    def __init__(self, base_url: str | None = None, client: httpx.Client | None = None) -> None:
        self._base_url = (base_url or settings.EMAIL_API_URL or "").rstrip("/")
        self._client = client or httpx.Client(timeout=10.0)
        self._logger = logging.getLogger(__name__)

        if not self._base_url:
            raise ValueError("EMAIL_API_URL is required for the HTTP email notifier")

    def send_booking_emails(self, booking: BookingDetails) -> DispatchReport:
        payload = {
            "bookingData": {
                "name": booking.name,
                "email": booking.email,
                "date": booking.date,
                "time": booking.time,
                "duration": booking.duration,
                "notes": booking.notes,
            }
        }
        self._logger.info(
            "Sending booking emails via email API",
            extra={"recipient": booking.email, "date": booking.date, "time": booking.time},
        )

        try:
            response = self._client.post(f"{self._base_url}/api/send-booking-emails", json=payload)
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            self._logger.error("Error sending booking emails", extra={"error": str(e)})
            raise DispatchFailure(f"Email API request failed: {e}") from e

        results = data.get("results") or {}
        return DispatchReport(
            customer=_result(results.get("customer"), "Unknown customer email status"),
            admin=_result(results.get("admin"), "Unknown admin email status"),
        )

    def health(self) -> bool:
        try:
            response = self._client.get(f"{self._base_url}/api/health")
            return response.is_success
        except httpx.HTTPError as e:
            self._logger.error("Email service health check failed", extra={"error": str(e)})
            return False


def _result(raw: dict[str, Any] | None, default_message: str) -> EmailResult:
    raw = raw or {}
    return EmailResult(
        success=bool(raw.get("success", False)),
        message=raw.get("message") or default_message,
        error=raw.get("error"),
    )
