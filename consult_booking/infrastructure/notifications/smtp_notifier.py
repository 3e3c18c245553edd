from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage
from email.utils import formataddr

from consult_booking.application.exceptions import DispatchFailure
from consult_booking.application.ports.notifier import NotificationPort
from consult_booking.core.config import settings
from consult_booking.domain.entities.booking import BookingDetails
from consult_booking.domain.entities.notification import DispatchReport, EmailResult
from consult_booking.infrastructure.calendar.ics import generate_ics_event, ics_filename
from consult_booking.infrastructure.notifications.templates import (
    admin_email_html,
    admin_subject,
    customer_email_html,
    customer_subject,
)


class SmtpNotifier(NotificationPort):
    def __init__(
        self,
        host: str | None = None,
        port: int | None = None,
        user: str | None = None,
        password: str | None = None,
        admin_email: str | None = None,
        from_email: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self._host = host or settings.SMTP_HOST
        self._port = port or settings.SMTP_PORT
        self._user = user or settings.SMTP_USER
        self._password = password or settings.SMTP_PASS
        self._admin_email = admin_email or settings.ADMIN_EMAIL
        self._from_email = from_email or settings.FROM_EMAIL
        self._timeout = timeout or settings.SMTP_TIMEOUT_SECONDS
        self._logger = logging.getLogger(__name__)

        if not self._user or not self._password:
            raise ValueError("SMTP_USER and SMTP_PASS are required for SMTP notifications")

    def send_booking_emails(self, booking: BookingDetails) -> DispatchReport:
        ics_content = generate_ics_event(booking)
        if not ics_content:
            raise DispatchFailure("Failed to generate calendar invite")

        customer_message = self._build_message(
            to=booking.email,
            sender_name=settings.BUSINESS_NAME,
            subject=customer_subject(booking),
            html=customer_email_html(booking),
            ics_content=ics_content,
            ics_name=ics_filename(booking),
        )
        admin_message = self._build_message(
            to=self._admin_email,
            sender_name=f"{settings.BUSINESS_NAME} Booking System",
            subject=admin_subject(booking),
            html=admin_email_html(booking),
            ics_content=ics_content,
            ics_name=ics_filename(booking),
        )

        try:
            with smtplib.SMTP(self._host, self._port, timeout=self._timeout) as smtp:
                smtp.starttls()
                smtp.login(self._user, self._password)
                customer = self._send(smtp, customer_message, "customer")
                admin = self._send(smtp, admin_message, "admin")
        except (smtplib.SMTPException, OSError) as e:
            self._logger.error("SMTP connection failed", extra={"error": str(e), "host": self._host})
            raise DispatchFailure(f"SMTP connection failed: {e}") from e

        report = DispatchReport(customer=customer, admin=admin)
        self._logger.info(
            "Email sending results",
            extra={"reason": f"customer={customer.success} admin={admin.success}"},
        )
        return report

    def _build_message(
        self,
        to: str,
        sender_name: str,
        subject: str,
        html: str,
        ics_content: str,
        ics_name: str,
    ) -> EmailMessage:
        message = EmailMessage()
        message["From"] = formataddr((sender_name, self._from_email))
        message["To"] = to
        message["Subject"] = subject
        message.set_content("Your booking details are in the HTML part of this message.")
        message.add_alternative(html, subtype="html")
        message.add_attachment(
            ics_content.encode("utf-8"),
            maintype="text",
            subtype="calendar",
            filename=ics_name,
        )
        return message

    def _send(self, smtp: smtplib.SMTP, message: EmailMessage, role: str) -> EmailResult:
        try:
            smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            self._logger.warning(
                "Failed to send email",
                extra={"recipient": role, "error": str(e)},
            )
            return EmailResult(success=False, message=f"Failed to send {role} email", error=str(e))
        return EmailResult(success=True, message=f"{role.capitalize()} email sent successfully")
