from __future__ import annotations

from html import escape

from consult_booking.application.utils.time_utils import combine
from consult_booking.core.config import settings
from consult_booking.domain.entities.booking import BookingDetails


def format_date(date: str, time: str) -> str:
    """'Tuesday, June 10, 2025 at 01:00 PM'"""
    return combine(date, time).strftime("%A, %B %d, %Y at %I:%M %p")


def customer_subject(booking: BookingDetails) -> str:
    return f"Booking Confirmation - {format_date(booking.date, booking.time)}"


def admin_subject(booking: BookingDetails) -> str:
    return f"New Booking: {booking.name} - {format_date(booking.date, booking.time)}"


def _details_block(booking: BookingDetails) -> str:
    rows = [
        ("Date &amp; Time", escape(format_date(booking.date, booking.time))),
        ("Duration", f"{booking.duration} minutes"),
        ("Contact Email", escape(booking.email)),
    ]
    if booking.notes:
        rows.append(("Notes", escape(booking.notes)))
    return "\n".join(
        f'<div class="detail-row"><span class="label">{label}:</span> <span class="value">{value}</span></div>'
        for label, value in rows
    )


def customer_email_html(booking: BookingDetails) -> str:
    business = escape(settings.BUSINESS_NAME)
    return f"""<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><title>Booking Confirmation - {business}</title></head>
<body>
  <h1>Booking Confirmed!</h1>
  <p>Dear {escape(booking.name)},</p>
  <p>Your consultation has been successfully booked. Here are the details:</p>
  <div class="booking-details">
{_details_block(booking)}
  </div>
  <p>A calendar invite has been attached to this email. Please add it to your calendar to receive reminders.</p>
  <p>If you need to reschedule or cancel, please contact us at least 24 hours in advance.</p>
  <p>Best regards,<br><strong>{business} Team</strong></p>
  <p>If you have any questions, please contact us at
    <a href="mailto:{escape(settings.ADMIN_EMAIL)}">{escape(settings.ADMIN_EMAIL)}</a></p>
</body>
</html>
"""


def admin_email_html(booking: BookingDetails) -> str:
    return f"""<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><title>New Booking - {escape(settings.BUSINESS_NAME)}</title></head>
<body>
  <h1>New Booking Received</h1>
  <p>{escape(booking.name)} has scheduled a consultation.</p>
  <div class="booking-details">
{_details_block(booking)}
  </div>
  <p>The calendar invite is attached.</p>
</body>
</html>
"""
