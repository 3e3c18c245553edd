from __future__ import annotations

import logging
from datetime import datetime

from consult_booking.application.utils.time_utils import interval
from consult_booking.core.config import settings
from consult_booking.domain.entities.booking import BookingDetails

logger = logging.getLogger(__name__)

PRODUCT_ID = "-//qaxp//qaxp-booking-platform//EN"
ICS_DATETIME_FORMAT = "%Y%m%dT%H%M%S"
MAX_LINE_OCTETS = 75


def generate_ics_event(booking: BookingDetails, now: datetime | None = None) -> str | None:
    """
    Single-event VCALENDAR for a booking, or None if the booking date/time cannot be parsed.

    Times are written as floating local times (no TZID, no Z suffix).
    """
    try:
        start, end = interval(booking.date, booking.time, booking.duration)
    except (TypeError, ValueError) as e:
        logger.error("Error generating ICS event", extra={"error": str(e)})
        return None

    stamp = (now or datetime.now()).strftime(ICS_DATETIME_FORMAT)
    uid = getattr(booking, "id", None) or f"{booking.date}-{booking.time.replace(':', '')}-{booking.email}"

    description = f"Phone call with {booking.name}"
    if booking.notes:
        description += f"\n\nNotes: {booking.notes}"
    description += "\n\nThis is a confirmation for your scheduled phone call."

    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        "CALSCALE:GREGORIAN",
        f"PRODID:{PRODUCT_ID}",
        "METHOD:PUBLISH",
        "BEGIN:VEVENT",
        f"UID:{uid}@{settings.BUSINESS_NAME.lower()}",
        f"DTSTAMP:{stamp}",
        f"DTSTART:{start.strftime(ICS_DATETIME_FORMAT)}",
        f"DTEND:{end.strftime(ICS_DATETIME_FORMAT)}",
        f"SUMMARY:{_escape(f'Phone Call - {settings.BUSINESS_NAME} Consultation')}",
        f"DESCRIPTION:{_escape(description)}",
        f"LOCATION:{_escape(settings.MEETING_LOCATION)}",
        f"URL:{settings.BOOKING_URL}",
        "STATUS:CONFIRMED",
        "X-MICROSOFT-CDO-BUSYSTATUS:BUSY",
        f"ORGANIZER;CN={_param(settings.BUSINESS_NAME)}:mailto:{settings.FROM_EMAIL}",
        (
            f"ATTENDEE;RSVP=TRUE;PARTSTAT=NEEDS-ACTION;ROLE=REQ-PARTICIPANT;"
            f"CN={_param(booking.name)}:mailto:{booking.email}"
        ),
        "END:VEVENT",
        "END:VCALENDAR",
    ]
    return "\r\n".join(_fold(line) for line in lines) + "\r\n"


def ics_filename(booking: BookingDetails) -> str:
    return f"qaxp-booking-{booking.date}-{booking.time.replace(':', '')}.ics"


def _escape(value: str) -> str:
    return (
        value.replace("\\", "\\\\")
        .replace(";", "\\;")
        .replace(",", "\\,")
        .replace("\r\n", "\\n")
        .replace("\n", "\\n")
    )


def _fold(line: str) -> str:
    """Fold content lines longer than 75 octets (continuation lines start with a space)."""
    encoded = line.encode("utf-8")
    if len(encoded) <= MAX_LINE_OCTETS:
        return line

    parts: list[str] = []
    current = ""
    limit = MAX_LINE_OCTETS
    for char in line:
        if len((current + char).encode("utf-8")) > limit:
            parts.append(current)
            current = char
            limit = MAX_LINE_OCTETS - 1  # room for the leading space
        else:
            current += char
    parts.append(current)
    return "\r\n ".join(parts)


def _param(value: str) -> str:
    """Quoted parameter value; double quotes are not allowed inside."""
    return '"' + value.replace('"', "'") + '"'
