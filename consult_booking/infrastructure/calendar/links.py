from __future__ import annotations

from urllib.parse import quote

from consult_booking.application.utils.time_utils import interval
from consult_booking.core.config import settings
from consult_booking.domain.entities.booking import BookingDetails
from consult_booking.domain.entities.notification import CalendarLinks

URL_DATETIME_FORMAT = "%Y%m%dT%H%M%S"


def generate_calendar_urls(booking: BookingDetails) -> CalendarLinks:
    """Deep links that open a pre-filled event in Google, Outlook and Yahoo calendars."""
    start, end = interval(booking.date, booking.time, booking.duration)
    start_str = start.strftime(URL_DATETIME_FORMAT)
    end_str = end.strftime(URL_DATETIME_FORMAT)

    details = f"Meeting with {booking.name}"
    if booking.notes:
        details += f"\n\nNotes: {booking.notes}"
    details += "\n\nThis is a confirmation for your scheduled meeting."

    title = quote(f"Initial Call - {settings.BUSINESS_NAME} Booking", safe="")
    description = quote(details, safe="")
    location = quote(settings.MEETING_LOCATION, safe="")

    return CalendarLinks(
        google=(
            "https://calendar.google.com/calendar/render?action=TEMPLATE"
            f"&text={title}&dates={start_str}/{end_str}&details={description}&location={location}"
        ),
        outlook=(
            "https://outlook.live.com/calendar/0/deeplink/compose"
            f"?subject={title}&startdt={start.isoformat()}&enddt={end.isoformat()}"
            f"&body={description}&location={location}"
        ),
        yahoo=(
            "https://calendar.yahoo.com/?v=60&view=d&type=20"
            f"&title={title}&st={start_str}&et={end_str}&desc={description}&in_loc={location}"
        ),
    )
