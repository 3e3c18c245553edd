from __future__ import annotations

import re

from consult_booking.application.exceptions import ValidationError
from consult_booking.application.utils.time_utils import minutes_to_time, parse_date, parse_time_to_minutes
from consult_booking.domain.entities.booking import BookingRequest

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_valid_email(email: str | None) -> bool:
    if not email or not email.strip():
        return False
    return bool(EMAIL_PATTERN.match(email))


def is_canonical_date(value: str) -> bool:
    """True only for zero-padded YYYY-MM-DD, so one calendar day has one spelling."""
    try:
        return parse_date(value).isoformat() == value
    except (TypeError, ValueError):
        return False


def is_canonical_time(value: str) -> bool:
    """True only for zero-padded 24-hour HH:MM."""
    try:
        return minutes_to_time(parse_time_to_minutes(value)) == value
    except (TypeError, ValueError):
        return False


def validate_date(value: str) -> None:
    if not is_canonical_date(value):
        raise ValidationError(f"Invalid date: {value!r}")


def validate_duration(duration: int) -> None:
    if isinstance(duration, bool) or not isinstance(duration, int) or duration <= 0:
        raise ValidationError("Invalid duration.")


def validate_booking_request(request: BookingRequest) -> None:
    """Field checks run before the ledger is touched. Raises ValidationError on the first failure."""
    if not request.date or not request.time:
        raise ValidationError("Missing booking details. Please go back and select a time.")

    if not is_canonical_date(request.date) or not is_canonical_time(request.time):
        raise ValidationError("Invalid date or time.")

    if not request.name or not request.name.strip():
        raise ValidationError("Please enter your name.")

    if not is_valid_email(request.email):
        raise ValidationError("Please enter a valid email address.")

    validate_duration(request.duration)
