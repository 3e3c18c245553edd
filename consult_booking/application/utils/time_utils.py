from __future__ import annotations

from datetime import date, datetime, timedelta

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"


def parse_date(value: str) -> date:
    """Parse a YYYY-MM-DD string. Raises ValueError on bad input."""
    return datetime.strptime(value, DATE_FORMAT).date()


def parse_time_to_minutes(value: str) -> int:
    """Parse an HH:MM string into minutes after midnight. Raises ValueError on bad input."""
    parsed = datetime.strptime(value, TIME_FORMAT)
    return parsed.hour * 60 + parsed.minute


def minutes_to_time(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def combine(date_str: str, time_str: str) -> datetime:
    """Naive local datetime for a stored date/time pair."""
    return datetime.strptime(f"{date_str} {time_str}", f"{DATE_FORMAT} {TIME_FORMAT}")


def interval(date_str: str, time_str: str, duration_minutes: int) -> tuple[datetime, datetime]:
    start = combine(date_str, time_str)
    return start, start + timedelta(minutes=duration_minutes)


def month_start(value: date) -> date:
    return value.replace(day=1)


def add_months(value: date, months: int) -> date:
    """First day of the month `months` away from the month containing `value`."""
    index = value.year * 12 + (value.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)
