from __future__ import annotations

import calendar
from datetime import date

from consult_booking.application.utils.time_utils import (
    add_months,
    minutes_to_time,
    month_start,
    parse_time_to_minutes,
)
from consult_booking.application.utils.validators import validate_duration
from consult_booking.domain.entities.slot import CalendarMonth, ServiceWindow


class AvailabilityGenerator:
    """
    Candidate start times and bookable dates, independent of existing bookings.

    Holds no state beyond the configured service window, so every call with the
    same arguments yields the same result.
    """

    def __init__(self, window: ServiceWindow | None = None) -> None:
        self._window = window or ServiceWindow()
        self._open = parse_time_to_minutes(self._window.open_time)
        self._close = parse_time_to_minutes(self._window.close_time)
        if self._open >= self._close:
            raise ValueError(
                f"Service window must open before it closes: {self._window.open_time}-{self._window.close_time}"
            )

    @property
    def window(self) -> ServiceWindow:
        return self._window

    def enumerate_slots(self, day: date | str, duration_minutes: int) -> list[str]:
        """
        Start times (HH:MM) spaced `duration_minutes` apart from window open,
        stopping before the first start that would be >= window close.
        """
        validate_duration(duration_minutes)

        slots: list[str] = []
        cursor = self._open
        while cursor < self._close:
            slots.append(minutes_to_time(cursor))
            cursor += duration_minutes
        return slots

    def enumerate_bookable_dates(self, reference_month: date, today: date) -> list[date]:
        """Every date of `reference_month`'s month that is today or later, ascending."""
        first = month_start(reference_month)
        _, days_in_month = calendar.monthrange(first.year, first.month)
        return [
            first.replace(day=day)
            for day in range(1, days_in_month + 1)
            if first.replace(day=day) >= today
        ]

    def can_go_previous(self, current_month: date, today: date) -> bool:
        return add_months(current_month, -1) >= month_start(today)

    def previous_month(self, current_month: date, today: date) -> date:
        if not self.can_go_previous(current_month, today):
            return month_start(current_month)
        return add_months(current_month, -1)

    def next_month(self, current_month: date) -> date:
        return add_months(current_month, 1)

    def first_bookable_month(self, reference_month: date, today: date) -> date:
        """Month to display for `reference_month`, rolled forward when it has no bookable dates left."""
        month = max(month_start(reference_month), month_start(today))
        if not self.enumerate_bookable_dates(month, today):
            month = self.next_month(month)
        return month

    def calendar_month(self, reference_month: date, today: date) -> CalendarMonth:
        month = self.first_bookable_month(reference_month, today)
        return CalendarMonth(
            month=month,
            dates=self.enumerate_bookable_dates(month, today),
            can_go_previous=self.can_go_previous(month, today),
        )
