from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class ServiceWindow:
    open_time: str = "12:00"
    close_time: str = "18:00"


@dataclass(frozen=True)
class SlotAvailability:
    date: str
    time: str
    duration: int
    available: bool


@dataclass(frozen=True)
class CalendarMonth:
    month: date  # first day of the displayed month
    dates: list[date]
    can_go_previous: bool
    can_go_next: bool = True
