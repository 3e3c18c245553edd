from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class EmailResult:
    success: bool
    message: str
    error: str | None = None


@dataclass(frozen=True)
class DispatchReport:
    customer: EmailResult
    admin: EmailResult

    @property
    def success(self) -> bool:
        # At least one recipient got the message
        return self.customer.success or self.admin.success


@dataclass(frozen=True)
class CalendarLinks:
    google: str
    outlook: str
    yahoo: str
