from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable

from consult_booking.domain.entities.booking import Booking


class BookingStorePort(ABC):
    @abstractmethod
    def load(self) -> list[Booking]:
        """Load every stored booking in insertion order. Raises PersistenceFailure if unreadable."""
        raise NotImplementedError

    @abstractmethod
    def save_all(self, bookings: Iterable[Booking]) -> None:
        """Replace the whole stored collection. Raises PersistenceFailure on write errors."""
        raise NotImplementedError

    @abstractmethod
    def clear(self) -> None:
        raise NotImplementedError
