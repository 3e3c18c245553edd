from abc import ABC, abstractmethod

from consult_booking.domain.entities.booking import BookingDetails
from consult_booking.domain.entities.notification import DispatchReport


class NotificationPort(ABC):
    @abstractmethod
    def send_booking_emails(self, booking: BookingDetails) -> DispatchReport:
        """Send customer confirmation and admin notification for a committed booking."""
        raise NotImplementedError
