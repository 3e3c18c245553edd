from functools import lru_cache
import logging

from consult_booking.application.ports.booking_store import BookingStorePort
from consult_booking.application.ports.notifier import NotificationPort
from consult_booking.application.use_cases.availability import AvailabilityGenerator
from consult_booking.application.use_cases.ledger import BookingLedger
from consult_booking.application.use_cases.scheduling import SchedulingService
from consult_booking.core.config import settings
from consult_booking.domain.entities.slot import ServiceWindow
from consult_booking.infrastructure.notifications.http_notifier import HttpEmailNotifier
from consult_booking.infrastructure.notifications.mock_notifier import MockNotifier
from consult_booking.infrastructure.notifications.smtp_notifier import SmtpNotifier
from consult_booking.infrastructure.store.json_store import JsonBookingStore
from consult_booking.infrastructure.store.memory_store import MemoryBookingStore


_ledger: BookingLedger | None = None


@lru_cache
def get_booking_store() -> BookingStorePort:
    if settings.ENV.lower() == "test":
        return MemoryBookingStore()
    return JsonBookingStore(data_dir=settings.BOOKINGS_DATA_DIR, key=settings.BOOKINGS_KEY)


def get_ledger() -> BookingLedger:
    global _ledger
    if _ledger is None:
        # One ledger per process so its write lock covers every commit
        _ledger = BookingLedger(store=get_booking_store())
    return _ledger


@lru_cache
def get_notifier() -> NotificationPort:
    logger = logging.getLogger(__name__)
    if settings.SMTP_USER and settings.SMTP_PASS:
        logger.info("Using SmtpNotifier host=%s", settings.SMTP_HOST)
        return SmtpNotifier()
    if settings.EMAIL_API_URL:
        logger.info("Using HttpEmailNotifier url=%s", settings.EMAIL_API_URL)
        return HttpEmailNotifier()
    logger.info("Using MockNotifier (no SMTP credentials or EMAIL_API_URL)")
    return MockNotifier()


def get_availability_generator() -> AvailabilityGenerator:
    return AvailabilityGenerator(
        ServiceWindow(open_time=settings.SERVICE_WINDOW_OPEN, close_time=settings.SERVICE_WINDOW_CLOSE)
    )


def get_scheduling_service() -> SchedulingService:
    return SchedulingService(
        generator=get_availability_generator(),
        ledger=get_ledger(),
        notifier=get_notifier(),
        allowed_durations=settings.BOOKING_DURATIONS,
        notifications_enabled=settings.NOTIFICATIONS_ENABLED,
    )
