import logging

# `extra=` fields rendered after the message, in this order
CONTEXT_KEYS = ("booking_id", "date", "time", "duration", "recipient", "host", "count", "reason", "error")

LOG_FORMAT = "%(asctime)s %(levelname)s:%(name)s:%(message)s"


class BookingContextFormatter(logging.Formatter):
    """Appends booking context passed through `extra=` as key=value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        context = " ".join(
            f"{key}={getattr(record, key)}"
            for key in CONTEXT_KEYS
            if getattr(record, key, None) not in (None, "")
        )
        return f"{base} | {context}" if context else base


def configure_logging(level: str) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setFormatter(BookingContextFormatter(LOG_FORMAT))

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()
    root.addHandler(handler)
    return handler
