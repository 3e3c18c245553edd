class BookingError(RuntimeError):
    """Base class for booking engine failures."""
    pass


class ValidationError(BookingError):
    """Raised when booking input fails field checks (name, email, duration, date, time)."""
    pass


class SlotNoLongerAvailable(BookingError):
    """Raised when the requested slot overlaps a booking committed in the meantime."""
    pass


class PersistenceFailure(BookingError):
    """Raised when the booking store cannot be read or written."""
    pass


class DispatchFailure(BookingError):
    """Raised when confirmation notifications cannot be delivered."""
    pass
