class BookingError(Exception):
    """Base class for everything the booking core can raise.

    Each kind carries the HTTP status the API layer answers with, so the
    routes never have to translate one error into another.
    """
    status_code = 500
    default_message = "Server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidArgument(BookingError):
    """Malformed or out-of-policy input (bad format, past date, off-hours)."""
    status_code = 400
    default_message = "Invalid argument"


class SlotConflict(BookingError):
    """The slot already has an active reservation."""
    status_code = 400
    default_message = "Time slot already booked"


class NotFound(BookingError):
    """No active reservation with that id is owned by the caller."""
    status_code = 404
    default_message = "Appointment not found or unauthorized"


class Unauthenticated(BookingError):
    status_code = 401
    default_message = "Access denied"


class Forbidden(BookingError):
    status_code = 403
    default_message = "Invalid token"


class Internal(BookingError):
    """Storage or otherwise unexpected failure."""
    status_code = 500
    default_message = "Server error"
