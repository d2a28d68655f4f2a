from .errors import (
    BookingError,
    InvalidArgument,
    SlotConflict,
    NotFound,
    Unauthenticated,
    Forbidden,
    Internal,
)
from .calendar import Slot, SlotCalendar, parse_date, parse_time
from .ledger import ReservationLedger
from .service import BookingService
