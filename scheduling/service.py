from datetime import date
from typing import Callable, List

from models.reservation import Reservation
from scheduling.calendar import Slot, SlotCalendar, parse_date, parse_time
from scheduling.errors import InvalidArgument
from scheduling.ledger import ReservationLedger


class BookingService:
    """Answers "what's free" and books/cancels against the ledger.

    Holds no state of its own; `today` is injectable so the no-past-dates
    rule can be tested against a fixed clock.
    """

    def __init__(self, calendar: SlotCalendar, ledger: ReservationLedger,
                 today: Callable[[], date] = date.today):
        self.calendar = calendar
        self.ledger = ledger
        self.today = today

    def _reject_past(self, day: date) -> None:
        if day < self.today():
            raise InvalidArgument("Cannot book appointments in the past")

    def available_slots(self, day) -> List[Slot]:
        day = parse_date(day)
        self._reject_past(day)

        booked = self.ledger.booked_slots_on(day)
        return [slot for slot in self.calendar.slots_for(day) if slot.time not in booked]

    def book(self, user_id: int, day, slot_time) -> Reservation:
        day = parse_date(day)
        slot_time = parse_time(slot_time)

        self._reject_past(day)
        self.calendar.check_time(slot_time)

        return self.ledger.reserve(user_id, day, slot_time)

    def cancel(self, user_id: int, reservation_id: int) -> None:
        self.ledger.release(reservation_id, user_id)

    def my_reservations(self, user_id: int) -> List[Reservation]:
        return self.ledger.list_by_user(user_id)
