from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import List, Union

from scheduling.errors import InvalidArgument


@dataclass(frozen=True)
class Slot:
    date: date
    time: time

    def label(self) -> str:
        return self.time.strftime("%H:%M:%S")


def parse_date(value: Union[date, str]) -> date:
    """Accepts a date or a "YYYY-MM-DD" string."""
    if isinstance(value, datetime):
        raise InvalidArgument("Invalid date. Use YYYY-MM-DD")
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise InvalidArgument("Invalid date. Use YYYY-MM-DD")
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError:
        raise InvalidArgument("Invalid date. Use YYYY-MM-DD")


def parse_time(value: Union[time, str]) -> time:
    """Accepts a time or an "HH:MM:SS" string (single-digit hour allowed)."""
    if isinstance(value, time):
        return value
    if not isinstance(value, str):
        raise InvalidArgument("Invalid time slot format")
    try:
        return datetime.strptime(value.strip(), "%H:%M:%S").time()
    except ValueError:
        raise InvalidArgument("Invalid time slot format")


class SlotCalendar:
    """Fixed business-day calendar: start times from open_hour to close_hour
    inclusive, every granularity_minutes."""

    def __init__(self, open_hour: int = 9, close_hour: int = 17, granularity_minutes: int = 60):
        if not (0 <= open_hour <= 23 and 0 <= close_hour <= 23):
            raise InvalidArgument("Business hours must be between 0 and 23")
        if open_hour >= close_hour:
            raise InvalidArgument("open_hour must be before close_hour")
        if granularity_minutes <= 0:
            raise InvalidArgument("granularity_minutes must be positive")

        self.open_hour = open_hour
        self.close_hour = close_hour
        self.granularity_minutes = granularity_minutes
        self._times = self._build_times()

    def _build_times(self) -> List[time]:
        step = timedelta(minutes=self.granularity_minutes)
        current = datetime.combine(date.min, time(self.open_hour))
        last = datetime.combine(date.min, time(self.close_hour))

        out = []
        while current <= last:
            out.append(current.time())
            current += step
        return out

    def times(self) -> List[time]:
        return list(self._times)

    def slots_for(self, day: Union[date, str]) -> List[Slot]:
        day = parse_date(day)
        return [Slot(date=day, time=t) for t in self._times]

    def check_time(self, slot_time: time) -> None:
        if slot_time < time(self.open_hour) or slot_time > time(self.close_hour):
            raise InvalidArgument(
                f"Appointments only available between {self.open_hour}:00 and {self.close_hour}:00"
            )
        if slot_time not in self._times:
            raise InvalidArgument(
                f"Time slot must align to {self.granularity_minutes}-minute steps from {self.open_hour}:00"
            )
