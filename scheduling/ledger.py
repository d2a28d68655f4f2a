from datetime import date, datetime, time
from typing import List, Set

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from models.db import begin_write
from models.reservation import Reservation, STATUS_BOOKED, STATUS_CANCELLED
from scheduling.errors import InvalidArgument, Internal, NotFound, SlotConflict


def _is_unique_violation(exc: IntegrityError) -> bool:
    # sqlite: "UNIQUE constraint failed", postgres: "duplicate key value violates unique constraint"
    message = str(exc.orig).lower()
    return "unique" in message or "uq_reservations_active_slot" in message


class ReservationLedger:
    """
    Sole authority over reservation rows.

    Every write is a single statement committed on its own, so the database
    (not this process) decides who wins a race for a slot.
    """

    def __init__(self, session):
        self.session = session

    def reserve(self, user_id: int, day: date, slot_time: time) -> Reservation:
        if not isinstance(user_id, int) or isinstance(user_id, bool):
            raise InvalidArgument("Invalid user")
        if not isinstance(day, date) or isinstance(day, datetime):
            raise InvalidArgument("Invalid date. Use YYYY-MM-DD")
        if not isinstance(slot_time, time):
            raise InvalidArgument("Invalid time slot format")

        reservation = Reservation(user_id=user_id, date=day, time=slot_time, status=STATUS_BOOKED)

        try:
            begin_write(self.session)
            self.session.add(reservation)
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            if _is_unique_violation(exc):
                raise SlotConflict() from exc
            raise Internal() from exc
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise Internal() from exc

        return reservation

    def release(self, reservation_id: int, user_id: int) -> None:
        try:
            begin_write(self.session)
            # test-and-set: owner and current status are part of the WHERE clause
            updated = (
                self.session.query(Reservation)
                .filter_by(id=reservation_id, user_id=user_id, status=STATUS_BOOKED)
                .update(
                    {"status": STATUS_CANCELLED, "cancelled_at": datetime.utcnow()},
                    synchronize_session=False,
                )
            )
            if updated != 1:
                self.session.rollback()
                raise NotFound()
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise Internal() from exc

    def list_by_user(self, user_id: int) -> List[Reservation]:
        try:
            return (
                self.session.query(Reservation)
                .filter_by(user_id=user_id)
                .order_by(Reservation.date.asc(), Reservation.time.asc(), Reservation.id.asc())
                .all()
            )
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise Internal() from exc

    def booked_slots_on(self, day: date) -> Set[time]:
        try:
            rows = (
                self.session.query(Reservation.time)
                .filter_by(date=day, status=STATUS_BOOKED)
                .all()
            )
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise Internal() from exc
        return {row.time for row in rows}
