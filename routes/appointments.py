from flask import Blueprint, request, jsonify, current_app, g

from models import db
from scheduling import BookingService, ReservationLedger
from scheduling.errors import InvalidArgument, NotFound, SlotConflict
from utils.auth_context import login_required
from utils.audit import log_event
from utils.request_data import json_object

appointments_bp = Blueprint("appointments", __name__)


def _booking_service() -> BookingService:
    # calendar is validated once in create_app
    return BookingService(current_app.extensions["slot_calendar"], ReservationLedger(db.session))


# ---------- open slots for a day ----------
@appointments_bp.get("/slots")
@login_required
def available_slots():
    date_str = request.args.get("date")
    if not date_str:
        raise InvalidArgument("Date is required")

    slots = _booking_service().available_slots(date_str)
    return jsonify(availableSlots=[s.label() for s in slots]), 200


# ---------- book a slot (DOUBLE-BOOKING SAFE) ----------
@appointments_bp.post("/appointments")
@login_required
def book_appointment():
    data = json_object()
    date_str = data.get("date")
    time_slot = data.get("time_slot")
    if not date_str or not time_slot:
        raise InvalidArgument("Date and time slot are required")

    try:
        reservation = _booking_service().book(g.user.id, date_str, time_slot)
    except SlotConflict:
        # Partial unique index uq_reservations_active_slot triggers here
        log_event(
            "BOOKING_FAIL_ALREADY_BOOKED",
            user_id=g.user.id,
            entity="slot",
            entity_id=f"{date_str} {time_slot}",
        )
        raise

    reservation_id = reservation.id
    log_event(
        "BOOKING_CREATE",
        user_id=g.user.id,
        entity="reservation",
        entity_id=reservation_id,
        metadata={"date": date_str, "time_slot": time_slot},
    )
    return jsonify(message="Appointment booked successfully", appointmentId=reservation_id), 201


# ---------- my appointments ----------
@appointments_bp.get("/appointments")
@login_required
def my_appointments():
    rows = _booking_service().my_reservations(g.user.id)
    return jsonify(appointments=[r.to_dict() for r in rows]), 200


# ---------- cancel (owner only, soft) ----------
@appointments_bp.delete("/appointments/<int:appointment_id>")
@login_required
def cancel_appointment(appointment_id: int):
    try:
        _booking_service().cancel(g.user.id, appointment_id)
    except NotFound:
        log_event("BOOKING_CANCEL_FAIL", user_id=g.user.id, entity="reservation", entity_id=appointment_id)
        raise

    log_event("BOOKING_CANCEL", user_id=g.user.id, entity="reservation", entity_id=appointment_id)
    return jsonify(message="Appointment cancelled successfully"), 200
