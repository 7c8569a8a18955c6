from flask import Blueprint, jsonify, g

from models import db
from models.booking import Booking
from models.room import Room
from schemas import BookingCreate
from utils.audit import log_event
from utils.auth_context import login_required
from utils.dates import iso
from utils.errors import InternalError, NotFound, SlotConflict
from utils.persistence import Outcome, delete
from utils.request_body import parse_body
from utils.reservations import create_booking

bookings_bp = Blueprint("bookings", __name__, url_prefix="/bookings")


def booking_with_room(b: Booking, room: Room) -> dict:
    return {
        "id": b.id,
        "room_id": b.room_id,
        "start_time": iso(b.start_time),
        "end_time": iso(b.end_time),
        "created_at": iso(b.created_at),
        "room_number": room.room_number,
        "room_name": room.room_name,
    }


# ---------- create (DOUBLE-BOOKING SAFE) ----------
@bookings_bp.post("")
@login_required
def create():
    body = parse_body(BookingCreate)
    try:
        booking = create_booking(g.user.id, body.room_id, body.start_time, body.end_time)
    except SlotConflict:
        log_event(
            "BOOKING_FAIL_CONFLICT",
            user_id=g.user.id,
            entity="room",
            entity_id=body.room_id,
            metadata={"start_time": body.start_time, "end_time": body.end_time},
        )
        raise

    room = db.session.get(Room, booking.room_id)
    out = booking_with_room(booking, room)
    log_event("BOOKING_CREATE", user_id=g.user.id, entity="booking", entity_id=booking.id,
              metadata={"room_id": booking.room_id})
    return jsonify(out), 201


# ---------- own bookings ----------
@bookings_bp.get("")
@login_required
def my_bookings():
    rows = (
        db.session.query(Booking, Room)
        .join(Room, Booking.room_id == Room.id)
        .filter(Booking.user_id == g.user.id)
        .order_by(Booking.start_time.desc(), Booking.id.desc())
        .all()
    )
    return jsonify([booking_with_room(b, r) for b, r in rows]), 200


# ---------- cancel own booking ----------
@bookings_bp.delete("/<int:booking_id>")
@login_required
def delete_own(booking_id: int):
    booking = Booking.query.filter_by(id=booking_id, user_id=g.user.id).first()
    if booking is None:
        raise NotFound("Booking not found or does not belong to you.")

    result = delete(Booking, booking_id)
    if result.outcome is Outcome.NOT_FOUND:
        raise NotFound("Booking not found or does not belong to you.")
    if not result.ok:
        raise InternalError()

    log_event("BOOKING_DELETE", user_id=g.user.id, entity="booking", entity_id=booking_id)
    return jsonify(message="Booking deleted successfully."), 200
