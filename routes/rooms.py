from flask import Blueprint, request, jsonify

from models.booking import Booking
from models.room import Room
from utils.auth_context import login_required
from utils.dates import day_bounds, iso, parse_day
from utils.errors import MissingFields

rooms_bp = Blueprint("rooms", __name__, url_prefix="/rooms")


def room_json(r: Room) -> dict:
    return {
        "id": r.id,
        "room_number": r.room_number,
        "room_name": r.room_name,
        "capacity": r.capacity,
        "created_at": iso(r.created_at),
    }


@rooms_bp.get("")
@login_required
def list_rooms():
    rooms = Room.query.order_by(Room.room_number.asc()).all()
    return jsonify([room_json(r) for r in rooms]), 200


@rooms_bp.get("/<int:room_id>/availability")
@login_required
def room_availability(room_id: int):
    """Bookings of one room that start on ?date=YYYY-MM-DD."""
    day = parse_day(request.args.get("date"))
    if day is None:
        raise MissingFields("Date is required.", fields=["date"])

    start, end = day_bounds(day)
    rows = (
        Booking.query
        .filter(
            Booking.room_id == room_id,
            Booking.start_time >= start,
            Booking.start_time < end,
        )
        .order_by(Booking.start_time.asc())
        .all()
    )
    return jsonify([
        {
            "id": b.id,
            "start_time": iso(b.start_time),
            "end_time": iso(b.end_time),
            "user_id": b.user_id,
        }
        for b in rows
    ]), 200
