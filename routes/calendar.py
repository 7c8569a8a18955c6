from flask import Blueprint, request, jsonify
from sqlalchemy import func

from models import db
from models.booking import Booking
from models.room import Room
from models.user import User
from routes.rooms import room_json
from utils.auth_context import login_required
from utils.dates import day_bounds, iso, parse_day
from utils.errors import MalformedInput, MissingFields
from utils.filters import FilterBuilder

calendar_bp = Blueprint("calendar", __name__, url_prefix="/calendar")


def _room_id_arg():
    raw = request.args.get("room_id")
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        raise MalformedInput("Invalid room_id.")


@calendar_bp.get("/bookings")
@login_required
def calendar_bookings():
    # optional filters: start_date, end_date (inclusive, by start day), room_id
    start_day = parse_day(request.args.get("start_date"), "start_date")
    end_day = parse_day(request.args.get("end_date"), "end_date")
    room_id = _room_id_arg()

    filters = FilterBuilder()
    filters.add_if(start_day, lambda d: Booking.start_time >= day_bounds(d)[0])
    filters.add_if(end_day, lambda d: Booking.start_time < day_bounds(d)[1])
    filters.add_if(room_id, lambda rid: Booking.room_id == rid)

    q = (
        db.session.query(Booking, Room, User)
        .join(Room, Booking.room_id == Room.id)
        .join(User, Booking.user_id == User.id)
    )
    rows = filters.apply(q).order_by(Booking.start_time.asc(), Booking.id.asc()).all()

    return jsonify([
        {
            "id": b.id,
            "room_id": b.room_id,
            "user_id": b.user_id,
            "start_time": iso(b.start_time),
            "end_time": iso(b.end_time),
            "room_number": r.room_number,
            "room_name": r.room_name,
            "capacity": r.capacity,
            "username": u.username,
        }
        for b, r, u in rows
    ]), 200


@calendar_bp.get("/availability")
@login_required
def calendar_availability():
    """Every room with a booking summary for ?date=YYYY-MM-DD."""
    day = parse_day(request.args.get("date"))
    if day is None:
        raise MissingFields("Date is required.", fields=["date"])

    start, end = day_bounds(day)
    stats = (
        db.session.query(
            Booking.room_id,
            func.count(Booking.id),
            func.min(Booking.start_time),
            func.max(Booking.end_time),
        )
        .filter(Booking.start_time >= start, Booking.start_time < end)
        .group_by(Booking.room_id)
        .all()
    )
    by_room = {room_id: (count, first, last) for room_id, count, first, last in stats}

    out = []
    for room in Room.query.order_by(Room.room_number.asc()).all():
        count, first, last = by_room.get(room.id, (0, None, None))
        entry = room_json(room)
        entry.update(
            bookings=count,
            status="booked" if count else "available",
            first_booking=iso(first),
            last_booking=iso(last),
        )
        out.append(entry)
    return jsonify(out), 200
