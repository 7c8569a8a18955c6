from flask import Blueprint, jsonify, g, current_app

from models import db
from models.booking import Booking
from models.room import Room
from models.user import User, UserRole
from schemas import RoomCreate, SettingsUpdate, UserCreate
from security.password import hash_password
from security.rbac import require_roles
from utils.audit import log_event
from utils.auth_context import login_required
from utils.booking_settings import get_settings, update_settings
from utils.dates import iso
from utils.errors import (
    DuplicateIdentity,
    DuplicateRoom,
    InternalError,
    InvalidCapacity,
    InvalidRole,
    MalformedInput,
    NotFound,
    RoomInUse,
    SelfDeleteForbidden,
)
from utils.persistence import Outcome, commit, delete, insert
from utils.request_body import parse_body

admin_bp = Blueprint("admin", __name__, url_prefix="/admin")

ADMIN = UserRole.ADMIN.value


def _is_valid_email(email: str) -> bool:
    return isinstance(email, str) and "@" in email and len(email) <= 100


# ---------- users ----------
@admin_bp.get("/users")
@login_required
@require_roles(ADMIN)
def list_users():
    users = User.query.order_by(User.created_at.desc(), User.id.desc()).all()
    return jsonify([
        {
            "id": u.id,
            "username": u.username,
            "email": u.email,
            "role": u.role,
            "created_at": iso(u.created_at),
        }
        for u in users
    ]), 200


@admin_bp.post("/users")
@login_required
@require_roles(ADMIN)
def create_user():
    body = parse_body(UserCreate)
    username = body.username.strip()
    email = body.email.strip().lower()

    try:
        role = UserRole(body.role or UserRole.USER.value).value
    except ValueError:
        raise InvalidRole()

    if not _is_valid_email(email):
        raise MalformedInput("Invalid email")

    user = User(
        username=username,
        email=email,
        role=role,
        password_digest=hash_password(body.password),
    )
    result = insert(user)
    if result.outcome is Outcome.CONFLICT:
        log_event("ADMIN_USER_CREATE_FAIL_DUPLICATE", user_id=g.user.id,
                  metadata={"username": username, "email": email})
        raise DuplicateIdentity()
    if not result.ok:
        raise InternalError()

    log_event("ADMIN_USER_CREATE", user_id=g.user.id, entity="user", entity_id=user.id,
              metadata={"role": role})
    out = user.public_view()
    out["message"] = "User created successfully."
    return jsonify(out), 201


@admin_bp.delete("/users/<int:user_id>")
@login_required
@require_roles(ADMIN)
def delete_user(user_id: int):
    if user_id == g.user.id:
        raise SelfDeleteForbidden()

    user = db.session.get(User, user_id)
    if user is None:
        raise NotFound("User not found.")

    # bookings first so nothing is orphaned whatever the FK settings are
    removed = Booking.query.filter_by(user_id=user_id).delete(synchronize_session=False)
    db.session.delete(user)
    result = commit()
    if not result.ok:
        raise InternalError()

    log_event("ADMIN_USER_DELETE", user_id=g.user.id, entity="user", entity_id=user_id,
              metadata={"bookings_removed": removed})
    return jsonify(message="User and their bookings deleted successfully."), 200


# ---------- rooms ----------
@admin_bp.post("/rooms")
@login_required
@require_roles(ADMIN)
def create_room():
    body = parse_body(RoomCreate)

    low, high = current_app.config.get("ROOM_CAPACITY_RANGE", (1, 100))
    if body.capacity < low or body.capacity > high:
        raise InvalidCapacity(f"Capacity must be between {low} and {high}.")

    room = Room(
        room_number=body.room_number.strip(),
        room_name=body.room_name.strip(),
        capacity=body.capacity,
    )
    result = insert(room)
    if result.outcome is Outcome.CONFLICT:
        raise DuplicateRoom()
    if not result.ok:
        raise InternalError()

    log_event("ADMIN_ROOM_CREATE", user_id=g.user.id, entity="room", entity_id=room.id)
    return jsonify(
        id=room.id,
        room_number=room.room_number,
        room_name=room.room_name,
        capacity=room.capacity,
        message="Room created successfully.",
    ), 201


@admin_bp.delete("/rooms/<int:room_id>")
@login_required
@require_roles(ADMIN)
def delete_room(room_id: int):
    room = db.session.get(Room, room_id)
    if room is None:
        raise NotFound("Room not found.")

    booking_count = Booking.query.filter_by(room_id=room_id).count()
    if booking_count > 0:
        raise RoomInUse(booking_count)

    result = delete(Room, room_id)
    if result.outcome is Outcome.NOT_FOUND:
        raise NotFound("Room not found.")
    if not result.ok:
        raise InternalError()

    log_event("ADMIN_ROOM_DELETE", user_id=g.user.id, entity="room", entity_id=room_id)
    return jsonify(message="Room deleted successfully."), 200


# ---------- bookings ----------
@admin_bp.get("/bookings")
@login_required
@require_roles(ADMIN)
def list_all_bookings():
    rows = (
        db.session.query(Booking, Room, User)
        .join(Room, Booking.room_id == Room.id)
        .join(User, Booking.user_id == User.id)
        .order_by(Booking.start_time.desc(), Booking.id.desc())
        .all()
    )
    return jsonify([
        {
            "id": b.id,
            "room_id": b.room_id,
            "start_time": iso(b.start_time),
            "end_time": iso(b.end_time),
            "created_at": iso(b.created_at),
            "room_number": r.room_number,
            "room_name": r.room_name,
            "username": u.username,
            "email": u.email,
        }
        for b, r, u in rows
    ]), 200


@admin_bp.delete("/bookings/<int:booking_id>")
@login_required
@require_roles(ADMIN)
def delete_any_booking(booking_id: int):
    result = delete(Booking, booking_id)
    if result.outcome is Outcome.NOT_FOUND:
        raise NotFound("Booking not found.")
    if not result.ok:
        raise InternalError()

    log_event("ADMIN_BOOKING_DELETE", user_id=g.user.id, entity="booking", entity_id=booking_id)
    return jsonify(message="Booking deleted successfully."), 200


# ---------- settings ----------
@admin_bp.get("/settings")
@login_required
@require_roles(ADMIN)
def get_booking_settings():
    return jsonify(get_settings()), 200


@admin_bp.put("/settings")
@login_required
@require_roles(ADMIN)
def put_booking_settings():
    body = parse_body(SettingsUpdate)
    settings = update_settings(body.min_booking_duration, body.max_booking_duration)

    log_event("ADMIN_SETTINGS_UPDATE", user_id=g.user.id, entity="settings",
              metadata=body.model_dump(exclude_none=True))
    return jsonify(message="Settings updated successfully.", settings=settings), 200
