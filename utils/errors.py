"""
API error taxonomy.

Handlers raise one of these; the error handler registered in ``create_app``
turns it into ``{"error": <message>, "code": <kind>}`` with the kind's status.
Extra keyword arguments end up in the body next to ``error``.
"""
from flask import jsonify


class ApiError(Exception):
    status_code = 400
    message = "Bad request."

    def __init__(self, message=None, **details):
        self.message = message or self.message
        self.details = details
        super().__init__(self.message)

    @property
    def code(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict:
        body = {"error": self.message, "code": self.code}
        body.update(self.details)
        return body


def error_response(err: ApiError):
    return jsonify(err.to_dict()), err.status_code


# ---------- authentication / authorization ----------
class Unauthenticated(ApiError):
    status_code = 401
    message = "Access denied. No token provided."


class InvalidToken(ApiError):
    status_code = 403
    message = "Invalid token."


class Forbidden(ApiError):
    status_code = 403
    message = "Access denied. Admin privileges required."


class InvalidCredentials(ApiError):
    status_code = 401
    message = "Invalid credentials."


class AccountLocked(ApiError):
    status_code = 429
    message = "Account temporarily locked. Try again later."


# ---------- request shape ----------
class MissingFields(ApiError):
    message = "Required fields are missing."


class MalformedInput(ApiError):
    message = "Malformed request."


# ---------- booking rules ----------
class InvalidInterval(ApiError):
    message = "End time must be after start time."


class PastBooking(ApiError):
    message = "Cannot book in the past."


class TooShort(ApiError):
    def __init__(self, min_duration: int):
        super().__init__(
            f"Minimum booking duration is {min_duration} minutes.",
            min_booking_duration=min_duration,
        )


class TooLong(ApiError):
    def __init__(self, max_duration: int):
        super().__init__(
            f"Maximum booking duration is {max_duration} minutes.",
            max_booking_duration=max_duration,
        )


class CrossesDay(ApiError):
    message = "Booking must be within the same day."


class SlotConflict(ApiError):
    status_code = 409
    message = "Room is already booked for this time slot."


# ---------- admin mutators ----------
class DuplicateIdentity(ApiError):
    status_code = 409
    message = "Username or email already exists."


class DuplicateRoom(ApiError):
    status_code = 409
    message = "Room number already exists."


class InvalidRole(ApiError):
    message = 'Invalid role. Must be "user" or "admin".'


class InvalidCapacity(ApiError):
    message = "Capacity must be between 1 and 100."


class SelfDeleteForbidden(ApiError):
    message = "You cannot delete your own account."


class RoomInUse(ApiError):
    def __init__(self, booking_count: int):
        super().__init__(
            f"Cannot delete room. It has {booking_count} existing booking(s). "
            "Delete the bookings first.",
            booking_count=booking_count,
        )


class InvalidSetting(ApiError):
    message = "Invalid booking setting."


# ---------- generic ----------
class NotFound(ApiError):
    status_code = 404
    message = "Not found."


class InternalError(ApiError):
    status_code = 500
    message = "Internal server error."
