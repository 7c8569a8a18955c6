"""
Booking validation and the transactional check-then-insert.

Rules run in a fixed order and the first failure wins:

1. start must be before end                      -> InvalidInterval
2. start must not be in the past                 -> PastBooking
3. duration within the configured policy bounds  -> TooShort / TooLong
4. start and end on the same calendar day        -> CrossesDay
5. no overlapping booking for the room           -> SlotConflict

Rule 5 is enforced by the INSERT itself (INSERT ... SELECT ... WHERE NOT
EXISTS), so the check and the write are one statement. On SQLite that
statement holds the write lock from start to finish; on server databases
the room row is additionally locked with SELECT ... FOR UPDATE.

Field presence is enforced earlier, when the body is parsed.

The same-day rule compares the date component of the values as submitted,
without any timezone normalisation. Everything else works on naive UTC.
"""
import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import exists, insert, literal, select

from models import db
from models.booking import Booking
from models.db import utcnow
from models.room import Room
from utils.booking_settings import DurationBounds, get_duration_bounds
from utils.dates import to_utc_naive
from utils.errors import (
    CrossesDay,
    InvalidInterval,
    NotFound,
    PastBooking,
    SlotConflict,
    TooLong,
    TooShort,
)

logger = logging.getLogger(__name__)


def overlaps(s1: datetime, e1: datetime, s2: datetime, e2: datetime) -> bool:
    # half-open intervals: touching endpoints (e1 == s2) do not overlap
    return s1 < e2 and s2 < e1


def duration_minutes(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 60


def validate_window(start: datetime, end: datetime, bounds: DurationBounds,
                    now: Optional[datetime] = None) -> tuple[datetime, datetime]:
    """
    Apply rules 1-4 and return the interval as naive UTC.
    """
    start_utc = to_utc_naive(start)
    end_utc = to_utc_naive(end)
    now = now or utcnow()

    if start_utc >= end_utc:
        raise InvalidInterval()

    if start_utc < now:
        raise PastBooking()

    minutes = duration_minutes(start_utc, end_utc)
    if minutes < bounds.min_duration:
        raise TooShort(bounds.min_duration)
    if minutes > bounds.max_duration:
        raise TooLong(bounds.max_duration)

    if start.date() != end.date():
        raise CrossesDay()

    return start_utc, end_utc


def find_conflict(room_id: int, start: datetime, end: datetime) -> Optional[Booking]:
    return (
        Booking.query
        .filter(
            Booking.room_id == room_id,
            Booking.start_time < end,
            Booking.end_time > start,
        )
        .order_by(Booking.start_time.asc())
        .first()
    )


def _insert_if_free(room_id: int, user_id: int, start: datetime, end: datetime) -> bool:
    """
    Insert the booking only if no overlapping row exists for the room.
    Returns False when the slot was taken.
    """
    taken = exists().where(
        Booking.room_id == room_id,
        Booking.start_time < end,
        Booking.end_time > start,
    ).correlate(None)
    row = select(
        literal(room_id, db.Integer),
        literal(user_id, db.Integer),
        literal(start, db.DateTime),
        literal(end, db.DateTime),
        literal(utcnow(), db.DateTime),
    ).where(~taken)
    stmt = insert(Booking).from_select(
        ["room_id", "user_id", "start_time", "end_time", "created_at"], row,
    )
    return db.session.execute(stmt).rowcount == 1


def create_booking(user_id: int, room_id: int, start: datetime, end: datetime) -> Booking:
    """
    Validate and insert a booking in a single transaction.

    The room row is locked (SELECT ... FOR UPDATE where the backend supports
    it) and the insert is conditional on the slot being free, so of two
    overlapping requests for the same room at most one is stored. The
    transaction is rolled back on every failure path.
    """
    bounds = get_duration_bounds()
    start_utc, end_utc = validate_window(start, end, bounds)

    try:
        room = (
            db.session.query(Room)
            .filter(Room.id == room_id)
            .with_for_update()
            .first()
        )
        if room is None:
            raise NotFound("Room not found.")

        clash = find_conflict(room_id, start_utc, end_utc)
        if clash is not None:
            logger.info(
                "Booking conflict room=%s requested=%s..%s existing=%s",
                room_id, start_utc, end_utc, clash.id,
            )
            raise SlotConflict()

        if not _insert_if_free(room_id, user_id, start_utc, end_utc):
            logger.info("Booking conflict room=%s requested=%s..%s (concurrent insert)",
                        room_id, start_utc, end_utc)
            raise SlotConflict()

        # no other row can overlap this interval, so the match is unique
        booking = Booking.query.filter_by(
            room_id=room_id, start_time=start_utc, end_time=end_utc,
        ).one()
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    return booking
