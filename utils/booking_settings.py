"""
Booking duration policy stored in the ``booking_settings`` table.

Two keys are managed here, both in minutes:
``min_booking_duration`` and ``max_booking_duration``. Missing rows fall back
to the configured defaults so a fresh database still validates bookings.
"""
from typing import NamedTuple, Optional

from flask import current_app

from models import db
from models.booking_setting import BookingSetting
from utils.errors import InvalidSetting

MIN_KEY = "min_booking_duration"
MAX_KEY = "max_booking_duration"

DESCRIPTIONS = {
    MIN_KEY: "Minimum booking duration in minutes",
    MAX_KEY: "Maximum booking duration in minutes (4 hours)",
}


class DurationBounds(NamedTuple):
    min_duration: int
    max_duration: int


def _defaults() -> dict:
    return {
        MIN_KEY: current_app.config.get("DEFAULT_MIN_BOOKING_DURATION", 15),
        MAX_KEY: current_app.config.get("DEFAULT_MAX_BOOKING_DURATION", 240),
    }


def seed_settings():
    """Insert any missing default rows. Safe to call on every start."""
    existing = {s.setting_key for s in BookingSetting.query.all()}
    for key, value in _defaults().items():
        if key not in existing:
            db.session.add(BookingSetting(
                setting_key=key,
                setting_value=str(value),
                description=DESCRIPTIONS[key],
            ))
    db.session.commit()


def get_duration_bounds() -> DurationBounds:
    values = _defaults()
    rows = BookingSetting.query.filter(BookingSetting.setting_key.in_((MIN_KEY, MAX_KEY))).all()
    for row in rows:
        values[row.setting_key] = int(row.setting_value)
    return DurationBounds(values[MIN_KEY], values[MAX_KEY])


def get_settings() -> dict:
    """Every stored setting as ``{key: {"value": int, "description": str}}``."""
    out = {
        key: {"value": value, "description": DESCRIPTIONS[key]}
        for key, value in _defaults().items()
    }
    for row in BookingSetting.query.order_by(BookingSetting.setting_key).all():
        out[row.setting_key] = {
            "value": int(row.setting_value),
            "description": row.description,
        }
    return out


def _check_range(value: int, bounds: tuple, message: str):
    low, high = bounds
    if value < low or value > high:
        raise InvalidSetting(message)


def update_settings(min_duration: Optional[int] = None, max_duration: Optional[int] = None) -> dict:
    """
    Validate and persist whichever bounds were supplied, then return the
    refreshed snapshot from ``get_settings``.
    """
    min_range = current_app.config.get("MIN_BOOKING_DURATION_RANGE", (5, 120))
    max_range = current_app.config.get("MAX_BOOKING_DURATION_RANGE", (30, 1440))

    if min_duration is not None:
        _check_range(
            min_duration, min_range,
            f"Minimum duration must be between {min_range[0]} and {min_range[1]} minutes.",
        )
    if max_duration is not None:
        _check_range(
            max_duration, max_range,
            f"Maximum duration must be between {max_range[0]} and {max_range[1]} minutes (24 hours).",
        )
    if min_duration is not None and max_duration is not None and min_duration >= max_duration:
        raise InvalidSetting("Minimum duration must be less than maximum duration.")

    for key, value in ((MIN_KEY, min_duration), (MAX_KEY, max_duration)):
        if value is None:
            continue
        row = BookingSetting.query.filter_by(setting_key=key).first()
        if row is None:
            row = BookingSetting(setting_key=key, description=DESCRIPTIONS[key])
            db.session.add(row)
        row.setting_value = str(value)

    db.session.commit()
    return get_settings()
