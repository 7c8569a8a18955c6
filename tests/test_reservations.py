from datetime import datetime, timedelta, timezone

import pytest

from utils.booking_settings import DurationBounds
from utils.errors import CrossesDay, InvalidInterval, PastBooking, TooLong, TooShort
from utils.reservations import duration_minutes, overlaps, validate_window

NOW = datetime(2030, 5, 1, 8, 0)
BOUNDS = DurationBounds(15, 240)


def t(hour, minute=0, day=2):
    return datetime(2030, 5, day, hour, minute)


@pytest.mark.parametrize("first, second, expected", [
    ((t(10), t(11)), (t(10, 30), t(11, 30)), True),   # partial overlap
    ((t(10), t(12)), (t(10, 30), t(11)), True),       # containment
    ((t(10, 30), t(11)), (t(10), t(12)), True),       # contained
    ((t(10), t(11)), (t(10), t(11)), True),           # identical
    ((t(10), t(11)), (t(11), t(12)), False),          # touching end -> start
    ((t(11), t(12)), (t(10), t(11)), False),          # touching start -> end
    ((t(10), t(11)), (t(13), t(14)), False),          # disjoint
])
def test_overlaps(first, second, expected):
    assert overlaps(*first, *second) is expected
    assert overlaps(*second, *first) is expected


def test_duration_minutes_counts_seconds():
    assert duration_minutes(t(10), t(10, 30)) == 30
    assert duration_minutes(t(10), t(10) + timedelta(seconds=90)) == 1.5


def test_validate_window_returns_naive_utc():
    start = datetime(2030, 5, 2, 12, 0, tzinfo=timezone(timedelta(hours=2)))
    end = datetime(2030, 5, 2, 13, 0, tzinfo=timezone(timedelta(hours=2)))
    assert validate_window(start, end, BOUNDS, now=NOW) == (t(10), t(11))


def test_rule_order_interval_before_past():
    # in the past AND reversed: ordering wins
    with pytest.raises(InvalidInterval):
        validate_window(datetime(2020, 1, 1, 11), datetime(2020, 1, 1, 10), BOUNDS, now=NOW)


def test_equal_start_and_end_is_invalid_interval():
    with pytest.raises(InvalidInterval):
        validate_window(t(10), t(10), BOUNDS, now=NOW)


def test_past_start():
    with pytest.raises(PastBooking):
        validate_window(datetime(2030, 5, 1, 7), datetime(2030, 5, 1, 9), BOUNDS, now=NOW)


def test_start_exactly_now_is_allowed():
    assert validate_window(NOW, NOW + timedelta(minutes=30), BOUNDS, now=NOW)


def test_duration_bounds_are_inclusive():
    bounds = DurationBounds(20, 200)
    validate_window(t(10), t(10, 20), bounds, now=NOW)
    validate_window(t(10), t(10) + timedelta(minutes=200), bounds, now=NOW)

    with pytest.raises(TooShort) as short:
        validate_window(t(10), t(10, 19), bounds, now=NOW)
    assert short.value.details == {"min_booking_duration": 20}

    with pytest.raises(TooLong) as long_:
        validate_window(t(10), t(10) + timedelta(minutes=201), bounds, now=NOW)
    assert long_.value.details == {"max_booking_duration": 200}


def test_crossing_midnight():
    with pytest.raises(CrossesDay):
        validate_window(t(23), t(1, day=3), BOUNDS, now=NOW)


def test_same_day_uses_submitted_date_component():
    # 23:00-23:45 at +02:00 is 21:00-21:45 UTC; both on the same submitted day
    tz = timezone(timedelta(hours=2))
    start = datetime(2030, 5, 2, 23, 0, tzinfo=tz)
    end = datetime(2030, 5, 2, 23, 45, tzinfo=tz)
    assert validate_window(start, end, BOUNDS, now=NOW) == (t(21), t(21, 45))

    # 01:00-02:00 at -02:00 is 03:00-04:00 UTC; still one submitted day
    tz = timezone(timedelta(hours=-2))
    start = datetime(2030, 5, 2, 1, 0, tzinfo=tz)
    end = datetime(2030, 5, 2, 2, 0, tzinfo=tz)
    assert validate_window(start, end, BOUNDS, now=NOW) == (t(3), t(4))
