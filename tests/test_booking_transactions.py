import logging
import threading
from datetime import datetime, time

import pytest
from sqlalchemy.exc import OperationalError

from app import create_app
from models import db
from models.booking import Booking
from models.room import Room
from models.user import User
from tests.conftest import TEST_CONFIG, at, count_rows, future_day
from utils import reservations
from utils.errors import SlotConflict


@pytest.fixture()
def file_app(tmp_path):
    """App on a file-backed SQLite database so each thread gets its own connection."""
    app = create_app(dict(
        TEST_CONFIG,
        SQLALCHEMY_DATABASE_URI=f"sqlite:///{tmp_path / 'bookings.db'}",
        SQLALCHEMY_ENGINE_OPTIONS={"connect_args": {"timeout": 15}},
    ))
    with app.app_context():
        user = User(username="racer", email="racer@example.com", role="user", password_digest="x")
        room = Room(room_number="R201", room_name="Focus Room", capacity=4)
        db.session.add_all([user, room])
        db.session.commit()
        app.config["TEST_IDS"] = (user.id, room.id)
    yield app
    with app.app_context():
        db.session.remove()
        db.engine.dispose()


def _attempt(app, user_id, room_id, start, end, results):
    with app.app_context():
        try:
            reservations.create_booking(user_id, room_id, start, end)
            results.append("ok")
        except SlotConflict:
            results.append("conflict")
        except Exception as exc:
            results.append(repr(exc))
        finally:
            db.session.remove()


def test_concurrent_overlapping_bookings_store_only_one(file_app, monkeypatch):
    user_id, room_id = file_app.config["TEST_IDS"]
    day = future_day()
    start = datetime.combine(day, time(9))
    end = datetime.combine(day, time(10))

    # both requests get past the read-only conflict check before either writes
    barrier = threading.Barrier(2, timeout=10)
    real_find = reservations.find_conflict

    def find_then_wait(*args):
        clash = real_find(*args)
        barrier.wait()
        return clash

    monkeypatch.setattr(reservations, "find_conflict", find_then_wait)

    results = []
    threads = [
        threading.Thread(target=_attempt, args=(file_app, user_id, room_id, start, end, results))
        for _ in range(2)
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=30)

    assert sorted(results) == ["conflict", "ok"]
    assert count_rows(file_app, Booking) == 1


def _book(client, headers, room_id, start, end):
    return client.post("/bookings", headers=headers,
                       json={"room_id": room_id, "start_time": start, "end_time": end})


def test_database_error_is_rolled_back_and_reported_generically(app, client, seeded, user_headers,
                                                                 monkeypatch, caplog):
    real_insert = reservations._insert_if_free

    def insert_then_fail(*args):
        real_insert(*args)
        raise OperationalError("INSERT INTO bookings", {}, Exception("disk I/O error"))

    monkeypatch.setattr(reservations, "_insert_if_free", insert_then_fail)

    day = future_day()
    with caplog.at_level(logging.ERROR):
        resp = _book(client, user_headers, seeded["R101"], at(day, 10), at(day, 11))

    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Internal server error.", "code": "InternalError"}
    assert "disk I/O" not in resp.get_data(as_text=True)
    assert any("Unhandled error" in r.getMessage() for r in caplog.records)
    assert count_rows(app, Booking) == 0

    # the session is usable again on the next request
    monkeypatch.undo()
    resp = _book(client, user_headers, seeded["R101"], at(day, 10), at(day, 11))
    assert resp.status_code == 201
    assert count_rows(app, Booking) == 1
