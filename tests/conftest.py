from datetime import datetime, time, timedelta

import pytest

from app import create_app
from models import db
from models.booking import Booking
from models.db import utcnow
from models.room import Room
from models.user import User
from security.password import hash_password

TEST_CONFIG = {
    "TESTING": True,
    "SQLALCHEMY_DATABASE_URI": "sqlite://",
    "SQLALCHEMY_ENGINE_OPTIONS": {},
    "DB_CREATE_ALL": True,
    "BCRYPT_LOG_ROUNDS": 4,
    "JWT_SECRET_KEY": "test-only-jwt-secret-key-with-enough-length",
    "LOG_LEVEL": "WARNING",
}

PASSWORD = "password123"


@pytest.fixture()
def app():
    app = create_app(dict(TEST_CONFIG))
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


def _add_user(username, role="user"):
    user = User(
        username=username,
        email=f"{username}@example.com",
        role=role,
        password_digest=hash_password(PASSWORD),
    )
    db.session.add(user)
    db.session.commit()
    return user.id


@pytest.fixture()
def seeded(app):
    """Ids of an admin, two users and two rooms."""
    with app.app_context():
        ids = {
            "admin": _add_user("admin", role="admin"),
            "user1": _add_user("user1"),
            "user2": _add_user("user2"),
        }
        for number, name, capacity in (("R101", "Conference Room A", 10), ("R102", "Conference Room B", 8)):
            room = Room(room_number=number, room_name=name, capacity=capacity)
            db.session.add(room)
            db.session.commit()
            ids[number] = room.id
    return ids


def login(client, username, password=PASSWORD):
    resp = client.post("/auth/login", json={"username": username, "password": password})
    assert resp.status_code == 200, resp.get_json()
    return resp.get_json()["token"]


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def admin_headers(client, seeded):
    return bearer(login(client, "admin"))


@pytest.fixture()
def user_headers(client, seeded):
    return bearer(login(client, "user1"))


@pytest.fixture()
def other_headers(client, seeded):
    return bearer(login(client, "user2"))


def future_day(days=2):
    return (utcnow() + timedelta(days=days)).date()


def at(day, hour, minute=0):
    """Naive ISO string for ``day`` at hour:minute."""
    return datetime.combine(day, time(hour, minute)).isoformat()


def add_booking(app, room_id, user_id, start, end):
    with app.app_context():
        b = Booking(room_id=room_id, user_id=user_id,
                    start_time=datetime.fromisoformat(start), end_time=datetime.fromisoformat(end))
        db.session.add(b)
        db.session.commit()
        return b.id


def count_rows(app, model):
    with app.app_context():
        return db.session.query(model).count()
