from models import db
from models.room import Room
from models.user import User, UserRole
from security.password import hash_password
from utils.booking_settings import seed_settings

DEMO_PASSWORD = "password123"

DEMO_USERS = [
    ("admin", "admin@example.com", UserRole.ADMIN.value),
    ("user1", "user1@example.com", UserRole.USER.value),
    ("user2", "user2@example.com", UserRole.USER.value),
    ("user3", "user3@example.com", UserRole.USER.value),
    ("user4", "user4@example.com", UserRole.USER.value),
    ("user5", "user5@example.com", UserRole.USER.value),
]

DEMO_ROOMS = [
    ("R101", "Conference Room A", 10),
    ("R102", "Conference Room B", 8),
    ("R103", "Meeting Room 1", 6),
    ("R104", "Meeting Room 2", 6),
    ("R105", "Huddle Room 1", 4),
    ("R106", "Huddle Room 2", 4),
    ("R107", "Board Room", 12),
    ("R108", "Training Room", 15),
    ("R109", "Interview Room 1", 3),
    ("R110", "Interview Room 2", 3),
]


def seed_demo_data(password: str = DEMO_PASSWORD) -> dict:
    """Settings, demo accounts and rooms. Existing rows are left alone."""
    seed_settings()

    users_added = 0
    existing_users = {u.username for u in User.query.all()}
    for username, email, role in DEMO_USERS:
        if username in existing_users:
            continue
        db.session.add(User(
            username=username,
            email=email,
            role=role,
            password_digest=hash_password(password),
        ))
        users_added += 1

    rooms_added = 0
    existing_rooms = {r.room_number for r in Room.query.all()}
    for number, name, capacity in DEMO_ROOMS:
        if number in existing_rooms:
            continue
        db.session.add(Room(room_number=number, room_name=name, capacity=capacity))
        rooms_added += 1

    db.session.commit()
    return {"users": users_added, "rooms": rooms_added}
