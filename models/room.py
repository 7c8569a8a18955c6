from models.db import db, utcnow


class Room(db.Model):
    __tablename__ = "rooms"

    id = db.Column(db.Integer, primary_key=True)
    room_number = db.Column(db.String(10), unique=True, nullable=False)  # e.g. R101
    room_name = db.Column(db.String(100), nullable=False)
    capacity = db.Column(db.Integer, nullable=False, default=1)

    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    bookings = db.relationship("Booking", back_populates="room", passive_deletes=True)
