from models.db import db, utcnow


class Booking(db.Model):
    __tablename__ = "bookings"

    id = db.Column(db.Integer, primary_key=True)

    room_id = db.Column(db.Integer, db.ForeignKey("rooms.id", ondelete="CASCADE"), nullable=False)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # naive UTC, half-open interval [start_time, end_time)
    start_time = db.Column(db.DateTime, nullable=False)
    end_time = db.Column(db.DateTime, nullable=False)

    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    room = db.relationship("Room", back_populates="bookings")
    user = db.relationship("User", back_populates="bookings")

    __table_args__ = (
        # conflict checks and availability lookups filter by room + time
        db.Index("ix_bookings_room_time", "room_id", "start_time", "end_time"),
        db.CheckConstraint("start_time < end_time", name="ck_bookings_interval"),
    )
