from models.db import db, utcnow


class BookingSetting(db.Model):
    __tablename__ = "booking_settings"

    id = db.Column(db.Integer, primary_key=True)
    setting_key = db.Column(db.String(50), unique=True, nullable=False)  # e.g. min_booking_duration
    setting_value = db.Column(db.String(100), nullable=False)
    description = db.Column(db.String(255), nullable=True)

    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)
