from models.db import db, utcnow


class AuditLog(db.Model):
    __tablename__ = "audit_logs"

    id = db.Column(db.Integer, primary_key=True)
    # no FK: the trail outlives deleted accounts
    user_id = db.Column(db.Integer, nullable=True, index=True)
    action = db.Column(db.String(80), nullable=False, index=True)  # e.g. LOGIN_FAIL, BOOKING_CREATE
    entity = db.Column(db.String(40), nullable=True)               # booking, room, user, settings
    entity_id = db.Column(db.String(40), nullable=True)

    ip = db.Column(db.String(64), nullable=True)
    metadata_json = db.Column(db.Text, nullable=True)

    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
