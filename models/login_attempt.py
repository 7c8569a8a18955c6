from models.db import db, utcnow


class LoginAttempt(db.Model):
    __tablename__ = "login_attempts"

    id = db.Column(db.Integer, primary_key=True)

    # keyed by the submitted username, whether or not an account exists
    username = db.Column(db.String(50), nullable=False, index=True)
    ip = db.Column(db.String(64), nullable=False, index=True)

    fail_count = db.Column(db.Integer, default=0, nullable=False)
    last_fail_at = db.Column(db.DateTime, nullable=True)
    locked_until = db.Column(db.DateTime, nullable=True)

    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    __table_args__ = (
        db.UniqueConstraint("username", "ip", name="uq_login_attempt_username_ip"),
    )
