from datetime import timedelta
from flask import current_app
from sqlalchemy.exc import IntegrityError

from models import db
from models.db import utcnow
from models.login_attempt import LoginAttempt
from utils.audit import client_ip

def _client_ip() -> str:
    return client_ip() or "unknown"

def _attempt_row(username: str):
    return LoginAttempt.query.filter_by(username=username, ip=_client_ip()).first()

def is_locked(username: str) -> tuple[bool, int]:
    """
    Returns (locked, seconds_remaining)
    """
    row = _attempt_row(username)
    if not row or not row.locked_until:
        return False, 0

    now = utcnow()
    if row.locked_until <= now:
        return False, 0

    seconds = int((row.locked_until - now).total_seconds())
    return True, max(seconds, 1)

def register_failure(username: str) -> tuple[int, bool]:
    """
    Increments failure counter. Returns (fail_count, locked_now)
    """
    now = utcnow()

    row = _attempt_row(username)
    if not row:
        db.session.add(LoginAttempt(username=username, ip=_client_ip(), fail_count=0))
        try:
            db.session.commit()
        except IntegrityError:
            # a concurrent first failure created the row; count on top of it
            db.session.rollback()
        row = _attempt_row(username)

    # an expired lock starts a fresh count
    if row.locked_until and row.locked_until <= now:
        row.fail_count = 0
        row.locked_until = None

    row.fail_count += 1
    row.last_fail_at = now

    max_attempts = current_app.config.get("MAX_LOGIN_ATTEMPTS", 5)
    lock_minutes = current_app.config.get("LOCKOUT_MINUTES", 1)

    locked_now = False
    if row.fail_count >= max_attempts:
        row.locked_until = now + timedelta(minutes=lock_minutes)
        locked_now = True

    db.session.commit()
    return row.fail_count, locked_now

def reset_attempts(username: str):
    """
    Clears failure counter after successful login.
    """
    row = _attempt_row(username)
    if not row:
        return
    row.fail_count = 0
    row.last_fail_at = None
    row.locked_until = None
    db.session.commit()
