from flask import Blueprint, jsonify, current_app, g

from models import db
from models.user import User
from schemas import LoginRequest
from security.bruteforce import is_locked, register_failure, reset_attempts
from security.password import verify_password
from security.tokens import issue_token
from utils.audit import log_event
from utils.auth_context import login_required
from utils.errors import AccountLocked, InvalidCredentials, NotFound
from utils.request_body import parse_body


auth_bp = Blueprint("auth", __name__, url_prefix="/auth")


@auth_bp.post("/login")
def login():
    body = parse_body(LoginRequest)
    username = body.username.strip()

    locked, seconds_left = is_locked(username)
    if locked:
        log_event("LOGIN_LOCKED", metadata={"username": username, "seconds_left": seconds_left})
        raise AccountLocked(retry_after_seconds=seconds_left)

    # unknown user and wrong password fail the same way
    user = User.query.filter_by(username=username).first()
    if not user or not verify_password(body.password, user.password_digest):
        fail_count, locked_now = register_failure(username)
        log_event(
            "LOGIN_FAIL",
            user_id=user.id if user else None,
            metadata={"username": username, "fail_count": fail_count, "locked_now": locked_now}
        )
        if locked_now:
            raise AccountLocked(
                "Too many failed attempts. Account locked.",
                lockout_minutes=current_app.config.get("LOCKOUT_MINUTES", 1),
            )
        raise InvalidCredentials()

    reset_attempts(username)
    token = issue_token(user)

    log_event("LOGIN_SUCCESS", user_id=user.id)
    return jsonify(token=token, user=user.public_view()), 200


@auth_bp.get("/me")
@login_required
def me():
    # claims may outlive the account; re-read so a deleted user gets a 404
    user = db.session.get(User, g.user.id)
    if user is None:
        raise NotFound("User not found.")
    return jsonify(user.public_view()), 200
