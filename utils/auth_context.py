from dataclasses import dataclass
from functools import wraps

from flask import g
from flask_jwt_extended import get_jwt, verify_jwt_in_request

from utils.errors import InvalidToken


@dataclass(frozen=True)
class CurrentUser:
    """Identity taken from verified token claims; no database round trip."""
    id: int
    username: str
    role: str


def load_current_user() -> CurrentUser:
    # raises NoAuthorizationError / DecodeError / ExpiredSignatureError, which
    # the JWT loaders in security.tokens turn into Unauthenticated / InvalidToken
    verify_jwt_in_request()
    claims = get_jwt()
    try:
        user = CurrentUser(
            id=int(claims["id"]),
            username=str(claims["username"]),
            role=str(claims["role"]),
        )
    except (KeyError, TypeError, ValueError):
        raise InvalidToken()
    g.user = user
    return user


def login_required(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        load_current_user()
        return fn(*args, **kwargs)
    return wrapper
