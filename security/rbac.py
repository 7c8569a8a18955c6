from functools import wraps
from flask import g

from utils.errors import Forbidden, Unauthenticated

def require_roles(*role_names: str):
    """
    Usage (after login_required, which populates g.user):

        @login_required
        @require_roles("admin")
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            user = getattr(g, "user", None)
            if user is None:
                raise Unauthenticated()

            if user.role not in role_names:
                raise Forbidden()

            return fn(*args, **kwargs)
        return wrapper
    return decorator
