from .db import db
from .user import User, UserRole
from .room import Room
from .booking import Booking
from .booking_setting import BookingSetting
from .audit_log import AuditLog
from .login_attempt import LoginAttempt
