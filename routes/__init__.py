from .health import health_bp
from .auth import auth_bp
from .rooms import rooms_bp
from .bookings import bookings_bp
from .calendar import calendar_bp
from .settings import settings_bp
from .admin import admin_bp
from .audit_logs import audit_bp
