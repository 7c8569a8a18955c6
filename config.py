import os
from datetime import timedelta

BASE_DIR = os.path.abspath(os.path.dirname(__file__))

class Config:
    # Secrets
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-only-change-me")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "dev-only-change-me-jwt-signing-key-0001")

    # SQLite file next to the app unless DATABASE_URL points at a real server
    SQLALCHEMY_DATABASE_URI = os.getenv(
        "DATABASE_URL",
        "sqlite:///" + os.path.join(BASE_DIR, "room_booking.db")
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Bounded pool; requests queue for up to DB_POOL_TIMEOUT seconds when saturated
    SQLALCHEMY_ENGINE_OPTIONS = {"pool_pre_ping": True}
    if not SQLALCHEMY_DATABASE_URI.startswith("sqlite"):
        SQLALCHEMY_ENGINE_OPTIONS.update(
            pool_size=int(os.getenv("DB_POOL_SIZE", "10")),
            max_overflow=int(os.getenv("DB_MAX_OVERFLOW", "0")),
            pool_timeout=int(os.getenv("DB_POOL_TIMEOUT", "30")),
        )

    # Create tables on startup instead of running migrations (tests, local demos)
    DB_CREATE_ALL = os.getenv("DB_CREATE_ALL", "false").lower() == "true"

    # Bearer tokens only, valid for 24 hours
    JWT_TOKEN_LOCATION = ["headers"]
    JWT_HEADER_TYPE = "Bearer"
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=24)

    # bcrypt cost factor
    BCRYPT_LOG_ROUNDS = int(os.getenv("BCRYPT_LOG_ROUNDS", "12"))

    # Brute-force protection
    MAX_LOGIN_ATTEMPTS = 5
    LOCKOUT_MINUTES = 1

    # Booking duration policy (minutes)
    DEFAULT_MIN_BOOKING_DURATION = 15
    DEFAULT_MAX_BOOKING_DURATION = 240
    MIN_BOOKING_DURATION_RANGE = (5, 120)
    MAX_BOOKING_DURATION_RANGE = (30, 1440)

    # Room capacity policy
    ROOM_CAPACITY_RANGE = (1, 100)

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    # Basic app settings
    DEBUG = False
