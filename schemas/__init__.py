from .base import RequestBody
from .auth import LoginRequest
from .booking import BookingCreate
from .admin import UserCreate, RoomCreate, SettingsUpdate
