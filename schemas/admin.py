from typing import ClassVar, Optional

from pydantic import Field

from .base import RequestBody


class UserCreate(RequestBody):
    missing_message: ClassVar[str] = "Username, password, and email are required."

    username: str = Field(max_length=50)
    email: str = Field(max_length=100)
    password: str
    # checked against UserRole in the handler so a bad value maps to InvalidRole
    role: Optional[str] = None


class RoomCreate(RequestBody):
    missing_message: ClassVar[str] = "Room number, name, and capacity are required."

    room_number: str = Field(max_length=10)
    room_name: str = Field(max_length=100)
    capacity: int


class SettingsUpdate(RequestBody):
    """Partial update: only the supplied bounds are written."""
    min_booking_duration: Optional[int] = None
    max_booking_duration: Optional[int] = None
