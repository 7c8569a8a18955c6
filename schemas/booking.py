from datetime import datetime
from typing import ClassVar

from pydantic import Field

from .base import RequestBody


class BookingCreate(RequestBody):
    """
    Body of POST /bookings. The owner comes from the token, never the body.
    Times are ISO 8601; naive values are read as UTC.
    """
    missing_message: ClassVar[str] = "Room ID, start time, and end time are required."

    # 64-bit key range; larger values cannot be bound as a database integer
    room_id: int = Field(gt=0, le=2**63 - 1)
    start_time: datetime
    end_time: datetime
