from typing import ClassVar

from pydantic import Field

from .base import RequestBody


class LoginRequest(RequestBody):
    missing_message: ClassVar[str] = "Username and password are required."

    username: str = Field(max_length=50)
    password: str
