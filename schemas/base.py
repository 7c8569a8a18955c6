from typing import ClassVar

from pydantic import BaseModel, ConfigDict


class RequestBody(BaseModel):
    """
    Base for JSON request bodies.

    Unknown keys are rejected. ``missing_message`` is the error text used
    when one of the required fields is absent or blank.
    """
    model_config = ConfigDict(extra="forbid")

    missing_message: ClassVar[str] = "Required fields are missing."
