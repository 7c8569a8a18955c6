from typing import Type, TypeVar

from flask import request
from pydantic import ValidationError

from schemas.base import RequestBody
from utils.errors import MalformedInput, MissingFields

T = TypeVar("T", bound=RequestBody)


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_body(schema: Type[T]) -> T:
    """
    Validate the JSON body against ``schema``.

    Blank strings and nulls count as absent, so a required field sent as ""
    is reported as missing rather than malformed.
    """
    data = request.get_json(silent=True)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise MalformedInput("Request body must be a JSON object.")

    cleaned = {k: v for k, v in data.items() if not _is_blank(v)}
    try:
        return schema.model_validate(cleaned)
    except ValidationError as exc:
        errors = exc.errors()
        missing = sorted({str(e["loc"][0]) for e in errors if e["type"] == "missing"})
        if missing:
            raise MissingFields(schema.missing_message, fields=missing)
        raise MalformedInput(
            "Malformed request.",
            details=[
                {"field": ".".join(str(p) for p in e["loc"]), "message": e["msg"]}
                for e in errors
            ],
        )
