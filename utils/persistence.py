"""
Write helpers that turn driver exceptions into a tagged outcome.

Handlers look at ``WriteResult.outcome`` and pick the matching API error
instead of inspecting driver-specific error codes.
"""
import enum
import logging
from dataclasses import dataclass
from typing import Any, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from models import db

logger = logging.getLogger(__name__)


class Outcome(enum.Enum):
    OK = "ok"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    OTHER = "other"


@dataclass
class WriteResult:
    outcome: Outcome
    row: Any = None
    detail: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.OK


def commit(row=None) -> WriteResult:
    """Commit the current session; rolls back on any storage error."""
    try:
        db.session.commit()
    except IntegrityError as exc:
        db.session.rollback()
        return WriteResult(Outcome.CONFLICT, detail=str(exc.orig))
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.exception("Commit failed")
        return WriteResult(Outcome.OTHER, detail=str(exc))
    return WriteResult(Outcome.OK, row=row)


def insert(row) -> WriteResult:
    db.session.add(row)
    return commit(row)


def delete(model, row_id) -> WriteResult:
    row = db.session.get(model, row_id)
    if row is None:
        return WriteResult(Outcome.NOT_FOUND)
    db.session.delete(row)
    return commit(row)
