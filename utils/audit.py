import json
import logging

from flask import has_request_context, request

from models import db
from models.audit_log import AuditLog

logger = logging.getLogger(__name__)


IP_MAX_LENGTH = 64


def client_ip():
    """First hop of X-Forwarded-For (the original client), else the peer address."""
    if not has_request_context():
        return None
    forwarded = request.headers.get("X-Forwarded-For", "")
    ip = forwarded.split(",")[0].strip() or request.remote_addr
    return ip[:IP_MAX_LENGTH] if ip else None


def log_event(action: str, user_id=None, entity=None, entity_id=None, metadata=None):
    """Append a row to the audit trail and mirror it to the application log."""
    logger.info("audit %s user=%s %s=%s", action, user_id, entity, entity_id)

    row = AuditLog(
        user_id=user_id,
        action=action,
        entity=entity,
        entity_id=str(entity_id) if entity_id is not None else None,
        ip=client_ip(),
        metadata_json=json.dumps(metadata, default=str) if metadata else None,
    )
    db.session.add(row)
    db.session.commit()
