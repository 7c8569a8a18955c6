from flask import Blueprint, jsonify, request

from models.audit_log import AuditLog
from models.user import UserRole
from security.rbac import require_roles
from utils.auth_context import login_required
from utils.dates import iso
from utils.filters import FilterBuilder

audit_bp = Blueprint("audit", __name__, url_prefix="/admin")


@audit_bp.get("/audit-logs")
@login_required
@require_roles(UserRole.ADMIN.value)
def list_audit_logs():
    limit = request.args.get("limit", type=int) or 200
    limit = max(1, min(limit, 500))

    filters = FilterBuilder()
    filters.add_if(request.args.get("action") or None, lambda a: AuditLog.action == a)
    filters.add_if(request.args.get("user_id", type=int), lambda uid: AuditLog.user_id == uid)

    rows = (
        filters.apply(AuditLog.query)
        .order_by(AuditLog.created_at.desc(), AuditLog.id.desc())
        .limit(limit)
        .all()
    )
    return jsonify([
        {
            "id": r.id,
            "created_at": iso(r.created_at),
            "user_id": r.user_id,
            "action": r.action,
            "entity": r.entity,
            "entity_id": r.entity_id,
            "ip": r.ip,
            "metadata": r.metadata_json,
        }
        for r in rows
    ]), 200
