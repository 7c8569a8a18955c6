from flask import Blueprint, jsonify

from utils.auth_context import login_required
from utils.booking_settings import MAX_KEY, MIN_KEY, get_duration_bounds

settings_bp = Blueprint("settings", __name__, url_prefix="/settings")


@settings_bp.get("")
@login_required
def public_settings():
    # values only; descriptions are on the admin endpoint
    bounds = get_duration_bounds()
    return jsonify({
        MIN_KEY: bounds.min_duration,
        MAX_KEY: bounds.max_duration,
    }), 200
