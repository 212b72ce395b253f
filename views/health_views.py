# Purpose: Liveness/readiness endpoints for container orchestration and uptime checks.

import time
from datetime import datetime, timezone

from flask import Blueprint, current_app, jsonify

from core.utils import get_environment

health_bp = Blueprint("health_bp", __name__, url_prefix="/health")

_STARTED_AT = time.monotonic()


@health_bp.route("", methods=["GET"])
def health_check():
    """Overall service status with uptime in seconds."""
    return jsonify(
        {
            "status": "ok",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": current_app.config.get("SERVICE_NAME", "bond-yield-calculator"),
            "uptime": round(time.monotonic() - _STARTED_AT, 3),
            "environment": get_environment(),
        }
    ), 200


@health_bp.route("/live", methods=["GET"])
def liveness():
    return jsonify({"status": "alive"}), 200


@health_bp.route("/ready", methods=["GET"])
def readiness():
    # The engine has no backing services; readiness only needs the settings to parse
    from core.settings_loader import load_settings

    settings_ok = isinstance(load_settings(), dict)
    return jsonify(
        {
            "status": "ready" if settings_ok else "degraded",
            "checks": {"settings": "loaded" if settings_ok else "unavailable"},
        }
    ), 200
