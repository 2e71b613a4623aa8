"""Health check endpoints."""
from flask import Blueprint

bp = Blueprint("health", __name__)


@bp.route("/health")
def health_check():
    """Basic health check endpoint."""
    return ("ok", 200, {"Content-Type": "text/plain"})


@bp.route("/ready")
def readiness_check():
    """Readiness check endpoint.

    create_app() loads the directory before registering this blueprint and
    fails on bad data, so a serving app is always ready.
    """
    return ("ready", 200, {"Content-Type": "text/plain"})
