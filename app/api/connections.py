"""Metadata push endpoint.

The metadata registry POSTs its complete set of connections; the hub
replaces its stored service provider / identity provider roles and answers
with what changed.

Request:
    POST /api/connections
    Authorization: Bearer <token with the metadata push role>
    {"connections": {"1": {"name": "https://sp.example.org", "type": "saml20-sp"}}}

Response:
    {"success": true, "created": [...], "updated": [...], "removed": [...]}
"""
from __future__ import annotations
import logging

from flask import Blueprint, abort, current_app, jsonify, request

from app.api.decorators import get_api_client_id, require_api_role
from app.core.metadata import assemble_roles

bp = Blueprint("connections", __name__)

# Pushes carry the full registry, so allow far more than a regular request
PUSH_MAX_SIZE_BYTES = 32 * 1024 * 1024

logger = logging.getLogger(__name__)


@bp.before_request
def ensure_push_enabled():
    """Hide the endpoint entirely while metadata push is switched off."""
    if not current_app.config["APP_CONFIG"].metadata_push_enabled:
        return jsonify(None), 404
    return None


@bp.route("/connections", methods=["POST"])
@require_api_role("metadata_push_role")
def push_connections():
    """Synchronize pushed connections into the metadata repository."""
    if request.content_length is not None and request.content_length > PUSH_MAX_SIZE_BYTES:
        abort(413)

    body = request.get_json(silent=True)
    if not isinstance(body, dict) or not isinstance(body.get("connections"), dict):
        abort(400, description="Unrecognized structure for JSON")

    try:
        roles = assemble_roles(body["connections"])
    except ValueError as exc:
        abort(400, description=str(exc))

    logger.info("Metadata push of %d connections by %s", len(roles), get_api_client_id())
    repository = current_app.extensions["metadata_repository"]
    result = repository.synchronize(roles)
    return jsonify(result.to_dict())
