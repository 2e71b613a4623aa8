"""OpenSocial-style REST endpoints for people and groups.

Records are read from the directory and translated to social field names
by the social data service; this module only handles HTTP concerns.

Endpoints (all require the social API role):
    GET /social/rest/people/<uid>?fields=displayName,emails
    GET /social/rest/people/<uid>/groups
    GET /social/rest/groups/<name>?fields=id,title
    GET /social/rest/groups/<name>/members?fields=...
"""
from __future__ import annotations
import logging

from flask import Blueprint, abort, current_app, jsonify, request

from app.api.decorators import get_api_client_id, require_api_role
from app.core.social_data import SocialDataService
from app.core.validators import parse_fields_param

bp = Blueprint("social", __name__)

logger = logging.getLogger(__name__)


def _service() -> SocialDataService:
    return current_app.extensions["social_data"]


def _requested_fields() -> list:
    try:
        return parse_fields_param(request.args.get("fields"))
    except ValueError as exc:
        abort(400, description=str(exc))


def _collection(entries: list):
    return jsonify({
        "entry": entries,
        "totalResults": len(entries),
        "startIndex": 0,
        "itemsPerPage": len(entries),
    })


@bp.route("/people/<uid>/groups", methods=["GET"])
@require_api_role("social_api_role")
def get_person_groups(uid: str):
    """List the groups a person is a member of."""
    groups = _service().get_groups_for_person(uid)
    return _collection(groups)


@bp.route("/people/<uid>", methods=["GET"])
@require_api_role("social_api_role")
def get_person(uid: str):
    """Return one person, optionally restricted to ``fields``."""
    fields = _requested_fields()
    logger.info("Person %s requested by %s (fields=%s)", uid, get_api_client_id(), fields or "@all")
    return jsonify({"entry": _service().get_person(uid, fields)})


@bp.route("/groups/<name>/members", methods=["GET"])
@require_api_role("social_api_role")
def get_group_members(name: str):
    """List the members of a group."""
    members = _service().get_group_members(name, _requested_fields())
    return _collection(members)


@bp.route("/groups/<name>", methods=["GET"])
@require_api_role("social_api_role")
def get_group(name: str):
    """Return one group, optionally restricted to ``fields``."""
    return jsonify({"entry": _service().get_group(name, _requested_fields())})
