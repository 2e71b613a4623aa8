"""
Flask decorators for API authentication and authorization.

API consumers (the social gadget container, the metadata registry) send an
OAuth 2.0 Bearer Token (RFC 6750). Tokens are HS256 JWTs signed with the
shared API_TOKEN_SECRET and carry their granted roles in a "roles" claim.

Security:
- HMAC-SHA256 signature verification
- Expiration, issued-at and issuer validation (RFC 7519)
"""

import logging
from functools import wraps
from typing import Any, Dict, Optional

import jwt
from jwt.exceptions import (
    DecodeError,
    ExpiredSignatureError,
    InvalidIssuerError,
    InvalidSignatureError,
    InvalidTokenError,
)
from flask import current_app, g, jsonify, request

logger = logging.getLogger(__name__)


class TokenValidationError(Exception):
    """Exception raised when JWT token validation fails."""
    pass


def validate_jwt_token(token: str) -> Dict[str, Any]:
    """
    Validate a JWT Bearer token.

    Args:
        token: JWT token string (without "Bearer " prefix)

    Returns:
        dict: Validated token claims

    Raises:
        TokenValidationError: If any validation fails
    """
    cfg = current_app.config["APP_CONFIG"]

    try:
        claims = jwt.decode(
            token,
            cfg.api_token_secret,
            algorithms=["HS256"],
            issuer=cfg.api_token_issuer,
            options={
                "verify_aud": False,
                "require": ["exp", "iat"],
            },
            leeway=5,
        )
    except ExpiredSignatureError:
        raise TokenValidationError("Token expired (exp claim)")
    except InvalidIssuerError as e:
        raise TokenValidationError(f"Invalid issuer: {e}")
    except InvalidSignatureError:
        raise TokenValidationError("Invalid signature (token tampered or wrong key)")
    except DecodeError as e:
        raise TokenValidationError(f"Token decode error (malformed JWT): {e}")
    except InvalidTokenError as e:
        raise TokenValidationError(f"Token validation failed: {e}")

    logger.debug("JWT validated for client: %s, roles: %s", claims.get("sub"), claims.get("roles"))
    return claims


def _token_roles(claims: Dict[str, Any]) -> list:
    roles = claims.get("roles", [])
    if isinstance(roles, str):
        return roles.split()
    if isinstance(roles, list):
        return [role for role in roles if isinstance(role, str)]
    return []


def _unauthorized(message: str):
    return jsonify({"error": "Unauthorized", "message": message}), 401


def require_api_role(config_attr: str):
    """
    Decorator requiring a valid Bearer token granting a configured role.

    Args:
        config_attr: Name of the AppConfig attribute holding the role
            (e.g. "social_api_role")

    Returns:
        Decorated function that validates the token before execution

    Raises:
        401 Unauthorized: Missing, invalid, or expired token
        403 Forbidden: Token lacks the role

    Example:
        @bp.route("/people/<uid>")
        @require_api_role("social_api_role")
        def get_person(uid):
            ...
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            auth_header = request.headers.get("Authorization", "")

            if not auth_header:
                logger.warning("API request missing Authorization header: %s", request.path)
                return _unauthorized("Authorization header required. Use 'Authorization: Bearer <token>'")

            if not auth_header.startswith("Bearer "):
                logger.warning("API request with invalid Authorization format: %s", auth_header[:20])
                return _unauthorized("Invalid Authorization header format. Expected 'Bearer <token>'")

            token = auth_header[7:].strip()
            if not token:
                return _unauthorized("Bearer token is empty")

            try:
                claims = validate_jwt_token(token)
            except TokenValidationError as e:
                logger.warning("API JWT validation failed: %s", e)
                return _unauthorized(str(e))

            required_role = getattr(current_app.config["APP_CONFIG"], config_attr)
            if required_role not in _token_roles(claims):
                logger.warning(
                    "API request lacks required role. Required: %s, token has: %s",
                    required_role, _token_roles(claims),
                )
                return jsonify({"error": "Forbidden", "message": f"Required role: {required_role}"}), 403

            g.api_claims = claims
            g.api_client_id = claims.get("sub")
            return fn(*args, **kwargs)

        return wrapper
    return decorator


def get_api_client_id() -> Optional[str]:
    """Client id (``sub`` claim) of the current request, after @require_api_role."""
    return getattr(g, "api_client_id", None)
