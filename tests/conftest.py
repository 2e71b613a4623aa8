"""Pytest shared fixtures."""
import os
import pathlib
import sys
import time

# Add project root to Python path
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Configure test environment BEFORE any app imports
os.environ.setdefault("DEMO_MODE", "true")

import jwt
import pytest

from app.config.settings import AppConfig
from app.core.directory import YamlDirectory
from app.flask_app import create_app

TEST_SECRET = "test-secret-key-for-hs256-signing-0123456789"
TEST_ISSUER = "https://hub.test"

JANE = "urn:collab:person:example.org:jane"
JOHN = "urn:collab:person:example.org:john"
RESEARCH = "urn:collab:group:example.org:research"
BOARD = "urn:collab:group:example.org:board"


@pytest.fixture()
def app_config():
    return AppConfig(
        demo_mode=False,
        api_token_secret=TEST_SECRET,
        api_token_issuer=TEST_ISSUER,
        social_api_role="api-user-social",
        metadata_push_role="api-user-janus",
        metadata_push_enabled=True,
        log_level="DEBUG",
    )


@pytest.fixture()
def directory():
    return YamlDirectory(
        people={
            JANE: {
                "displayname": "Jane Doe",
                "givenname": "Jane",
                "mail": ["jane@example.org", "j.doe@example.org"],
                "schachomeorganization": "example.org",
            },
            JOHN: {
                "displayname": "John Smith",
                "givenname": "John",
                "mail": "john@example.org",
            },
        },
        groups={
            RESEARCH: {"displayExtension": "Research", "description": "Research staff", "members": [JANE, JOHN]},
            BOARD: {"displayExtension": "Board", "members": [JANE]},
        },
    )


@pytest.fixture()
def app(app_config, directory):
    flask_app = create_app(app_config, directory)
    flask_app.config["TESTING"] = True
    return flask_app


@pytest.fixture()
def client(app):
    with app.test_client() as client:
        yield client


def make_token(roles=None, secret=TEST_SECRET, issuer=TEST_ISSUER, expires_in=300, sub="gadget-container"):
    """Mint an HS256 bearer token the way the API token issuer does."""
    now = int(time.time())
    claims = {
        "sub": sub,
        "iss": issuer,
        "iat": now,
        "exp": now + expires_in,
        "roles": roles if roles is not None else [],
    }
    return jwt.encode(claims, secret, algorithm="HS256")


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def social_headers():
    return bearer(make_token(["api-user-social"]))


@pytest.fixture()
def push_headers():
    return bearer(make_token(["api-user-janus"], sub="metadata-registry"))


@pytest.fixture()
def auth_headers():
    """Factory for Authorization headers: auth_headers(["role"], expires_in=-60, ...)."""
    def _headers(roles=None, **kwargs):
        return bearer(make_token(roles, **kwargs))
    return _headers
