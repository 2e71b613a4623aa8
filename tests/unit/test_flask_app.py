"""Tests for the application factory."""
import pytest

from app.core.exceptions import DirectoryLoadError
from app.flask_app import create_app


def test_create_app_from_environment(monkeypatch):
    monkeypatch.setenv("DEMO_MODE", "true")
    monkeypatch.delenv("DIRECTORY_DATA_PATH", raising=False)

    app = create_app()

    assert app.config["APP_CONFIG"].demo_mode is True
    assert app.extensions["social_data"] is not None
    rules = {rule.rule for rule in app.url_map.iter_rules()}
    assert "/social/rest/people/<uid>" in rules
    assert "/api/connections" in rules


def test_create_app_fails_on_missing_directory(app_config, tmp_path):
    app_config.directory_data_path = str(tmp_path / "missing.yaml")
    with pytest.raises(DirectoryLoadError):
        create_app(app_config)


def test_unknown_route_returns_json_404(client):
    response = client.get("/nowhere")
    assert response.status_code == 404
    assert response.get_json()["error"] == "Not Found"


def test_unhandled_error_returns_json_500(app, social_headers, monkeypatch):
    def explode(uid, fields=None):
        raise RuntimeError("boom")

    monkeypatch.setattr(app.extensions["social_data"], "get_person", explode)
    app.config["TESTING"] = False
    app.config["PROPAGATE_EXCEPTIONS"] = False

    response = app.test_client().get("/social/rest/people/jane", headers=social_headers)

    assert response.status_code == 500
    assert response.get_json()["message"] == "An unexpected error occurred"


def test_abort_403_renders_generic_json(app):
    from flask import abort

    @app.route("/forbidden-test")
    def forbidden_view():
        abort(403)

    response = app.test_client().get("/forbidden-test")
    assert response.status_code == 403
    assert response.get_json()["error"] == "Forbidden"
