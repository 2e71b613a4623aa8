"""Flask application factory and bootstrap.

This module provides the create_app() factory function for initializing
the Flask application with all blueprints, services, and configuration.
"""
from __future__ import annotations
import logging
from typing import Optional

from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix

from app.config import AppConfig, load_settings
from app.core.directory import YamlDirectory
from app.core.metadata import InMemoryMetadataRepository
from app.core.social_data import SocialDataService


# ─────────────────────────────────────────────────────────────────────────────
# Application Factory
# ─────────────────────────────────────────────────────────────────────────────
def create_app(cfg: Optional[AppConfig] = None, directory: Optional[YamlDirectory] = None) -> Flask:
    """Create and configure Flask application.

    Args:
        cfg: Settings (loaded from the environment when omitted)
        directory: Person/group source (loaded from cfg.directory_data_path when omitted)
    """
    if cfg is None:
        cfg = load_settings()

    logging.basicConfig(level=cfg.log_level, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")

    app = Flask(__name__)

    # Store config for easy access in routes
    app.config["APP_CONFIG"] = cfg

    # Trust X-Forwarded-* headers from proxy (nginx)
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)  # type: ignore

    if directory is None:
        directory = YamlDirectory.from_file(cfg.directory_data_path)
    app.extensions["social_data"] = SocialDataService(directory)
    app.extensions["metadata_repository"] = InMemoryMetadataRepository()

    # Register blueprints
    from app.api import connections, errors, health, social

    app.register_blueprint(health.bp)
    app.register_blueprint(social.bp, url_prefix="/social/rest")
    app.register_blueprint(connections.bp, url_prefix="/api")

    # Register error handlers
    errors.register_error_handlers(app)

    mode_label = "DEMO" if cfg.demo_mode else "PRODUCTION"
    app.logger.info(f"[flask_app] Mode={mode_label}")
    app.logger.info("[flask_app] Social API registered at /social/rest, metadata push at /api/connections")

    if cfg.demo_mode:
        app.logger.warning("[flask_app] Demo mode active - do not deploy with a generated token secret")

    return app
