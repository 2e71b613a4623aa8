"""Settings loader with environment variable and Docker secrets integration."""
from __future__ import annotations
import logging
import os
import secrets
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_DIRECTORY_DATA_PATH = str(Path(__file__).resolve().parents[2] / "data" / "directory.yaml")
LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _load_secret_from_file(secret_name: str, env_var: str | None = None) -> str | None:
    """
    Load secret from /run/secrets (Docker secrets pattern).

    Priority:
    1. /run/secrets/{secret_name} (Docker secrets mount)
    2. Environment variable (fallback)

    Args:
        secret_name: Name of the secret file in /run/secrets
        env_var: Optional environment variable name to check as fallback

    Returns:
        Secret value or None if not found
    """
    secret_file = Path("/run/secrets") / secret_name

    if secret_file.exists() and secret_file.is_file():
        try:
            secret_value = secret_file.read_text().strip()
            if secret_value:
                logger.info("[settings] Loaded %s from /run/secrets", secret_name)
                return secret_value
        except OSError as e:
            logger.warning("[settings] Failed to read /run/secrets/%s: %s", secret_name, e)

    if env_var:
        secret_value = os.getenv(env_var)
        if secret_value:
            return secret_value

    return None


def _env_flag(var_name: str, default: bool) -> bool:
    return os.environ.get(var_name, str(default)).strip().lower() == "true"


@dataclass
class AppConfig:
    """Application configuration container."""
    # Mode
    demo_mode: bool

    # API bearer tokens (HS256)
    api_token_secret: str
    api_token_issuer: str = "social-data-hub"

    # Roles carried in the token "roles" claim
    social_api_role: str = "api-user-social"
    metadata_push_role: str = "api-user-janus"

    # Features
    metadata_push_enabled: bool = True

    # Data
    directory_data_path: str = DEFAULT_DIRECTORY_DATA_PATH

    # Logging
    log_level: str = "INFO"


def _get_or_generate(var_name: str, demo_default: Optional[str] = None, required: bool = True, demo_mode: bool = False) -> str:
    """Get environment variable or use demo default."""
    value = os.environ.get(var_name)
    if value:
        return value

    if demo_mode and demo_default is not None:
        logger.info("[demo-mode] Using default for %s", var_name)
        os.environ[var_name] = demo_default
        return demo_default

    if not required:
        return ""

    raise RuntimeError(f"Environment variable {var_name} is required in production mode.")


def load_settings() -> AppConfig:
    """Load application settings from environment and /run/secrets."""
    demo_mode = _env_flag("DEMO_MODE", False)

    # Token signing secret
    api_token_secret = _load_secret_from_file("api_token_secret", "API_TOKEN_SECRET")
    if not api_token_secret:
        if not demo_mode:
            raise RuntimeError("API_TOKEN_SECRET not found in /run/secrets or environment")
        api_token_secret = secrets.token_urlsafe(48)
        os.environ["API_TOKEN_SECRET"] = api_token_secret
        logger.warning("[demo-mode] Generated temporary API_TOKEN_SECRET")

    api_token_issuer = _get_or_generate("API_TOKEN_ISSUER", demo_default="social-data-hub", demo_mode=demo_mode)

    social_api_role = os.environ.get("SOCIAL_API_ROLE", "api-user-social").strip()
    metadata_push_role = os.environ.get("METADATA_PUSH_ROLE", "api-user-janus").strip()
    metadata_push_enabled = _env_flag("METADATA_PUSH_ENABLED", True)

    directory_data_path = os.environ.get("DIRECTORY_DATA_PATH", "").strip() or DEFAULT_DIRECTORY_DATA_PATH

    log_level = os.environ.get("LOG_LEVEL", "DEBUG" if demo_mode else "INFO").strip().upper()
    if log_level not in LOG_LEVELS:
        raise RuntimeError(f"Unknown LOG_LEVEL {log_level!r}")

    mode_label = "DEMO" if demo_mode else "PRODUCTION"
    logger.info(
        "[settings] Mode=%s; issuer=%s; metadata_push=%s",
        mode_label, api_token_issuer, "on" if metadata_push_enabled else "off",
    )

    return AppConfig(
        demo_mode=demo_mode,
        api_token_secret=api_token_secret,
        api_token_issuer=api_token_issuer,
        social_api_role=social_api_role,
        metadata_push_role=metadata_push_role,
        metadata_push_enabled=metadata_push_enabled,
        directory_data_path=directory_data_path,
        log_level=log_level,
    )
