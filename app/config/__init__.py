"""Configuration module for the social data hub."""
from .settings import AppConfig, load_settings

__all__ = ["AppConfig", "load_settings"]
