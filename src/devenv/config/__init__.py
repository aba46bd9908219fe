"""Configuration for devenv."""

from devenv.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
