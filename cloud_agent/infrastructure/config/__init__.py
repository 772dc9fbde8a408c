"""Configuration package."""

from .settings import CloudAgentSettings, get_settings, reload_settings

__all__ = ["CloudAgentSettings", "get_settings", "reload_settings"]
