"""
Configuration settings - Infrastructure component for managing application configuration.
Uses Pydantic for validation and environment variable loading.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ...domain.models.call import EndpointConfig

DEFAULT_BASE_URL = "https://cloudagent.metaltorque.dev"
API_KEY_PREFIX = "ca_"


class CloudAgentSettings(BaseSettings):
    """Process-wide settings, read once at startup and never mutated."""

    model_config = SettingsConfigDict(
        env_prefix="CLOUD_AGENT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    api_key: Optional[str] = Field(None, description="Bearer credential (ca_* prefix)")
    url: str = Field(DEFAULT_BASE_URL, description="Base URL of the Cloud Agent service")

    # Logging
    log_level: str = Field("INFO")

    @field_validator("url")
    @classmethod
    def normalize_url(cls, v: str) -> str:
        """Strip trailing separators and require an http(s) URL."""
        v = (v or "").strip().rstrip("/")
        if not (v.startswith("https://") or v.startswith("http://")):
            raise ValueError("CLOUD_AGENT_URL must start with http:// or https://")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if str(v).upper() not in valid_levels:
            return "INFO"
        return str(v).upper()

    @property
    def endpoint(self) -> EndpointConfig:
        return EndpointConfig(base_url=self.url, credential=self.api_key or None)

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to a dictionary safe for display (credential masked)."""
        return {
            "url": self.url,
            "api_key": "***" if self.api_key else None,
            "log_level": self.log_level,
        }

    def validate_required_settings(self) -> List[str]:
        """Return human-readable problems with the current configuration."""
        problems = []
        if not self.api_key:
            problems.append("CLOUD_AGENT_API_KEY is not set; every tool call will be refused")
        elif not self.api_key.startswith(API_KEY_PREFIX):
            problems.append(f"CLOUD_AGENT_API_KEY does not use the {API_KEY_PREFIX}* prefix")
        if self.api_key and not self.url.startswith("https://"):
            problems.append("CLOUD_AGENT_URL is not HTTPS; calls will be refused while an API key is set")
        return problems


# Global settings instance
_settings: Optional[CloudAgentSettings] = None


def get_settings() -> CloudAgentSettings:
    """Get global settings instance (singleton pattern)."""
    global _settings
    if _settings is None:
        _settings = CloudAgentSettings()
    return _settings


def reload_settings() -> CloudAgentSettings:
    """Reload settings from environment (for testing)."""
    global _settings
    _settings = CloudAgentSettings()
    return _settings
