"""
Cloud Agent MCP - exposes the Cloud Agent service as MCP tools over stdio.
"""

__version__ = "1.0.0"
__author__ = "Cloud Agent Team"

__all__ = [
    "CallGate",
    "HttpTransport",
    "get_settings",
]

# Lazy attribute access to avoid importing requests/pydantic at package import time.
def __getattr__(name: str):  # pragma: no cover - simple lazy loader
    if name == "CallGate":
        from .application.call_gate import CallGate as _G
        return _G
    if name == "HttpTransport":
        from .infrastructure.http.transport import HttpTransport as _T
        return _T
    if name == "get_settings":
        from .infrastructure.config.settings import get_settings as _s
        return _s
    raise AttributeError(f"module 'cloud_agent' has no attribute {name!r}")
