"""
Call domain models - one outbound exchange and its classified outcome.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional, Union
from enum import Enum


DEFAULT_TIMEOUT_MS = 600_000
ALLOWED_METHODS = ("GET", "POST")


class FailureKind(Enum):
    """Why a call did not produce a payload."""
    MISSING_CREDENTIAL = "missing_credential"
    SECURITY = "security"
    NETWORK_ERROR = "network_error"
    TIMEOUT = "timeout"
    OVERSIZED_RESPONSE = "oversized_response"
    HTTP_ERROR = "http_error"
    INVALID_ARGUMENTS = "invalid_arguments"


@dataclass(frozen=True)
class EndpointConfig:
    """Where every call goes, and the bearer secret used to get there."""
    base_url: str
    credential: Optional[str] = None

    def __post_init__(self) -> None:
        if self.base_url.endswith("/"):
            raise ValueError("base_url must not end with '/'")

    @property
    def has_credential(self) -> bool:
        # Whitespace-only keys count as present; the remote side rejects them.
        return bool(self.credential)

    def __repr__(self) -> str:
        secret = "***" if self.credential else None
        return f"EndpointConfig(base_url={self.base_url!r}, credential={secret!r})"


@dataclass(frozen=True)
class CallRequest:
    """A single request against the configured endpoint."""
    method: str
    path: str
    body: Optional[Any] = None
    timeout_ms: int = DEFAULT_TIMEOUT_MS

    def __post_init__(self) -> None:
        if self.method not in ALLOWED_METHODS:
            raise ValueError(f"Method not allowed: {self.method}")
        if not self.path.startswith("/"):
            raise ValueError(f"Path must start with '/': {self.path!r}")
        if self.timeout_ms <= 0:
            raise ValueError("timeout_ms must be positive")

    @classmethod
    def get(cls, path: str, timeout_ms: int = DEFAULT_TIMEOUT_MS) -> CallRequest:
        return cls("GET", path, None, timeout_ms)

    @classmethod
    def post(cls, path: str, body: Any, timeout_ms: int = DEFAULT_TIMEOUT_MS) -> CallRequest:
        return cls("POST", path, body, timeout_ms)

    @property
    def timeout_s(self) -> float:
        return self.timeout_ms / 1000.0


@dataclass(frozen=True)
class CallSuccess:
    """Decoded JSON payload, or raw text when the body was not JSON."""
    payload: Any


@dataclass(frozen=True)
class CallFailure:
    """Classified failure with caller-safe message."""
    kind: FailureKind
    message: str


CallResult = Union[CallSuccess, CallFailure]


@dataclass(frozen=True)
class ToolOutput:
    """Text returned to the caller protocol for one tool invocation."""
    text: str
    is_error: bool = False
