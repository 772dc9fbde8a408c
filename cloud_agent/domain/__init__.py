"""Domain layer - Pure business logic with no external dependencies."""

from .models.call import (
    CallFailure,
    CallRequest,
    CallResult,
    CallSuccess,
    EndpointConfig,
    FailureKind,
    ToolOutput,
)

__all__ = [
    "CallFailure",
    "CallRequest",
    "CallResult",
    "CallSuccess",
    "EndpointConfig",
    "FailureKind",
    "ToolOutput",
]
