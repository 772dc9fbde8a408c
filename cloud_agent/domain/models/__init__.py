"""Domain models package."""

from .call import (
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
