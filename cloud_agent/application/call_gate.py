"""
Call gate - the single path every tool takes to reach the Cloud Agent service.

Responsibilities:
- Refuse to touch the network when no API key is configured (fail closed)
- Build the route only after that check, then delegate to the transport
- Project successful payloads into tool text, render failures as one "Error: " line
"""

from __future__ import annotations
import logging
import threading
from typing import Any, Callable, List, Optional, Union
from urllib.parse import quote

from ..domain.interfaces.transport import Transport
from ..domain.models.call import (
    CallFailure,
    CallRequest,
    EndpointConfig,
    FailureKind,
    ToolOutput,
)

ERROR_PREFIX = "Error: "
MISSING_KEY_DETAIL = (
    "CLOUD_AGENT_API_KEY environment variable is required.\n\n"
    "Get an API key from your Cloud Agent web workspace at /auth/api-key.\n"
    "API keys use the ca_* prefix."
)
MISSING_KEY_MESSAGE = f"{ERROR_PREFIX}{MISSING_KEY_DETAIL}"
REDACTED = "***"

RouteBuilder = Callable[[], Union[CallRequest, CallFailure]]
Projection = Callable[[Any], str]


def encode_segment(value: str) -> str:
    """Percent-encode a caller-supplied path segment, including '/'."""
    return quote(str(value), safe="")


def invalid_arguments(message: str) -> CallFailure:
    return CallFailure(FailureKind.INVALID_ARGUMENTS, message)


def missing_credential() -> CallFailure:
    return CallFailure(FailureKind.MISSING_CREDENTIAL, MISSING_KEY_DETAIL)


def credential_variants(credential: Optional[str]) -> List[str]:
    """Forms of the key that may show up in error text, longest first."""
    if not credential or not credential.strip():
        return []
    forms = {credential, credential.strip(), repr(credential)[1:-1]}
    return sorted((f for f in forms if f.strip()), key=len, reverse=True)


class CallGate:
    def __init__(
        self,
        endpoint: EndpointConfig,
        transport: Optional[Transport] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.endpoint = endpoint
        if transport is None:
            from ..infrastructure.http.transport import HttpTransport
            transport = HttpTransport(endpoint)
        self.transport = transport
        self._logger = logger or logging.getLogger(__name__)

    def invoke(self, build: RouteBuilder, project: Projection) -> ToolOutput:
        if not self.endpoint.has_credential:
            self._logger.debug("No API key configured; call refused before routing")
            return self.format_failure(missing_credential())

        route = build()
        if isinstance(route, CallFailure):
            return self.format_failure(route)

        result = self.transport.send(route)
        if isinstance(result, CallFailure):
            return self.format_failure(result)
        return ToolOutput(project(result.payload))

    def format_failure(self, failure: CallFailure) -> ToolOutput:
        message = failure.message
        for form in credential_variants(self.endpoint.credential):
            message = message.replace(form, REDACTED)
        return ToolOutput(f"{ERROR_PREFIX}{message}", is_error=True)


_gate: Optional[CallGate] = None
_gate_lock = threading.Lock()


def get_call_gate() -> CallGate:
    """Process-wide gate bound to the settings endpoint."""
    global _gate
    with _gate_lock:
        if _gate is None:
            from ..infrastructure.config.settings import get_settings
            _gate = CallGate(get_settings().endpoint)
        return _gate


def reset_call_gate(gate: Optional[CallGate] = None) -> Optional[CallGate]:
    """Replace the process-wide gate; None rebuilds it lazily from settings (for testing)."""
    global _gate
    with _gate_lock:
        _gate = gate
    return gate
