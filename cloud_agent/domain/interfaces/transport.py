"""
Transport protocol interface.
Defines the contract for anything that can carry a CallRequest to the remote service.
"""

from __future__ import annotations
from typing import Protocol
from ..models.call import CallRequest, CallResult


class Transport(Protocol):
    """Protocol for transport implementations."""

    def send(self, call: CallRequest) -> CallResult:
        """Perform one exchange and classify the outcome. Must not raise for I/O failures."""
        ...
