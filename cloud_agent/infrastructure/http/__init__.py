"""Outbound HTTP to the Cloud Agent service."""

from .buffer import BoundedBuffer, MAX_RESPONSE_BYTES
from .transport import HttpTransport, classify_response, encode_body

__all__ = ["BoundedBuffer", "MAX_RESPONSE_BYTES", "HttpTransport", "classify_response", "encode_body"]
