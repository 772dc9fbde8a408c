"""Application layer - orchestrates domain and infrastructure."""

from .call_gate import CallGate, get_call_gate, reset_call_gate

__all__ = ["CallGate", "get_call_gate", "reset_call_gate"]
