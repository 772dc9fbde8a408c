"""List recent agent sessions"""
from __future__ import annotations

from typing import Optional

from ..application.call_gate import get_call_gate
from ..domain.models.call import CallRequest, ToolOutput
from ..domain.services.projection import prefer_field

DEFAULT_LIMIT = 20

TOOL_SCHEMA = {
    "type": "function",
    "function": {
        "name": "list_sessions",
        "description": "List recent agent sessions with status, cost, duration, and PR URLs. Use to check on past or running tasks.",
        "parameters": {
            "type": "object",
            "properties": {
                "limit": {
                    "type": "integer",
                    "minimum": 1,
                    "maximum": 100,
                    "description": "Max sessions to return (default: 20)"
                },
                "status": {
                    "type": "string",
                    "enum": ["running", "completed", "error"],
                    "description": "Filter by session status"
                }
            }
        }
    }
}


def sessions_path(limit: Optional[int] = None, status: Optional[str] = None) -> str:
    path = f"/api/sessions?limit={limit or DEFAULT_LIMIT}"
    if status:
        path += f"&status={status}"
    return path


def list_sessions(limit: Optional[int] = None, status: Optional[str] = None) -> ToolOutput:
    return get_call_gate().invoke(
        lambda: CallRequest.get(sessions_path(limit, status)),
        lambda payload: prefer_field(payload, "sessions"),
    )


TOOL_IMPLEMENTATION = list_sessions
