"""Usage statistics for the Cloud Agent workspace"""
from __future__ import annotations

from typing import Optional

from ..application.call_gate import get_call_gate
from ..domain.models.call import CallRequest, ToolOutput
from ..domain.services.projection import pretty_json

TOOL_SCHEMA = {
    "type": "function",
    "function": {
        "name": "get_usage",
        "description": "Get usage statistics: total sessions, cost, estimated time saved, breakdowns by source, repo, and user. Useful for tracking ROI.",
        "parameters": {
            "type": "object",
            "properties": {
                "days": {
                    "type": "integer",
                    "minimum": 1,
                    "maximum": 365,
                    "description": "Number of days to look back (default: all time)"
                }
            }
        }
    }
}


def usage_path(days: Optional[int] = None) -> str:
    return f"/api/usage?days={days}" if days else "/api/usage"


def get_usage(days: Optional[int] = None) -> ToolOutput:
    return get_call_gate().invoke(lambda: CallRequest.get(usage_path(days)), pretty_json)


TOOL_IMPLEMENTATION = get_usage
