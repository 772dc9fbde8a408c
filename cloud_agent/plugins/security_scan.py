"""Security and dependency scan across repositories"""
from __future__ import annotations

from typing import List, Optional

from ..application.call_gate import get_call_gate
from ..domain.models.call import CallRequest, ToolOutput
from ..domain.services.projection import pretty_json

SCAN_TYPES = ["all", "dependencies", "secrets", "code"]

TOOL_SCHEMA = {
    "type": "function",
    "function": {
        "name": "security_scan",
        "description": "Run a security and dependency scan on one or more GitHub repositories. Checks for vulnerabilities, secret exposure, and security anti-patterns.",
        "parameters": {
            "type": "object",
            "properties": {
                "repos": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Array of repos in owner/repo format, e.g. ['owner/repo1', 'owner/repo2']"
                },
                "type": {
                    "type": "string",
                    "enum": SCAN_TYPES,
                    "description": "Scan type (default: all)"
                }
            },
            "required": ["repos"]
        }
    }
}


def security_scan(repos: List[str], type: Optional[str] = None) -> ToolOutput:
    return get_call_gate().invoke(
        lambda: CallRequest.post("/scan", {"repos": repos, "type": type or "all"}),
        pretty_json,
    )


TOOL_IMPLEMENTATION = security_scan
