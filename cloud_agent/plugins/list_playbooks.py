"""List available playbooks"""
from __future__ import annotations

from ..application.call_gate import get_call_gate
from ..domain.models.call import CallRequest, ToolOutput
from ..domain.services.projection import pretty_json

TOOL_SCHEMA = {
    "type": "function",
    "function": {
        "name": "list_playbooks",
        "description": "List available playbooks — reusable workflow templates for common engineering tasks like bug triage, security remediation, test coverage, docs sync, and more.",
        "parameters": {
            "type": "object",
            "properties": {}
        }
    }
}


def list_playbooks() -> ToolOutput:
    return get_call_gate().invoke(lambda: CallRequest.get("/api/playbooks"), pretty_json)


TOOL_IMPLEMENTATION = list_playbooks
