"""Run a playbook (reusable workflow template) against a repository"""
from __future__ import annotations

from typing import Dict, Optional

from ..application.call_gate import encode_segment, get_call_gate
from ..domain.models.call import CallRequest, ToolOutput
from ..domain.services.projection import pretty_json

TOOL_SCHEMA = {
    "type": "function",
    "function": {
        "name": "run_playbook",
        "description": "Run a playbook (reusable workflow template) against a repository. Use list_playbooks to see available options. Built-in playbooks include: bug-triage, security-remediation, dependency-upgrade, docs-sync, test-coverage, code-migration, pr-review-cycle.",
        "parameters": {
            "type": "object",
            "properties": {
                "slug": {
                    "type": "string",
                    "description": "Playbook slug, e.g. 'bug-triage', 'security-remediation', 'test-coverage'"
                },
                "repo": {
                    "type": "string",
                    "description": "GitHub repo in owner/repo format"
                },
                "inputs": {
                    "type": "object",
                    "additionalProperties": {"type": "string"},
                    "description": "Additional inputs for the playbook template variables"
                }
            },
            "required": ["slug", "repo"]
        }
    }
}


def playbook_run_path(slug: str) -> str:
    return f"/api/playbooks/{encode_segment(slug)}/run"


def run_playbook(slug: str, repo: str, inputs: Optional[Dict[str, str]] = None) -> ToolOutput:
    def build():
        body = {"repo": repo}
        if inputs is not None:
            body["inputs"] = inputs
        return CallRequest.post(playbook_run_path(slug), body)

    return get_call_gate().invoke(build, pretty_json)


TOOL_IMPLEMENTATION = run_playbook
