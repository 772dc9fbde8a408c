"""Run a coding task on the Cloud Agent service"""
from __future__ import annotations

from ..application.call_gate import get_call_gate
from ..domain.models.call import CallRequest, ToolOutput
from ..domain.services.projection import project_task_result

TOOL_SCHEMA = {
    "type": "function",
    "function": {
        "name": "run_task",
        "description": "Run a coding task: write code, fix bugs, add features, refactor. The AI agent clones the repo, makes changes, and opens a PR. Returns the result and PR URL when complete.",
        "parameters": {
            "type": "object",
            "properties": {
                "prompt": {
                    "type": "string",
                    "description": "Task description, e.g. 'Fix the login bug in owner/repo' or 'Add dark mode to owner/repo'"
                }
            },
            "required": ["prompt"]
        }
    }
}


def run_task(prompt: str) -> ToolOutput:
    return get_call_gate().invoke(
        lambda: CallRequest.post("/query", {"prompt": prompt}),
        project_task_result,
    )


TOOL_IMPLEMENTATION = run_task
