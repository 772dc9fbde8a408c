"""Ask a question about a repository's codebase"""
from __future__ import annotations

from ..application.call_gate import get_call_gate
from ..domain.models.call import CallRequest, ToolOutput
from ..domain.services.projection import prefer_text_field

TOOL_SCHEMA = {
    "type": "function",
    "function": {
        "name": "ask_codebase",
        "description": "Ask a question about any GitHub repository's codebase. Auto-indexes the repo on first use. Returns an answer with file references.",
        "parameters": {
            "type": "object",
            "properties": {
                "question": {
                    "type": "string",
                    "description": "Question about the codebase, e.g. 'How does authentication work?'"
                },
                "repo": {
                    "type": "string",
                    "description": "GitHub repo in owner/repo format, e.g. 'facebook/react'"
                }
            },
            "required": ["question", "repo"]
        }
    }
}


def ask_codebase(question: str, repo: str) -> ToolOutput:
    return get_call_gate().invoke(
        lambda: CallRequest.post("/ask", {"question": question, "repo": repo}),
        lambda payload: prefer_text_field(payload, "answer"),
    )


TOOL_IMPLEMENTATION = ask_codebase
