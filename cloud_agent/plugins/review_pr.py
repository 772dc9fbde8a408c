"""Review a GitHub pull request"""
from __future__ import annotations

from typing import Optional

from ..application.call_gate import get_call_gate
from ..domain.models.call import CallRequest, ToolOutput
from ..domain.services.projection import prefer_text_field

TOOL_SCHEMA = {
    "type": "function",
    "function": {
        "name": "review_pr",
        "description": "Review a GitHub pull request. Returns structured feedback with issues, verdict, and suggestions. Optionally posts review comments directly to GitHub.",
        "parameters": {
            "type": "object",
            "properties": {
                "pr_url": {
                    "type": "string",
                    "description": "Full GitHub PR URL, e.g. https://github.com/owner/repo/pull/123"
                },
                "post_comments": {
                    "type": "boolean",
                    "description": "Post review comments directly to GitHub (default: false)"
                }
            },
            "required": ["pr_url"]
        }
    }
}


def review_pr(pr_url: str, post_comments: Optional[bool] = None) -> ToolOutput:
    return get_call_gate().invoke(
        lambda: CallRequest.post("/review", {
            "pr_url": pr_url,
            "post_review": post_comments is True,
        }),
        lambda payload: prefer_text_field(payload, "review"),
    )


TOOL_IMPLEMENTATION = review_pr
