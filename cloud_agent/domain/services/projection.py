"""
Result projection - reshape a remote payload into the text a tool promises.

Payloads are whatever the remote service returned: usually a dict, sometimes a
list, and occasionally raw text when the body was not JSON.
"""

from __future__ import annotations
import json
from typing import Any, Dict, Iterable, Optional


def pretty_json(value: Any) -> str:
    """Serialize with a 2-space indent, keeping non-ASCII characters."""
    return json.dumps(value, indent=2, ensure_ascii=False)


def _field(payload: Any, name: str) -> Any:
    if isinstance(payload, dict):
        return payload.get(name)
    return None


def prefer_text_field(payload: Any, name: str) -> str:
    """Return payload[name] when it is a non-empty string, else the whole payload as JSON."""
    value = _field(payload, name)
    if isinstance(value, str) and value:
        return value
    return pretty_json(payload)


def prefer_field(payload: Any, name: str) -> str:
    """Serialize payload[name] when truthy, else the whole payload."""
    value = _field(payload, name)
    if value:
        return pretty_json(value)
    return pretty_json(payload)


def select_fields(payload: Any, keys: Iterable[str], nullable: Optional[Iterable[str]] = None) -> str:
    """Keep only `keys` that are present; `nullable` keys are always emitted, null when falsy."""
    always = set(nullable or ())
    out: Dict[str, Any] = {}
    for key in keys:
        value = _field(payload, key)
        if key in always:
            out[key] = value or None
        elif isinstance(payload, dict) and key in payload:
            out[key] = value
    return pretty_json(out)


TASK_RESULT_FIELDS = ("response", "cost_usd", "duration_ms", "pr_url")


def project_task_result(payload: Any) -> str:
    """Summary shared by tools that run an agent session and may open a PR."""
    return select_fields(payload, TASK_RESULT_FIELDS, nullable=("pr_url",))
