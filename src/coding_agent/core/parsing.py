"""
Turn a free-text model reply into a ToolInvocation, if it is one.
"""
import json
from typing import Any

from coding_agent.core.domain import ToolInvocation
from coding_agent.errors import ParseError

# logged only, never stored. Provider failures are raised as ModelApiError,
# so a reply starting with this is not expected in practice.
PROVIDER_ERROR_PREFIX = "Gemini API Error:"


def strip_code_fence(reply: str) -> str:
    """Drop one leading ```json (or bare ```) fence and one trailing ```."""
    text = reply.strip()
    if text.startswith("```json"):
        text = text[len("```json"):]
    elif text.startswith("```"):
        text = text[len("```"):]
    if text.endswith("```"):
        text = text[:-len("```")]
    return text.strip()


def _present(value: Any) -> bool:
    # empty {} and [] count as present; null, false, 0 and "" do not
    if value is None or value is False or value == "":
        return False
    return not (isinstance(value, (int, float)) and value == 0)


def parse_invocation(text: str) -> ToolInvocation:
    """
    Parse ``text`` as ``{"tool": <name>, "args": {...}}``.

    Only the presence of ``tool`` and ``args`` is checked here. An
    unregistered or non-string name and malformed arguments are left for
    the dispatcher to report.

    Raises:
        ParseError: not JSON, not a JSON object, or ``tool``/``args`` missing
    """
    try:
        payload: Any = json.loads(text)
    except ValueError as e:
        raise ParseError(f"reply is not JSON: {e}") from e

    if not isinstance(payload, dict):
        raise ParseError("reply is not a JSON object")
    tool = payload.get("tool")
    args = payload.get("args")
    if not _present(tool):
        raise ParseError("reply has no 'tool' name")
    if not _present(args):
        raise ParseError("reply has no 'args'")
    return ToolInvocation(tool=tool, args=args)


def looks_like_provider_error(text: str) -> bool:
    return text.startswith(PROVIDER_ERROR_PREFIX)
