"""
Error hierarchy for the coding agent.

Tool errors are caught by the orchestrator and written back into the
conversation as text. Model API errors abort the current turn only.
``ConfigError`` is the single fatal condition, raised before the UI starts.
"""

from __future__ import annotations

from typing import Optional


class AgentError(Exception):
    """Base for every error raised by the agent."""


class ConfigError(AgentError):
    """Missing or invalid configuration (e.g. no API key)."""


class ToolError(AgentError):
    """Base for errors raised while running a tool."""


class ArgumentError(ToolError):
    """Missing or invalid tool arguments. Raised before any side effect."""


class FilesystemError(ToolError):
    """A file or directory could not be read, written or created."""


class CommandExecutionError(ToolError):
    """
    A shell command exited non-zero or could not be spawned.

    Attributes:
        stderr: captured standard error, or the spawn failure message
        returncode: exit status, ``None`` when the process never started
    """

    def __init__(self, stderr: str, returncode: Optional[int] = None) -> None:
        self.stderr = stderr
        self.returncode = returncode
        super().__init__(stderr)


class ToolExecutionError(ToolError):
    """A registered tool failed. ``cause`` holds the underlying error."""

    def __init__(self, tool_name: str, cause: BaseException) -> None:
        self.tool_name = tool_name
        self.cause = cause
        super().__init__(str(cause))


class UnknownToolError(ToolError):
    def __init__(self, tool_name: str) -> None:
        self.tool_name = tool_name
        super().__init__(f"Unknown tool: {tool_name}")


class ModelApiError(AgentError):
    """
    Transport failure or non-success response from the model API.

    Attributes:
        status_code: HTTP status, ``None`` for transport failures
        body: raw response body when one was received
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class ParseError(AgentError):
    """A model reply is not a tool invocation. Selects the plain-reply path."""
