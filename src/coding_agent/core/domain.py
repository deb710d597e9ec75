"""
Events the orchestrator sends to the UI, and the parsed tool request.
"""

from dataclasses import dataclass, field
from typing import Any, Literal, TypedDict, Union


@dataclass(frozen=True)
class ToolInvocation:
    tool: Any
    args: Any = field(default_factory=dict)


class ReplyEvent(TypedDict, total=False):
    type: Literal['reply']
    text: str


class ToolStartEvent(TypedDict, total=False):
    type: Literal['tool_start']
    tool: Any
    args: dict[str, Any]


class ToolEndEvent(TypedDict, total=False):
    type: Literal['tool_end']
    tool: Any
    output: str


class ToolErrorEvent(TypedDict, total=False):
    type: Literal['tool_error']
    tool: Any
    message: str


class UnknownToolEvent(TypedDict, total=False):
    type: Literal['unknown_tool']
    tool: Any


class ErrorEvent(TypedDict, total=False):
    type: Literal['error']
    message: str
    status: int
    details: str


class DoneEvent(TypedDict, total=False):
    type: Literal['done']


class ClosedEvent(TypedDict, total=False):
    type: Literal['closed']


DomainEvent = Union[
    ReplyEvent, ToolStartEvent, ToolEndEvent, ToolErrorEvent,
    UnknownToolEvent, ErrorEvent, DoneEvent, ClosedEvent,
]
