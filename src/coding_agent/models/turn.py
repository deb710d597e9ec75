"""
Data models for the coding agent conversation.
"""
import enum
from dataclasses import dataclass
from typing import Optional


class Role(str, enum.Enum):
    SYSTEM = 'system'
    USER = 'user'
    MODEL = 'model'
    TOOL = 'tool'


@dataclass(frozen=True)
class Turn:
    """
    One recorded unit of conversation.

    ``tool_name`` is set on tool turns and only on tool turns.
    """
    role: Role
    content: str
    tool_name: Optional[str] = None

    def __post_init__(self):
        if self.role is Role.TOOL and not self.tool_name:
            raise ValueError('tool turns need a tool_name')
        if self.role is not Role.TOOL and self.tool_name is not None:
            raise ValueError(f'{self.role.value} turns cannot carry a tool_name')
