"""
Data models for the coding agent.
"""
from .turn import Role, Turn
from .conversation import Conversation

__all__ = ["Role", "Turn", "Conversation"]
