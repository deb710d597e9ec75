"""
Append-only conversation log shared by the orchestrator and the model client.
"""
from typing import Iterator, Optional

from coding_agent.models.turn import Role, Turn


class Conversation:
    """
    Ordered log of turns. Turns are only ever appended; the order here is
    exactly the order sent to the model on every call.
    """

    def __init__(self, system_prompt: Optional[str] = None):
        self._turns: list[Turn] = []
        if system_prompt is not None:
            self.add_system(system_prompt)

    def append(self, turn: Turn) -> Turn:
        if not isinstance(turn, Turn):
            raise TypeError(f'expected Turn, got {type(turn).__name__}')
        self._turns.append(turn)
        return turn

    def add_system(self, content: str) -> Turn:
        return self.append(Turn(Role.SYSTEM, content))

    def add_user(self, content: str) -> Turn:
        return self.append(Turn(Role.USER, content))

    def add_model(self, content: str) -> Turn:
        return self.append(Turn(Role.MODEL, content))

    def add_tool(self, tool_name: str, content: str) -> Turn:
        return self.append(Turn(Role.TOOL, content, tool_name=tool_name))

    @property
    def turns(self) -> tuple[Turn, ...]:
        return tuple(self._turns)

    def __iter__(self) -> Iterator[Turn]:
        return iter(tuple(self._turns))

    def __len__(self) -> int:
        return len(self._turns)

    def __getitem__(self, index: int) -> Turn:
        return self._turns[index]
