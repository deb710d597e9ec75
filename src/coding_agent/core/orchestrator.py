import asyncio
import logging
from typing import Optional

from coding_agent.core.dispatch import LoopState, build_dispatch_graph
from coding_agent.core.domain import DomainEvent
from coding_agent.core.prompt import build_system_prompt
from coding_agent.core.registry import ToolRegistry, default_registry
from coding_agent.models import Conversation

logger = logging.getLogger(__name__)

EXIT_COMMAND = "exit"


def is_exit_command(text: str) -> bool:
    return text.strip().lower() == EXIT_COMMAND


class Orchestrator:
    """
    Dispatch loop. Takes one user line at a time, runs the per-turn graph,
    and reports progress on ``events_q``.
    """

    def __init__(
        self,
        client,
        events_q: asyncio.Queue,
        registry: Optional[ToolRegistry] = None,
        conversation: Optional[Conversation] = None,
    ):
        self.client = client
        self.events_q = events_q
        self.registry = registry or default_registry()
        if conversation is None:
            conversation = Conversation(build_system_prompt(self.registry))
        self.conversation = conversation
        self.state = LoopState.AWAITING_INPUT
        self.graph = build_dispatch_graph(
            client, self.registry, self.conversation, self._emit, self._set_state,
        )

    @property
    def closed(self) -> bool:
        return self.state is LoopState.CLOSED

    async def _emit(self, ev: DomainEvent):
        await self.events_q.put(ev)

    def _set_state(self, state: LoopState):
        logger.debug("loop state %s -> %s", self.state.value, state.value)
        self.state = state

    async def run(self, user_input: str) -> bool:
        """
        Process one line of user input end to end.

        Returns False once the loop is closed (``exit`` was entered), True
        otherwise.
        """
        if self.closed:
            return False

        if is_exit_command(user_input):
            self._set_state(LoopState.CLOSED)
            await self._emit({'type': 'closed'})
            return False

        try:
            result = await self.graph.ainvoke({'user_input': user_input})
            logger.debug("turn finished: %s", result.get('outcome'))
        finally:
            self._set_state(LoopState.AWAITING_INPUT)
            await self._emit({'type': 'done'})
        return True
