"""
Per-turn state machine, built as a LangGraph StateGraph.

    START -> model -> tool  -> END    (model records the user turn first)
                   -> reply -> END
                   -> END          (model call failed)
"""
import enum
import logging
from typing import Awaitable, Callable, Optional, TypedDict

from langgraph.graph import END, START, StateGraph

from coding_agent.core.domain import DomainEvent, ToolInvocation
from coding_agent.core.parsing import looks_like_provider_error, parse_invocation, strip_code_fence
from coding_agent.core.registry import ToolRegistry
from coding_agent.errors import ModelApiError, ParseError, ToolExecutionError
from coding_agent.models import Conversation

logger = logging.getLogger(__name__)


class LoopState(enum.Enum):
    AWAITING_INPUT = 'awaiting_input'
    MODEL_CALL_IN_FLIGHT = 'model_call_in_flight'
    TOOL_MATCH_FOUND = 'tool_match_found'
    TOOL_EXECUTING = 'tool_executing'
    TOOL_RESULT_RECORDED = 'tool_result_recorded'
    NO_TOOL_MATCH = 'no_tool_match'
    PLAIN_REPLY_RECORDED = 'plain_reply_recorded'
    CLOSED = 'closed'


class DispatchState(TypedDict, total=False):
    user_input: str
    reply: str
    text: str
    invocation: Optional[ToolInvocation]
    outcome: str


Emit = Callable[[DomainEvent], Awaitable[None]]
SetState = Callable[[LoopState], None]


def model_node_factory(client, conversation: Conversation, emit: Emit, set_state: SetState):
    async def call_model(state: DispatchState):
        conversation.add_user(state['user_input'])
        set_state(LoopState.MODEL_CALL_IN_FLIGHT)
        try:
            reply = await client.send(conversation)
        except ModelApiError as e:
            logger.error("model call failed: %s (status=%s)", e, e.status_code)
            ev: DomainEvent = {'type': 'error', 'message': str(e)}
            if e.status_code is not None:
                ev['status'] = e.status_code
            if e.body:
                ev['details'] = e.body
            await emit(ev)
            return {'outcome': 'model_error'}

        await emit({'type': 'reply', 'text': reply})

        text = strip_code_fence(reply)
        try:
            invocation = parse_invocation(text)
        except ParseError as e:
            logger.debug("plain reply: %s", e)
            return {'reply': reply, 'text': text, 'invocation': None, 'outcome': 'plain_reply'}
        return {'reply': reply, 'text': text, 'invocation': invocation, 'outcome': 'tool_call'}
    return call_model


def tool_node_factory(registry: ToolRegistry, conversation: Conversation, emit: Emit, set_state: SetState):
    async def run_tool(state: DispatchState):
        invocation = state['invocation']
        name, args = invocation.tool, invocation.args

        if not isinstance(name, str) or name not in registry:
            logger.warning("unknown tool requested: %r", name)
            await emit({'type': 'unknown_tool', 'tool': str(name)})
            set_state(LoopState.NO_TOOL_MATCH)
            return {'outcome': 'unknown_tool'}

        set_state(LoopState.TOOL_MATCH_FOUND)
        logger.info("running tool %s with args %r", name, args)
        await emit({'type': 'tool_start', 'tool': name, 'args': args})

        set_state(LoopState.TOOL_EXECUTING)
        try:
            result = await registry.invoke(name, args)
        except ToolExecutionError as e:
            logger.warning("tool %s failed: %s", name, e.cause)
            conversation.add_tool(name, f"Error: {e.cause}")
            await emit({'type': 'tool_error', 'tool': name, 'message': str(e.cause)})
            outcome = 'tool_error'
        else:
            conversation.add_tool(name, result)
            await emit({'type': 'tool_end', 'tool': name, 'output': result})
            outcome = 'tool_result'

        set_state(LoopState.TOOL_RESULT_RECORDED)
        return {'outcome': outcome}
    return run_tool


def reply_node_factory(conversation: Conversation, set_state: SetState):
    async def record_reply(state: DispatchState):
        text = state['text']
        set_state(LoopState.NO_TOOL_MATCH)
        if looks_like_provider_error(text):
            logger.error("%s", text)
            return {'outcome': 'provider_error'}

        conversation.add_model(text)
        set_state(LoopState.PLAIN_REPLY_RECORDED)
        return {'outcome': 'model_reply'}
    return record_reply


def route_reply(state: DispatchState) -> str:
    return {'tool_call': 'tool', 'plain_reply': 'reply'}.get(state.get('outcome'), END)


def build_dispatch_graph(client, registry: ToolRegistry, conversation: Conversation, emit: Emit, set_state: SetState):
    """
    Compile the per-turn graph. ``client`` is anything with an async
    ``send(conversation) -> str``; every node works on the same
    ``conversation`` object.
    """
    graph_builder = StateGraph(DispatchState)
    graph_builder.add_node('model', model_node_factory(client, conversation, emit, set_state))
    graph_builder.add_node('tool', tool_node_factory(registry, conversation, emit, set_state))
    graph_builder.add_node('reply', reply_node_factory(conversation, set_state))

    graph_builder.add_edge(START, 'model')
    graph_builder.add_conditional_edges('model', route_reply, {'tool': 'tool', 'reply': 'reply', END: END})
    graph_builder.add_edge('tool', END)
    graph_builder.add_edge('reply', END)

    return graph_builder.compile(name="dispatch")
