"""
Name -> tool lookup table used by the prompt builder and the dispatch graph.
"""
import logging
from typing import Any, Iterable, Mapping, Optional

from langchain_core.tools import BaseTool
from pydantic import ValidationError

from coding_agent.errors import ArgumentError, ToolExecutionError, UnknownToolError

logger = logging.getLogger(__name__)


class ToolRegistry:
    """
    Fixed set of tools keyed by name, kept in registration order.
    """

    def __init__(self, tools: Iterable[BaseTool]):
        self._tools: dict[str, BaseTool] = {}
        for t in tools:
            if t.name in self._tools:
                raise ValueError(f"duplicate tool name: {t.name}")
            self._tools[t.name] = t

    def lookup(self, name: str) -> Optional[BaseTool]:
        return self._tools.get(name)

    def names(self) -> list[str]:
        return list(self._tools)

    def describe_all(self) -> list[tuple[str, str]]:
        return [(name, t.description) for name, t in self._tools.items()]

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    async def invoke(self, name: str, args: Any) -> str:
        """
        Run tool ``name`` with ``args`` and return its result as text.

        Raises:
            UnknownToolError: no tool is registered under ``name``
            ToolExecutionError: ``args`` is not a mapping or failed validation
                (cause is an ``ArgumentError``), or the handler raised (cause
                is that error)
        """
        t = self.lookup(name)
        if t is None:
            raise UnknownToolError(name)
        if not isinstance(args, Mapping):
            raise ToolExecutionError(
                name,
                ArgumentError(f"Arguments for {name} must be an object, got {type(args).__name__}"),
            )

        try:
            result = await t.ainvoke(dict(args))
        except ValidationError as e:
            raise ToolExecutionError(name, ArgumentError(_describe_validation(name, e))) from e
        except Exception as e:
            logger.debug("tool %s failed", name, exc_info=True)
            raise ToolExecutionError(name, e) from e

        return result if isinstance(result, str) else str(result)


def _describe_validation(name: str, err: ValidationError) -> str:
    problems = []
    for item in err.errors():
        field = ".".join(str(p) for p in item.get("loc", ())) or "args"
        problems.append(f"{field}: {item.get('msg', 'invalid')}")
    return f"Missing or invalid arguments for {name}: " + "; ".join(problems)


def default_registry() -> ToolRegistry:
    from coding_agent.core.tools import DEFAULT_TOOLS

    return ToolRegistry(DEFAULT_TOOLS)
