"""Shared test fixtures for the coding agent."""

from __future__ import annotations

import asyncio

import pytest

from coding_agent.config import Settings
from coding_agent.core.registry import default_registry
from coding_agent.errors import ModelApiError


class ScriptedClient:
    """A fake model client that replays canned replies and records calls.

    Each scripted item is either a reply string or an exception to raise.
    """

    def __init__(self, replies=()):
        self._replies = list(replies)
        self.calls: list[list] = []

    async def send(self, conversation) -> str:
        self.calls.append(list(conversation))
        if not self._replies:
            raise ModelApiError("Gemini API Error: no scripted reply left")
        item = self._replies.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item

    async def aclose(self) -> None:
        pass


def drain(q: asyncio.Queue) -> list[dict]:
    """Pull every queued event without waiting."""
    events = []
    while not q.empty():
        events.append(q.get_nowait())
    return events


@pytest.fixture
def settings() -> Settings:
    return Settings(api_key="test-key", base_url="http://test-api/v1")


@pytest.fixture
def registry():
    return default_registry()


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run the test inside an empty temporary directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path
