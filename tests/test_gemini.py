"""Tests for the Gemini model client.

Tests cover:
- request formatting: endpoint, key query parameter, one entry per turn
- reply extraction and trimming
- error mapping: non-2xx, malformed bodies, transport failures
"""

from __future__ import annotations

import json

import httpx
import pytest

from coding_agent.core.gemini import GeminiClient, build_request_body, extract_reply
from coding_agent.errors import ModelApiError
from coding_agent.models import Conversation


# ---------------------------------------------------------------------------
# Fixtures and helpers
# ---------------------------------------------------------------------------

def _success_response(text: str = "Hello!") -> dict:
    """Build a realistic generateContent response dict."""
    return {
        "candidates": [
            {
                "content": {"role": "model", "parts": [{"text": text}]},
                "finishReason": "STOP",
                "index": 0,
            }
        ],
        "usageMetadata": {"promptTokenCount": 10, "candidatesTokenCount": 5},
    }


def _make_client(settings, handler) -> GeminiClient:
    """Create a GeminiClient backed by an httpx.MockTransport."""
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return GeminiClient(settings, http_client=http_client)


@pytest.fixture
def conversation() -> Conversation:
    conv = Conversation("system prompt")
    conv.add_user("list files")
    conv.add_tool("list_files", "a.txt")
    conv.add_model("There is one file.")
    return conv


# ---------------------------------------------------------------------------
# Request body
# ---------------------------------------------------------------------------

class TestRequestBody:
    def test_one_entry_per_turn_in_order(self, conversation):
        body = build_request_body(conversation)
        assert body == {
            "contents": [
                {"role": "user", "parts": [{"text": "system prompt"}]},
                {"role": "user", "parts": [{"text": "list files"}]},
                {"role": "user", "parts": [{"text": "a.txt"}]},
                {"role": "model", "parts": [{"text": "There is one file."}]},
            ]
        }


class TestExtractReply:
    def test_trims(self):
        assert extract_reply(_success_response("  hi \n")) == "hi"

    @pytest.mark.parametrize(
        "data",
        [
            {},
            {"candidates": []},
            {"candidates": [{"content": {"parts": []}}]},
            {"candidates": [{"content": {"parts": [{"text": 3}]}}]},
            ["not", "a", "dict"],
        ],
    )
    def test_bad_shapes(self, data):
        with pytest.raises(ValueError):
            extract_reply(data)


# ---------------------------------------------------------------------------
# send()
# ---------------------------------------------------------------------------

class TestSend:
    async def test_posts_full_history(self, settings, conversation):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["url"] = request.url
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=_success_response(" Hi there "))

        async with _make_client(settings, handler) as client:
            reply = await client.send(conversation)

        assert reply == "Hi there"
        assert seen["method"] == "POST"
        assert seen["url"].path == "/v1/models/gemini-2.0-flash:generateContent"
        assert seen["url"].params["key"] == "test-key"
        assert len(seen["body"]["contents"]) == len(conversation)

    async def test_history_grows_between_calls(self, settings):
        sizes = []

        def handler(request: httpx.Request) -> httpx.Response:
            sizes.append(len(json.loads(request.content)["contents"]))
            return httpx.Response(200, json=_success_response())

        conv = Conversation("sys")
        async with _make_client(settings, handler) as client:
            conv.add_user("one")
            conv.add_model(await client.send(conv))
            conv.add_user("two")
            await client.send(conv)

        assert sizes == [2, 4]

    async def test_http_error_carries_status_and_body(self, settings, conversation):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(400, text='{"error": {"message": "bad role"}}')

        async with _make_client(settings, handler) as client:
            with pytest.raises(ModelApiError) as exc_info:
                await client.send(conversation)

        assert exc_info.value.status_code == 400
        assert "bad role" in exc_info.value.body

    async def test_unexpected_shape(self, settings, conversation):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"promptFeedback": {"blockReason": "SAFETY"}})

        async with _make_client(settings, handler) as client:
            with pytest.raises(ModelApiError) as exc_info:
                await client.send(conversation)

        assert exc_info.value.status_code == 200
        assert "SAFETY" in exc_info.value.body

    async def test_non_json_body(self, settings, conversation):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>oops</html>")

        async with _make_client(settings, handler) as client:
            with pytest.raises(ModelApiError):
                await client.send(conversation)

    async def test_transport_error(self, settings, conversation):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with _make_client(settings, handler) as client:
            with pytest.raises(ModelApiError) as exc_info:
                await client.send(conversation)

        assert exc_info.value.status_code is None
        assert "connection refused" in str(exc_info.value)
