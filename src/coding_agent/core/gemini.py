"""Async httpx client for the Gemini ``generateContent`` REST endpoint.

The whole conversation is serialized and posted on every call; there is no
retry and no streaming.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from coding_agent.config import Settings
from coding_agent.errors import ModelApiError
from coding_agent.models import Conversation, Role

logger = logging.getLogger(__name__)

# generateContent only accepts "user" and "model" in contents
_WIRE_ROLES = {
    Role.SYSTEM: "user",
    Role.USER: "user",
    Role.MODEL: "model",
    Role.TOOL: "user",
}


def build_request_body(conversation: Conversation) -> dict[str, Any]:
    """One ``contents`` entry per turn, in conversation order."""
    return {
        "contents": [
            {"role": _WIRE_ROLES[turn.role], "parts": [{"text": turn.content}]}
            for turn in conversation
        ]
    }


def extract_reply(data: Any) -> str:
    """Return the trimmed text of the first candidate.

    Raises:
        ValueError: the response does not have the expected shape
    """
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError) as e:
        raise ValueError(f"missing candidates[0].content.parts[0].text ({e!r})") from e
    if not isinstance(text, str):
        raise ValueError("candidate text is not a string")
    return text.strip()


class GeminiClient:
    """Model client for Gemini.

    Usage::

        async with GeminiClient(settings) as client:
            reply = await client.send(conversation)
    """

    def __init__(
        self,
        settings: Settings,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings
        self._url = f"{settings.base_url}/models/{settings.model}:generateContent"
        self._client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(settings.timeout),
            headers={"Content-Type": "application/json"},
        )

    @property
    def model(self) -> str:
        return self._settings.model

    async def send(self, conversation: Conversation) -> str:
        """Post the full conversation and return the model's reply text.

        Raises:
            ModelApiError: on transport failure, non-2xx status, or a response
                body without a candidate text
        """
        body = build_request_body(conversation)
        logger.debug("sending %d turns to %s", len(body["contents"]), self._settings.model)

        try:
            response = await self._client.post(
                self._url,
                params={"key": self._settings.api_key},
                json=body,
            )
        except httpx.HTTPError as e:
            raise ModelApiError(f"Gemini API Error: {e}") from e

        if not response.is_success:
            raise ModelApiError(
                f"Gemini API Error: HTTP {response.status_code}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            return extract_reply(response.json())
        except ValueError as e:
            # json decode errors are ValueErrors too
            raise ModelApiError(
                f"Gemini API Error: unexpected response format: {e}",
                status_code=response.status_code,
                body=response.text,
            ) from e

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "GeminiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
