"""Chat-completions client for OpenRouter that returns plain-text replies."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

from eros_engine.errors import ConfigError, DecodeError, HttpError, LlmError, StatusError

BASE_URL = "https://openrouter.ai/api/v1/chat/completions"

_FENCE = "```"
_CORNER_QUOTES = "「」"

_log = logging.getLogger(__name__)


@dataclass
class ChatMessage:
    """One message in a chat transcript."""

    role: str
    content: str


@dataclass
class ChatRequest:
    """A chat completion to run, with an optional model to retry on failure."""

    model: str
    messages: list[ChatMessage] = field(default_factory=list)
    fallback_model: str | None = None
    temperature: float = 0.5
    max_tokens: int = 200


@dataclass
class ChatResponse:
    """The cleaned text reply of a chat completion."""

    reply: str


class OpenRouterClient:
    """Runs chat completions against the OpenRouter API."""

    def __init__(self, api_key: str, *, http: httpx.AsyncClient | None = None) -> None:
        self.api_key = api_key
        self._http = http

    async def execute(self, req: ChatRequest) -> ChatResponse:
        """Run the request; if it fails and a fallback model is set, retry once with it."""
        try:
            reply = await self._call_once(req.model, req)
        except LlmError as primary_err:
            if req.fallback_model is None:
                raise
            _log.warning(
                "openrouter: primary %s failed (%s), retrying with fallback %s",
                req.model,
                primary_err,
                req.fallback_model,
            )
            reply = await self._call_once(req.fallback_model, req)
        return ChatResponse(reply=reply)

    async def _post(self, body: dict[str, Any], headers: dict[str, str]) -> httpx.Response:
        if self._http is not None:
            return await self._http.post(BASE_URL, json=body, headers=headers)
        async with httpx.AsyncClient() as http:
            return await http.post(BASE_URL, json=body, headers=headers)

    async def _call_once(self, model: str, req: ChatRequest) -> str:
        if not self.api_key:
            raise ConfigError("openrouter: api key not set")

        body = {
            "model": model,
            "messages": [{"role": m.role, "content": m.content} for m in req.messages],
            "temperature": req.temperature,
            "max_tokens": req.max_tokens,
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}
        try:
            resp = await self._post(body, headers)
        except httpx.HTTPError as exc:
            raise HttpError(exc) from exc

        if not resp.is_success:
            raise StatusError(resp.status_code, resp.text)

        try:
            choices = resp.json()["choices"]
            if not isinstance(choices, list):
                raise TypeError("choices is not an array")
            content = choices[0]["message"].get("content") if choices else None
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            raise DecodeError(exc) from exc

        if content is not None and not isinstance(content, str):
            raise DecodeError("message content is not a string")
        return clean_response((content or "").strip())


def clean_response(raw: str) -> str:
    """Strip a surrounding markdown fence, whitespace and quotes from model output."""
    s = raw.strip()

    if s.startswith(_FENCE):
        stripped = s[len(_FENCE):]
        # Drop the language tag line, if any.
        _, newline, rest = stripped.partition("\n")
        after_lang = rest if newline else stripped
        inner, fence, _ = after_lang.rpartition(_FENCE)
        s = inner.strip() if fence else after_lang.strip()

    s = s.strip().strip('"')
    return s.strip(_CORNER_QUOTES)