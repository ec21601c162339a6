"""Embedding client for the Voyage API and pgvector text formatting."""

from __future__ import annotations

import logging
from collections.abc import Sequence

import httpx

from eros_engine.errors import (
    ConfigError,
    DecodeError,
    HttpError,
    ProviderError,
    StatusError,
)

BASE_URL = "https://api.voyageai.com/v1/embeddings"
DEFAULT_MODEL = "voyage-3-lite"
EMBEDDING_DIM = 512

_log = logging.getLogger(__name__)


class VoyageClient:
    """Turns text into embedding vectors."""

    def __init__(
        self,
        api_key: str,
        *,
        model: str = DEFAULT_MODEL,
        http: httpx.AsyncClient | None = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self._http = http

    async def embed_document(self, text: str) -> list[float]:
        """Embed text that will be stored and searched against."""
        return await self._embed(text, "document")

    async def embed_query(self, text: str) -> list[float]:
        """Embed text used as a retrieval query."""
        return await self._embed(text, "query")

    async def _post(self, body: dict, headers: dict) -> httpx.Response:
        if self._http is not None:
            return await self._http.post(BASE_URL, json=body, headers=headers)
        async with httpx.AsyncClient() as http:
            return await http.post(BASE_URL, json=body, headers=headers)

    async def _embed(self, text: str, input_type: str) -> list[float]:
        if not self.api_key:
            raise ConfigError("voyage: api key not set")
        if not text.strip():
            raise ConfigError("voyage: empty input text")

        body = {"input": [text], "model": self.model, "input_type": input_type}
        headers = {"Authorization": f"Bearer {self.api_key}"}
        try:
            resp = await self._post(body, headers)
        except httpx.HTTPError as exc:
            raise HttpError(exc) from exc

        if not resp.is_success:
            _log.warning("voyage: status=%s body=%s", resp.status_code, resp.text)
            raise StatusError(resp.status_code, resp.text)

        try:
            embeddings = [
                [float(v) for v in item["embedding"]] for item in resp.json()["data"]
            ]
        except (ValueError, KeyError, TypeError) as exc:
            raise DecodeError(exc) from exc

        if not embeddings:
            raise ProviderError("voyage: empty data array")
        return embeddings[0]


def format_vector(embedding: Sequence[float]) -> str:
    """Render a vector in pgvector's text form, e.g. ``[0.100000,0.200000]``."""
    return "[" + ",".join(f"{v:.6f}" for v in embedding) + "]"