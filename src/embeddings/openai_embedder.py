# src/embeddings/openai_embedder.py
"""OpenAI-compatible embedding adapter.

Uses the openai SDK. Also serves Mistral (mistral-embed, 1024 dims) and any
other OpenAI-compatible endpoint through ``base_url``.
"""

from __future__ import annotations

import logging
from typing import Any

from creditai.embeddings.base_embedder import BaseEmbedder

logger = logging.getLogger(__name__)


class OpenAIEmbedder(BaseEmbedder):
    """Embeddings via an OpenAI-compatible API."""

    def __init__(
        self,
        model: str = "text-embedding-3-small",
        api_key: str | None = None,
        dimensions: int = 1536,
        base_url: str | None = None,
        provider: str = "openai",
    ) -> None:
        self._model = model
        self._api_key = api_key
        self._dimensions = dimensions
        self._base_url = base_url or None
        self._provider = provider
        self.__client = None

    @property
    def _client(self):
        if self.__client is None:
            try:
                import openai
            except ImportError as e:
                raise ImportError(
                    "openai package required: pip install openai"
                ) from e
            self.__client = openai.AsyncOpenAI(
                api_key=self._api_key or "", base_url=self._base_url
            )
        return self.__client

    async def embed_texts(self, texts: list[str]) -> list[list[float]]:
        """Embed texts in a single request.

        OpenAI text-embedding-3 models are shortened server-side to
        ``dimensions``; mistral-embed has a fixed 1024-dim output.
        """
        kwargs: dict[str, Any] = {"input": texts, "model": self._model}
        if self._provider == "openai":
            kwargs["dimensions"] = self._dimensions
        response = await self._client.embeddings.create(**kwargs)
        return [item.embedding for item in response.data]

    @property
    def dimensions(self) -> int:
        return self._dimensions

    @property
    def provider_name(self) -> str:
        return self._provider

    @property
    def model_name(self) -> str:
        return self._model
