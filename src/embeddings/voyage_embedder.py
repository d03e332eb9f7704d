# src/embeddings/voyage_embedder.py
"""Voyage embedding adapter (Anthropic's recommended embedding provider).

Uses the voyageai SDK. Models: voyage-3 (1024 dims), voyage-3-lite.
"""

from __future__ import annotations

import logging

from creditai.embeddings.base_embedder import BaseEmbedder

logger = logging.getLogger(__name__)


class VoyageEmbedder(BaseEmbedder):
    """Embeddings via the Voyage API."""

    def __init__(
        self,
        model: str = "voyage-3",
        api_key: str | None = None,
        dimensions: int = 1024,
    ) -> None:
        self._model = model
        self._api_key = api_key
        self._dimensions = dimensions
        self.__client = None

    @property
    def _client(self):
        if self.__client is None:
            try:
                import voyageai
            except ImportError as e:
                raise ImportError(
                    "voyageai package required: pip install voyageai"
                ) from e
            self.__client = voyageai.AsyncClient(api_key=self._api_key or None)
        return self.__client

    async def embed_texts(self, texts: list[str]) -> list[list[float]]:
        """Embed behavior texts as documents."""
        result = await self._client.embed(
            texts, model=self._model, input_type="document"
        )
        return result.embeddings

    @property
    def dimensions(self) -> int:
        return self._dimensions

    @property
    def provider_name(self) -> str:
        return "voyage"

    @property
    def model_name(self) -> str:
        return self._model
