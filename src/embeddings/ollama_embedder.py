# src/embeddings/ollama_embedder.py
"""Ollama embedding adapter (local inference).

Uses the Ollama REST API. Models: mxbai-embed-large (1024 dims),
nomic-embed-text (768 dims), etc.
"""

from __future__ import annotations

import asyncio
import json
import logging
import urllib.request

from creditai.embeddings.base_embedder import BaseEmbedder

logger = logging.getLogger(__name__)


class OllamaEmbedder(BaseEmbedder):
    """Local embeddings via Ollama API."""

    def __init__(
        self,
        model: str = "mxbai-embed-large",
        base_url: str = "http://localhost:11434",
        dimensions: int = 1024,
    ) -> None:
        self._model_name = model
        self._base_url = base_url.rstrip("/")
        self._dimensions = dimensions

    async def embed_texts(self, texts: list[str]) -> list[list[float]]:
        """Embed texts in one /api/embed call (batch input)."""
        return await asyncio.to_thread(self._post_embed, texts)

    def _post_embed(self, texts: list[str]) -> list[list[float]]:
        url = f"{self._base_url}/api/embed"
        payload = json.dumps({"model": self._model_name, "input": texts}).encode("utf-8")
        req = urllib.request.Request(
            url, data=payload, headers={"Content-Type": "application/json"}
        )
        with urllib.request.urlopen(req) as resp:
            data = json.loads(resp.read().decode("utf-8"))
        embeddings = data.get("embeddings", [])
        if not embeddings:
            raise RuntimeError(
                f"Ollama returned no embeddings for model {self._model_name}"
            )
        return embeddings

    @property
    def dimensions(self) -> int:
        return self._dimensions

    @property
    def provider_name(self) -> str:
        return "ollama"

    @property
    def model_name(self) -> str:
        return self._model_name
