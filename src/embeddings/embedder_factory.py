# src/embeddings/embedder_factory.py
"""Factory: instantiate embedding provider from configuration."""

from __future__ import annotations

import importlib
import logging
from typing import Any

from creditai.config.settings import Settings
from creditai.embeddings.base_embedder import BaseEmbedder

logger = logging.getLogger(__name__)

_PROVIDER_REGISTRY: dict[str, str] = {
    "openai": "creditai.embeddings.openai_embedder.OpenAIEmbedder",
    "mistral": "creditai.embeddings.openai_embedder.OpenAIEmbedder",
    "voyage": "creditai.embeddings.voyage_embedder.VoyageEmbedder",
    "ollama": "creditai.embeddings.ollama_embedder.OllamaEmbedder",
}


class UnsupportedEmbeddingProviderError(ValueError):
    """Raised when an embedding provider is not registered."""


def create_embedder(settings: Settings) -> BaseEmbedder:
    """Instantiate the configured embedding provider.

    Args:
        settings: Application settings. Uses EMBEDDING_PROVIDER, EMBEDDING_MODEL
            and EMBEDDING_DIMENSIONS plus the matching provider credentials.

    Returns:
        Configured BaseEmbedder instance.

    Raises:
        UnsupportedEmbeddingProviderError: If the provider is not registered.
    """
    provider = settings.embedding_provider
    if provider not in _PROVIDER_REGISTRY:
        raise UnsupportedEmbeddingProviderError(
            f"Unsupported embedding provider: {provider!r}. "
            f"Available: {', '.join(sorted(_PROVIDER_REGISTRY))}"
        )

    cls = _import_class(_PROVIDER_REGISTRY[provider])

    kwargs: dict[str, Any] = {
        "model": settings.embedding_model,
        "dimensions": settings.embedding_dimensions,
    }
    if provider == "openai":
        kwargs["api_key"] = settings.openai_api_key
        kwargs["base_url"] = settings.openai_base_url or None
    elif provider == "mistral":
        kwargs["api_key"] = settings.mistral_api_key
        kwargs["base_url"] = settings.mistral_base_url
        kwargs["provider"] = "mistral"
    elif provider == "voyage":
        kwargs["api_key"] = settings.voyage_api_key
    elif provider == "ollama":
        kwargs["base_url"] = settings.ollama_base_url

    logger.debug(
        "Creating embedder: provider=%s, model=%s", provider, settings.embedding_model
    )
    return cls(**kwargs)


def register_embedding_provider(name: str, class_path: str) -> None:
    """Register a custom embedding provider."""
    _PROVIDER_REGISTRY[name] = class_path


def _import_class(class_path: str) -> type:
    """Dynamically import a class from its fully qualified path."""
    module_path, class_name = class_path.rsplit(".", 1)
    module = importlib.import_module(module_path)
    return getattr(module, class_name)
