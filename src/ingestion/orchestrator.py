# src/ingestion/orchestrator.py
"""Profile ingestion: text -> behavioral fingerprint -> persisted Profile.

Pipeline per call:
  1. Validate name/score, normalize the behavior text, enforce minimum length
  2. Request exactly one embedding (single-item batch)
  3. Check dimensionality, encode via core.vector_codec
  4. Build the immutable Profile and insert it once into the store

The raw-data variant first asks the text-generation client for a narrative
and then runs the same pipeline on it. No retries happen here; collaborator
failures surface immediately, wrapped with context.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from creditai.core.errors import (
    EmbeddingGenerationError,
    InsufficientHistoryError,
    TextGenerationError,
)
from creditai.core.models import MAX_NUMERIC_SCORE, MIN_NUMERIC_SCORE, Profile
from creditai.core.vector_codec import encode_vector
from creditai.ingestion.narrative import (
    DEFAULT_NARRATIVE_INSTRUCTION,
    build_narrative_messages,
)
from creditai.ingestion.normalizer import (
    DEFAULT_MIN_HISTORY_LENGTH,
    normalize_behavior_text,
)
from creditai.logging.context import set_profile_context

if TYPE_CHECKING:
    from creditai.embeddings.base_embedder import BaseEmbedder
    from creditai.llm.base_client import BaseLLMClient
    from creditai.storage.base_profile_store import BaseProfileStore

logger = logging.getLogger(__name__)

DEFAULT_EMBEDDING_DIMENSIONS = 1024


class ProfileIngestionOrchestrator:
    """Turn raw input (name, score, history) into a stored Profile."""

    def __init__(
        self,
        embedder: BaseEmbedder,
        store: BaseProfileStore,
        text_generator: BaseLLMClient | None = None,
        dimensions: int = DEFAULT_EMBEDDING_DIMENSIONS,
        min_history_length: int = DEFAULT_MIN_HISTORY_LENGTH,
        narrative_max_tokens: int = 256,
        narrative_temperature: float = 0.2,
    ) -> None:
        self._embedder = embedder
        self._store = store
        self._text_generator = text_generator
        self._dimensions = dimensions
        self._min_history_length = min_history_length
        self._narrative_max_tokens = narrative_max_tokens
        self._narrative_temperature = narrative_temperature

    async def ingest(self, name: str, score: int, text: str) -> Profile:
        """Fingerprint and persist one profile.

        Raises:
            ValueError: If name is blank or score is outside [0, 1000].
            InsufficientHistoryError: If the normalized text is too short.
            EmbeddingGenerationError: If the embedder fails or returns an
                unexpected shape.
        """
        display_name = name.strip()
        if not display_name:
            raise ValueError("Profile name must not be blank")
        if not MIN_NUMERIC_SCORE <= score <= MAX_NUMERIC_SCORE:
            raise ValueError(
                f"numeric_score must be within [{MIN_NUMERIC_SCORE}, "
                f"{MAX_NUMERIC_SCORE}], got {score}"
            )

        normalized = normalize_behavior_text(text)
        if len(normalized) < self._min_history_length:
            raise InsufficientHistoryError(len(normalized), self._min_history_length)

        vector = await self._embed(normalized)

        profile = Profile(
            display_name=display_name,
            numeric_score=score,
            behavior_text=text.strip(),
            embedding=encode_vector(vector),
        )
        await self._store.insert(profile)
        set_profile_context(profile.identity)

        logger.info(
            "Ingested profile %s (score=%d, dims=%d)",
            profile.identity, score, len(vector),
        )
        return profile

    async def ingest_from_raw_data(
        self,
        name: str,
        score: int,
        raw_data: Any,
        instruction: str | None = None,
    ) -> Profile:
        """Generate the behavior narrative from raw data, then ingest it.

        Args:
            name: Display name.
            score: Numeric credit score in [0, 1000].
            raw_data: Unstructured or semi-structured customer data.
            instruction: Generation instruction; defaults to the
                financial-DNA analyst instruction.

        Raises:
            TextGenerationError: If no text generator is configured, it
                fails, or it returns an empty narrative.
            plus everything ``ingest`` raises.
        """
        if self._text_generator is None:
            raise TextGenerationError("No text-generation client configured")

        try:
            response = await self._text_generator.complete(
                messages=build_narrative_messages(raw_data),
                system=instruction or DEFAULT_NARRATIVE_INSTRUCTION,
                max_tokens=self._narrative_max_tokens,
                temperature=self._narrative_temperature,
            )
        except Exception as e:
            raise TextGenerationError(
                f"Narrative generation failed ({self._text_generator.provider_name}): {e}"
            ) from e

        narrative = response.content.strip()
        if not narrative:
            raise TextGenerationError("Text-generation client returned an empty narrative")

        logger.debug("Generated narrative of %d chars for %r", len(narrative), name)
        return await self.ingest(name, score, narrative)

    async def _embed(self, normalized: str) -> list[float]:
        try:
            vectors = await self._embedder.embed_texts([normalized])
        except Exception as e:
            raise EmbeddingGenerationError(
                f"Embedding generation failed ({self._embedder.provider_name}): {e}"
            ) from e

        if len(vectors) != 1:
            raise EmbeddingGenerationError(
                f"Expected exactly 1 embedding, got {len(vectors)}"
            )
        vector = list(vectors[0])
        if len(vector) != self._dimensions:
            raise EmbeddingGenerationError(
                f"Expected {self._dimensions}-dim embedding, got {len(vector)}"
            )
        return vector
