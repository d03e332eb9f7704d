# src/core/models.py
"""Shared Pydantic domain models: Profile and RankedMatch.

No module redefines these types; all imports come from core.models.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

MIN_NUMERIC_SCORE = 0
MAX_NUMERIC_SCORE = 1000
MAX_DISPLAY_NAME_LENGTH = 150


def new_identity() -> str:
    """Generate a fresh opaque profile identity."""
    return str(uuid.uuid4())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# === PROFILE ===


class Profile(BaseModel):
    """A credit profile with its behavioral fingerprint.

    Immutable: re-ingestion creates a new Profile rather than updating
    ``embedding`` or ``behavior_text`` in place.
    """

    model_config = ConfigDict(frozen=True)

    # --- Identity ---
    identity: str = Field(default_factory=new_identity, min_length=1)
    display_name: str = Field(min_length=1, max_length=MAX_DISPLAY_NAME_LENGTH)

    # --- Risk inputs ---
    numeric_score: int = Field(ge=MIN_NUMERIC_SCORE, le=MAX_NUMERIC_SCORE)
    behavior_text: str

    # --- Fingerprint (little-endian float32 bytes, see core.vector_codec) ---
    embedding: bytes | None = None

    created_at: datetime = Field(default_factory=utc_now)

    @property
    def has_embedding(self) -> bool:
        return self.embedding is not None


# === RANKING OUTPUT ===


class RankedMatch(BaseModel):
    """One entry of a similarity search result."""

    model_config = ConfigDict(frozen=True)

    identity: str
    display_name: str
    numeric_score: int
    similarity: float
    score_similarity: float
    final_score: float
    rationale: str | None = None

    @property
    def similarity_percent(self) -> float:
        """Behavioral affinity as a percentage, rounded for display."""
        return round(self.similarity * 100, 2)
