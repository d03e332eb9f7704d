# tests/conftest.py
"""Shared test fixtures for unit and integration tests.

Provides vector/profile builders, mock embedder and LLM clients, and an
in-memory store. No external services: all collaborator I/O is mocked.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from creditai.core.models import Profile
from creditai.core.vector_codec import encode_vector
from creditai.llm.models import LLMResponse
from creditai.logging.context import clear_context
from creditai.storage.memory_store import InMemoryProfileStore

DIMS = 1024


def vector_with_similarity(similarity: float, dims: int = DIMS) -> list[float]:
    """Unit vector whose cosine similarity with e0 is ``similarity``."""
    vec = [0.0] * dims
    vec[0] = similarity
    vec[1] = math.sqrt(max(0.0, 1.0 - similarity * similarity))
    return vec


def axis_vector(dims: int = DIMS) -> list[float]:
    """e0, the reference direction for vector_with_similarity."""
    vec = [0.0] * dims
    vec[0] = 1.0
    return vec


@pytest.fixture(autouse=True)
def _clear_log_context():
    clear_context()
    yield
    clear_context()


# === FIXTURES: Builders ===


@pytest.fixture
def make_vector():
    """Factory: make_vector(similarity, dims=1024) -> list[float]."""
    return vector_with_similarity


@pytest.fixture
def make_profile():
    """Factory building embedded profiles with sensible defaults."""

    def _make(
        identity: str,
        score: int = 680,
        vector: list[float] | None = None,
        name: str | None = None,
        embedding: bytes | None = None,
        with_embedding: bool = True,
    ) -> Profile:
        if embedding is None and with_embedding:
            embedding = encode_vector(vector if vector is not None else axis_vector())
        return Profile(
            identity=identity,
            display_name=name or f"Customer {identity}",
            numeric_score=score,
            behavior_text="Pays invoices on time, stable salary, no overdraft usage.",
            embedding=embedding,
            created_at=datetime(2026, 2, 6, 17, 0, 0, tzinfo=timezone.utc),
        )

    return _make


@pytest.fixture
def target_profile(make_profile) -> Profile:
    """Target anchored on e0 with score 680."""
    return make_profile("target", score=680, vector=axis_vector())


# === FIXTURES: Collaborators ===


@pytest.fixture
def memory_store() -> InMemoryProfileStore:
    return InMemoryProfileStore()


@pytest.fixture
def mock_embedder() -> AsyncMock:
    """Embedder returning one 1024-dim vector per input text."""
    embedder = AsyncMock()
    embedder.embed_texts = AsyncMock(
        side_effect=lambda texts: [axis_vector() for _ in texts]
    )
    embedder.dimensions = DIMS
    embedder.provider_name = "mock"
    embedder.model_name = "mock-embed"
    return embedder


@pytest.fixture
def mock_llm_response() -> LLMResponse:
    return LLMResponse(
        content=(
            "Stable retiree with fixed pension income, maximum predictability "
            "and a conservative spending pattern."
        ),
        input_tokens=120,
        output_tokens=30,
        model="mistral-small-latest",
        provider="mistral",
        latency_ms=350,
    )


@pytest.fixture
def mock_llm_client(mock_llm_response: LLMResponse) -> AsyncMock:
    client = AsyncMock()
    client.complete = AsyncMock(return_value=mock_llm_response)
    client.provider_name = "mock"
    client.model_name = "mock-chat"
    return client
