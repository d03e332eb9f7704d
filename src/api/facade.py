# src/api/facade.py
"""Public service facade: the boundary between callers and the core.

Usage:
    from creditai.api.facade import create_service
    service = create_service()
    profile = await service.ingest(ProfileRequest(...))
    matches = await service.find_similar(profile.identity, limit=5)

Collaborators are passed in explicitly; create_service() wires them from
Settings for the common case.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from creditai.analysis.risk_analyzer import RiskAnalyzer
from creditai.api.models import (
    PagedResponse,
    PageQuery,
    ProfileRequest,
    ProfileResponse,
    RawDataProfileRequest,
    RiskAnalysisResponse,
)
from creditai.config.settings import Settings
from creditai.core.errors import NotFoundError, TargetNotEligibleError, TextGenerationError
from creditai.core.models import Profile, RankedMatch
from creditai.ingestion.orchestrator import ProfileIngestionOrchestrator
from creditai.logging.context import set_operation_context
from creditai.ranking.hybrid_ranker import HybridRanker

if TYPE_CHECKING:
    from creditai.embeddings.base_embedder import BaseEmbedder
    from creditai.llm.base_client import BaseLLMClient
    from creditai.storage.base_profile_store import BaseProfileStore

logger = logging.getLogger(__name__)


class CreditAnalysisService:
    """Ingestion, similarity search and risk analysis over a profile store."""

    def __init__(
        self,
        store: BaseProfileStore,
        embedder: BaseEmbedder,
        llm_client: BaseLLMClient | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._settings = settings or Settings()
        self._store = store
        self._llm = llm_client
        self._orchestrator = ProfileIngestionOrchestrator(
            embedder=embedder,
            store=store,
            text_generator=llm_client,
            dimensions=self._settings.embedding_dimensions,
            min_history_length=self._settings.min_history_length,
            narrative_temperature=self._settings.llm_temperature,
        )
        self._ranker = HybridRanker(
            policy=self._settings.ranking_policy,
            dimensions=self._settings.embedding_dimensions,
        )

    @property
    def store(self) -> BaseProfileStore:
        return self._store

    def close(self) -> None:
        """Release the store (closes the SQLite connection)."""
        self._store.close()

    # --- Ingestion ---

    async def ingest(self, request: ProfileRequest) -> ProfileResponse:
        """Fingerprint and store a profile from its behavior history."""
        set_operation_context("ingest")
        profile = await self._orchestrator.ingest(
            request.name, request.numeric_score, request.behavior_text
        )
        return ProfileResponse.from_profile(profile)

    async def ingest_from_raw_data(
        self, request: RawDataProfileRequest
    ) -> ProfileResponse:
        """Generate the behavior narrative from raw data, then ingest it."""
        set_operation_context("ingest_from_raw_data")
        profile = await self._orchestrator.ingest_from_raw_data(
            request.name,
            request.numeric_score,
            request.raw_data,
            instruction=request.instruction,
        )
        return ProfileResponse.from_profile(profile)

    # --- Queries ---

    async def find_similar(
        self, identity: str, limit: int | None = None
    ) -> list[RankedMatch]:
        """Profiles behaviorally similar to ``identity``, best first.

        ``limit`` is clamped into [1, SIMILAR_MAX_LIMIT].

        Raises:
            NotFoundError: If identity is unknown.
            TargetNotEligibleError: If the target has no embedding.
        """
        set_operation_context("find_similar", identity)
        limit = self._clamp_limit(limit)

        target = await self._require(identity)
        if not target.has_embedding:
            raise TargetNotEligibleError(identity)

        candidates = await self._store.list_candidates(exclude_identity=identity)
        matches = self._ranker.rank(target, candidates, limit)

        logger.info(
            "Similarity search for %s: %d candidates, %d matches (limit=%d)",
            identity, len(candidates), len(matches), limit,
        )
        return matches

    async def get_profile(self, identity: str) -> ProfileResponse:
        """Fetch one profile.

        Raises:
            NotFoundError: If identity is unknown.
        """
        set_operation_context("get_profile", identity)
        return ProfileResponse.from_profile(await self._require(identity))

    async def list_profiles(
        self, page: int = 1, page_size: int = 20
    ) -> PagedResponse[ProfileResponse]:
        """Page through stored profiles ordered by name."""
        set_operation_context("list_profiles")
        query = PageQuery(page=page, page_size=page_size)

        total = await self._store.count()
        profiles = await self._store.list_profiles(
            offset=(query.page - 1) * query.page_size, limit=query.page_size
        )
        return PagedResponse[ProfileResponse](
            page_number=query.page,
            page_size=query.page_size,
            total_items=total,
            total_pages=math.ceil(total / query.page_size),
            items=[ProfileResponse.from_profile(p) for p in profiles],
        )

    async def analyze_risk(self, identity: str, question: str) -> RiskAnalysisResponse:
        """Ask the LLM for a credit/churn risk opinion on one profile.

        Raises:
            ValueError: If the question is blank.
            NotFoundError: If identity is unknown.
            TextGenerationError: If no LLM client is configured or it fails.
        """
        set_operation_context("analyze_risk", identity)
        if not question or not question.strip():
            raise ValueError("Question must not be empty")
        if self._llm is None:
            raise TextGenerationError("No text-generation client configured")

        profile = await self._require(identity)
        analyzer = RiskAnalyzer(
            self._llm,
            max_tokens=self._settings.llm_max_tokens,
            temperature=self._settings.llm_temperature,
        )
        analysis = await analyzer.analyze(profile, question)
        return RiskAnalysisResponse(
            identity=identity, question=question.strip(), analysis=analysis
        )

    # --- Internal helpers ---

    async def _require(self, identity: str) -> Profile:
        profile = await self._store.get(identity)
        if profile is None:
            raise NotFoundError(identity)
        return profile

    def _clamp_limit(self, limit: int | None) -> int:
        if limit is None:
            return self._settings.similar_default_limit
        return max(1, min(limit, self._settings.similar_max_limit))


def create_service(settings: Settings | None = None) -> CreditAnalysisService:
    """Build a service with store, embedder and LLM client from settings."""
    from creditai.embeddings.embedder_factory import create_embedder
    from creditai.llm.client_factory import create_default_llm_client
    from creditai.storage.store_factory import create_profile_store

    settings = settings or Settings()
    return CreditAnalysisService(
        store=create_profile_store(settings),
        embedder=create_embedder(settings),
        llm_client=create_default_llm_client(settings),
        settings=settings,
    )
