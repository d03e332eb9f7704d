# src/ranking/hybrid_ranker.py
"""Hybrid similarity ranking over an in-memory candidate list.

Blends behavioral similarity (cosine of embeddings) with numeric-score
proximity, gates out weak matches, explains the survivors and returns a
bounded, deterministically ordered list. Exact brute-force scan, no index.

Pure and stateless: safe to run concurrently across independent calls.
"""

from __future__ import annotations

import logging
from typing import Iterable

import numpy as np

from creditai.core.errors import (
    DimensionMismatchError,
    TargetNotEligibleError,
)
from creditai.core.models import Profile, RankedMatch
from creditai.core.similarity import cosine_similarity
from creditai.core.vector_codec import decode_vector
from creditai.ranking.policy import RankingPolicy
from creditai.ranking.rationale import build_rationale

logger = logging.getLogger(__name__)


class HybridRanker:
    """Rank candidate profiles by behavioral and score similarity to a target."""

    def __init__(
        self,
        policy: RankingPolicy | None = None,
        dimensions: int | None = None,
    ) -> None:
        """
        Args:
            policy: Weights, relevance gate and ranking key. Defaults to the
                0.95/0.05 policy sorted by final score.
            dimensions: Expected embedding length. When set, any decoded
                vector of another length raises DimensionMismatchError.
        """
        self._policy = policy or RankingPolicy()
        self._dimensions = dimensions

    @property
    def policy(self) -> RankingPolicy:
        return self._policy

    def rank(
        self,
        target: Profile,
        candidates: Iterable[Profile],
        limit: int,
    ) -> list[RankedMatch]:
        """Rank candidates against the target.

        Args:
            target: Profile anchoring the search; must carry an embedding.
            candidates: Profiles to compare. Candidates without embedding and
                the target itself are skipped.
            limit: Maximum number of matches to return.

        Returns:
            Matches sorted by the policy's ranking key (descending), ties
            broken by identity. Empty when nothing passes the relevance gate.

        Raises:
            TargetNotEligibleError: If the target has no embedding.
            MalformedVectorError: If any stored embedding is corrupt.
            DimensionMismatchError: If embedding lengths disagree.
            ValueError: If limit is negative.
        """
        if limit < 0:
            raise ValueError(f"limit must be >= 0, got {limit}")
        if target.embedding is None:
            raise TargetNotEligibleError(target.identity)

        target_vector = self._decode(target.embedding)
        policy = self._policy

        matches: list[RankedMatch] = []
        scanned = 0
        for candidate in candidates:
            if candidate.identity == target.identity or candidate.embedding is None:
                continue
            scanned += 1
            vector = self._decode(candidate.embedding)
            vector_similarity = cosine_similarity(vector, target_vector)
            if not policy.is_relevant(vector_similarity):
                continue

            score_similarity = policy.score_similarity(
                candidate.numeric_score, target.numeric_score
            )
            matches.append(
                RankedMatch(
                    identity=candidate.identity,
                    display_name=candidate.display_name,
                    numeric_score=candidate.numeric_score,
                    similarity=vector_similarity,
                    score_similarity=score_similarity,
                    final_score=policy.final_score(vector_similarity, score_similarity),
                    rationale=(
                        build_rationale(vector_similarity, score_similarity)
                        if policy.include_rationale
                        else None
                    ),
                )
            )

        matches.sort(key=self._sort_key)
        logger.debug(
            "Ranked target %s: scanned=%d relevant=%d limit=%d",
            target.identity, scanned, len(matches), limit,
        )
        return matches[:limit]

    def _sort_key(self, match: RankedMatch) -> tuple[float, str]:
        if self._policy.ranking_key == "vector_similarity":
            primary = match.similarity
        else:
            primary = match.final_score
        return (-primary, match.identity)

    def _decode(self, data: bytes) -> np.ndarray:
        vector = decode_vector(data)
        if self._dimensions is not None and vector.shape[0] != self._dimensions:
            raise DimensionMismatchError(vector.shape[0], self._dimensions)
        return vector
