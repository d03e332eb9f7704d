# src/ranking/policy.py
"""Ranking policy: weights, relevance gate and ranking key.

Every weighting/threshold/key variant of the hybrid search is a value of
this one model rather than a separate ranker.
"""

from __future__ import annotations

import math
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

DEFAULT_VECTOR_WEIGHT = 0.95
DEFAULT_SCORE_WEIGHT = 0.05
DEFAULT_RELEVANCE_THRESHOLD = 0.75
DEFAULT_SCORE_RANGE = 1000

RankingKey = Literal["final_score", "vector_similarity"]


class RankingPolicy(BaseModel):
    """Configuration of the hybrid similarity ranking.

    Attributes:
        vector_weight: Weight of cosine similarity in the composite score.
        score_weight: Weight of numeric-score proximity. Must sum to 1
            with ``vector_weight``.
        relevance_threshold: Minimum cosine similarity to keep a candidate.
            Inclusive: a similarity equal to the threshold is kept.
        ranking_key: Sort by composite ``final_score`` or by raw
            ``vector_similarity`` (the composite is reported either way).
        include_rationale: Attach a human-readable explanation to matches.
        score_range: Width of the numeric score domain.
    """

    model_config = ConfigDict(frozen=True)

    vector_weight: float = Field(default=DEFAULT_VECTOR_WEIGHT, ge=0.0, le=1.0)
    score_weight: float = Field(default=DEFAULT_SCORE_WEIGHT, ge=0.0, le=1.0)
    relevance_threshold: float = Field(
        default=DEFAULT_RELEVANCE_THRESHOLD, ge=-1.0, le=1.0
    )
    ranking_key: RankingKey = "final_score"
    include_rationale: bool = True
    score_range: int = Field(default=DEFAULT_SCORE_RANGE, gt=0)

    @model_validator(mode="after")
    def validate_weights(self) -> RankingPolicy:
        total = self.vector_weight + self.score_weight
        if not math.isclose(total, 1.0, abs_tol=1e-9):
            raise ValueError(
                f"vector_weight + score_weight must equal 1 (got {total})"
            )
        return self

    def score_similarity(self, candidate_score: int, target_score: int) -> float:
        """Proximity of two numeric scores, 1.0 when equal."""
        return 1.0 - abs(candidate_score - target_score) / self.score_range

    def final_score(self, vector_similarity: float, score_similarity: float) -> float:
        return (
            vector_similarity * self.vector_weight
            + score_similarity * self.score_weight
        )

    def is_relevant(self, vector_similarity: float) -> bool:
        return vector_similarity >= self.relevance_threshold
