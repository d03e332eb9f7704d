# src/api/models.py
"""API-level models: requests, responses and paging."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

from creditai.core.models import MAX_NUMERIC_SCORE, MIN_NUMERIC_SCORE, Profile

T = TypeVar("T")


class ProfileRequest(BaseModel):
    """Input for plain ingestion."""

    name: str = Field(min_length=3, max_length=150)
    numeric_score: int = Field(ge=MIN_NUMERIC_SCORE, le=MAX_NUMERIC_SCORE)
    behavior_text: str = Field(min_length=10, max_length=4000)


class RawDataProfileRequest(BaseModel):
    """Input for ingestion from raw data (narrative generated by the LLM)."""

    name: str = Field(min_length=3, max_length=150)
    numeric_score: int = Field(ge=MIN_NUMERIC_SCORE, le=MAX_NUMERIC_SCORE)
    raw_data: Any
    instruction: str | None = None


class ProfileResponse(BaseModel):
    """Profile as returned to callers (embedding bytes are never exposed)."""

    identity: str
    display_name: str
    numeric_score: int
    behavior_text: str
    created_at: datetime
    has_embedding: bool

    @classmethod
    def from_profile(cls, profile: Profile) -> ProfileResponse:
        return cls(
            identity=profile.identity,
            display_name=profile.display_name,
            numeric_score=profile.numeric_score,
            behavior_text=profile.behavior_text,
            created_at=profile.created_at,
            has_embedding=profile.has_embedding,
        )


class PageQuery(BaseModel):
    """Paging parameters."""

    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=20, ge=1, le=100)


class PagedResponse(BaseModel, Generic[T]):
    """One page of results."""

    page_number: int
    page_size: int
    total_items: int
    total_pages: int
    items: list[T] = Field(default_factory=list)


class RiskAnalysisResponse(BaseModel):
    """LLM risk opinion on one profile."""

    identity: str
    question: str
    analysis: str
