# src/config/settings.py
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for all deployment-specific settings.
"""

from __future__ import annotations

import math
from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from creditai.ranking.policy import RankingPolicy


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === LLM (narrative generation, risk analysis) ===
    llm_provider: Literal["openai", "mistral", "anthropic"] = "mistral"
    llm_model: str = "mistral-small-latest"
    llm_temperature: float = 0.2
    llm_max_tokens: int = 1024

    # Provider credentials / endpoints
    openai_api_key: str = ""
    openai_base_url: str = ""
    mistral_api_key: str = ""
    mistral_base_url: str = "https://api.mistral.ai/v1"
    anthropic_api_key: str = ""
    voyage_api_key: str = ""
    ollama_base_url: str = "http://localhost:11434"

    # === EMBEDDINGS ===
    embedding_provider: Literal["openai", "mistral", "voyage", "ollama"] = "mistral"
    embedding_model: str = "mistral-embed"
    embedding_dimensions: int = 1024

    # === Ingestion ===
    min_history_length: int = 30

    # === Ranking (hybrid similarity search) ===
    ranking_vector_weight: float = 0.95
    ranking_score_weight: float = 0.05
    ranking_relevance_threshold: float = 0.75
    ranking_key: Literal["final_score", "vector_similarity"] = "final_score"
    ranking_include_rationale: bool = True
    similar_default_limit: int = 5
    similar_max_limit: int = 20

    # === Storage ===
    store_backend: Literal["memory", "sqlite"] = "sqlite"
    store_path: Path = Path("~/.creditai/profiles.db")

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "json"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 30

    # --- Validators ---

    @field_validator("embedding_dimensions", "min_history_length", "similar_max_limit")
    @classmethod
    def validate_positive(cls, v: int) -> int:  # noqa: N805
        if v <= 0:
            raise ValueError("must be > 0")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        total = self.ranking_vector_weight + self.ranking_score_weight
        if not math.isclose(total, 1.0, abs_tol=1e-9):
            errors.append(
                "RANKING_VECTOR_WEIGHT + RANKING_SCORE_WEIGHT must equal 1 "
                f"(got {total})"
            )
        if not -1.0 <= self.ranking_relevance_threshold <= 1.0:
            errors.append("RANKING_RELEVANCE_THRESHOLD must be within [-1, 1]")
        if not 1 <= self.similar_default_limit <= self.similar_max_limit:
            errors.append(
                "SIMILAR_DEFAULT_LIMIT must be between 1 and SIMILAR_MAX_LIMIT"
            )

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    @property
    def ranking_policy(self) -> RankingPolicy:
        """Ranking policy assembled from the RANKING_* settings."""
        return RankingPolicy(
            vector_weight=self.ranking_vector_weight,
            score_weight=self.ranking_score_weight,
            relevance_threshold=self.ranking_relevance_threshold,
            ranking_key=self.ranking_key,
            include_rationale=self.ranking_include_rationale,
        )


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or the CLI).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
