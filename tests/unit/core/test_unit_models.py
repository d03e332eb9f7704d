# tests/unit/core/test_unit_models.py
"""Tests for core/models.py: Profile and RankedMatch."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from creditai.core.models import Profile, RankedMatch


class TestProfile:
    def test_defaults(self):
        p = Profile(display_name="Ana", numeric_score=700, behavior_text="history")
        assert p.identity
        assert p.embedding is None
        assert p.has_embedding is False
        assert p.created_at.tzinfo is not None

    def test_identities_are_unique(self):
        a = Profile(display_name="A", numeric_score=1, behavior_text="x")
        b = Profile(display_name="B", numeric_score=1, behavior_text="x")
        assert a.identity != b.identity

    @pytest.mark.parametrize("score", [-1, 1001])
    def test_score_out_of_range(self, score):
        with pytest.raises(ValidationError):
            Profile(display_name="Ana", numeric_score=score, behavior_text="x")

    @pytest.mark.parametrize("score", [0, 1000])
    def test_score_bounds_inclusive(self, score):
        assert Profile(display_name="Ana", numeric_score=score, behavior_text="x")

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            Profile(display_name="", numeric_score=500, behavior_text="x")

    def test_name_length_bounded(self):
        with pytest.raises(ValidationError):
            Profile(display_name="x" * 151, numeric_score=500, behavior_text="x")

    def test_immutable(self):
        p = Profile(display_name="Ana", numeric_score=700, behavior_text="x")
        with pytest.raises(ValidationError):
            p.embedding = b"\x00\x00\x00\x00"  # type: ignore[misc]

    def test_has_embedding(self):
        p = Profile(
            display_name="Ana", numeric_score=700, behavior_text="x",
            embedding=b"\x00" * 8,
        )
        assert p.has_embedding is True


class TestRankedMatch:
    def test_similarity_percent(self):
        m = RankedMatch(
            identity="a", display_name="A", numeric_score=600,
            similarity=0.87654, score_similarity=0.9, final_score=0.87,
        )
        assert m.similarity_percent == 87.65
        assert m.rationale is None
