# tests/unit/core/test_similarity.py
"""Tests for core/similarity.py: cosine similarity and its fallbacks."""

from __future__ import annotations

import numpy as np
import pytest

from creditai.core.errors import DimensionMismatchError, MalformedVectorError
from creditai.core.similarity import ZERO_NORM_SIMILARITY, cosine_similarity


class TestCosineSimilarity:
    def test_identical_direction(self):
        assert cosine_similarity([1.0, 2.0, 3.0], [2.0, 4.0, 6.0]) == pytest.approx(1.0)

    def test_orthogonal(self):
        assert cosine_similarity([1.0, 0.0], [0.0, 1.0]) == pytest.approx(0.0)

    def test_opposite(self):
        assert cosine_similarity([1.0, 0.0], [-1.0, 0.0]) == pytest.approx(-1.0)

    def test_exact_three_quarters(self):
        # dot = 3, norms 1 and 4
        assert cosine_similarity([1, 0, 0, 0, 0], [3, 2, 1, 1, 1]) == 0.75

    def test_symmetry(self):
        rng = np.random.default_rng(42)
        for _ in range(10):
            a = rng.standard_normal(64).astype(np.float32)
            b = rng.standard_normal(64).astype(np.float32)
            assert cosine_similarity(a, b) == cosine_similarity(b, a)

    def test_self_similarity_is_one(self):
        rng = np.random.default_rng(3)
        a = rng.standard_normal(1024).astype(np.float32)
        assert cosine_similarity(a, a) == pytest.approx(1.0, abs=1e-12)
        assert cosine_similarity(a, a) <= 1.0

    def test_result_is_python_float(self):
        assert isinstance(cosine_similarity([1.0, 1.0], [1.0, 0.0]), float)

    def test_dimension_mismatch(self):
        with pytest.raises(DimensionMismatchError) as exc_info:
            cosine_similarity([1.0, 2.0, 3.0], [1.0, 2.0, 3.0, 4.0])
        assert exc_info.value.left == 3
        assert exc_info.value.right == 4


class TestDegenerateInputs:
    def test_zero_norm_returns_fallback(self):
        assert cosine_similarity([0.0, 0.0, 0.0], [1.0, 2.0, 3.0]) == ZERO_NORM_SIMILARITY
        assert ZERO_NORM_SIMILARITY == 0.0

    def test_zero_norm_on_right(self):
        assert cosine_similarity([1.0, 2.0], [0.0, 0.0]) == 0.0

    def test_both_zero(self):
        assert cosine_similarity([0.0, 0.0], [0.0, 0.0]) == 0.0

    def test_empty_vectors_use_fallback(self):
        assert cosine_similarity([], []) == 0.0

    def test_nan_rejected(self):
        with pytest.raises(MalformedVectorError, match="non-finite"):
            cosine_similarity([float("nan"), 1.0], [1.0, 1.0])

    def test_infinity_rejected(self):
        with pytest.raises(MalformedVectorError):
            cosine_similarity([1.0, 1.0], [float("inf"), 1.0])

    def test_rejects_2d(self):
        with pytest.raises(ValueError, match="1D"):
            cosine_similarity([[1.0]], [[1.0]])
