# src/core/similarity.py
"""Cosine similarity between two embedding vectors.

Inputs are float32 (as decoded from storage); accumulation happens in
float64 and the result is clipped into [-1, 1] so rounding never produces
values such as 1.0000001 for self-similarity.

Zero-norm fallback: when either vector has zero norm (no direction, which
includes empty vectors) the similarity is defined as 0.0.
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from creditai.core.errors import DimensionMismatchError, MalformedVectorError

logger = logging.getLogger(__name__)

ZERO_NORM_SIMILARITY = 0.0


def cosine_similarity(
    a: Sequence[float] | np.ndarray,
    b: Sequence[float] | np.ndarray,
) -> float:
    """Compute dot(a, b) / (||a|| * ||b||).

    Args:
        a: First vector.
        b: Second vector, same length as ``a``.

    Returns:
        Similarity in [-1, 1], or 0.0 if either vector has zero norm.

    Raises:
        DimensionMismatchError: If the vectors differ in length.
        MalformedVectorError: If either vector holds NaN or infinite values.
    """
    va = np.asarray(a, dtype=np.float64)
    vb = np.asarray(b, dtype=np.float64)
    if va.ndim != 1 or vb.ndim != 1:
        raise ValueError(f"Expected 1D vectors, got {va.ndim}D and {vb.ndim}D")
    if va.shape[0] != vb.shape[0]:
        raise DimensionMismatchError(va.shape[0], vb.shape[0])
    if not (np.isfinite(va).all() and np.isfinite(vb).all()):
        raise MalformedVectorError("Vector contains non-finite values")

    norm_a = float(np.linalg.norm(va))
    norm_b = float(np.linalg.norm(vb))
    if norm_a == 0.0 or norm_b == 0.0:
        logger.debug("Zero-norm vector in cosine similarity, using fallback")
        return ZERO_NORM_SIMILARITY

    similarity = float(np.dot(va, vb)) / (norm_a * norm_b)
    return float(np.clip(similarity, -1.0, 1.0))
