# src/ranking/rationale.py
"""Human-readable explanation of a match, derived from banded thresholds.

Presentation only: nothing here feeds back into ranking order.
"""

from __future__ import annotations

NEAR_IDENTICAL_THRESHOLD = 0.90
HIGHLY_SIMILAR_THRESHOLD = 0.80
CLOSE_SCORE_THRESHOLD = 0.95

# (exclusive lower bound, label), checked in order
_SIMILARITY_BANDS: list[tuple[float, str]] = [
    (NEAR_IDENTICAL_THRESHOLD, "Near-identical behavioral profile"),
    (HIGHLY_SIMILAR_THRESHOLD, "Highly similar behavioral profile"),
]
_DEFAULT_LABEL = "Moderate behavioral similarity"


def similarity_label(vector_similarity: float) -> str:
    """Band label for a cosine similarity value."""
    for lower_bound, label in _SIMILARITY_BANDS:
        if vector_similarity > lower_bound:
            return label
    return _DEFAULT_LABEL


def build_rationale(vector_similarity: float, score_similarity: float) -> str:
    """Compose the explanation for one ranked match.

    Args:
        vector_similarity: Cosine similarity of the behavioral fingerprints.
        score_similarity: Numeric-score proximity in [0, 1].

    Returns:
        Short sentence, e.g. "Highly similar behavioral profile; credit
        scores are also close".
    """
    text = similarity_label(vector_similarity)
    if score_similarity >= CLOSE_SCORE_THRESHOLD:
        text += "; credit scores are also close"
    return text
