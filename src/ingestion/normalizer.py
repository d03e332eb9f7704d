# src/ingestion/normalizer.py
"""Behavior text normalization before embedding.

The normalized form is only fed to the embedding generator; the persisted
display text keeps its original casing.
"""

from __future__ import annotations

DEFAULT_MIN_HISTORY_LENGTH = 30


def normalize_behavior_text(text: str) -> str:
    """Trim, turn every CR/LF into a space and case-fold.

    >>> normalize_behavior_text("  Pays On Time\\nNo Overdrafts ")
    'pays on time no overdrafts'
    """
    return text.strip().replace("\r", " ").replace("\n", " ").casefold()
