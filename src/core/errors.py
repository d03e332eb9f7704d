# src/core/errors.py
"""Error taxonomy shared by the ranking engine, ingestion and boundary layer.

User-correctable errors (UserInputError) map to client errors at the
boundary. Integrity errors (IntegrityError) signal corrupt or inconsistent
stored data and must surface as operational alerts, never as "no match".
"""

from __future__ import annotations


class CreditAIError(Exception):
    """Base class for all domain errors."""


# === USER-CORRECTABLE ===


class UserInputError(CreditAIError):
    """Input the caller can fix and resubmit."""


class InsufficientHistoryError(UserInputError):
    """Normalized behavior text is too short for a meaningful fingerprint."""

    def __init__(self, length: int, minimum: int) -> None:
        self.length = length
        self.minimum = minimum
        super().__init__(
            f"Behavior history must contain at least {minimum} characters "
            f"after normalization (got {length})"
        )


class NotFoundError(UserInputError):
    """Identity does not resolve to a stored profile."""

    def __init__(self, identity: str) -> None:
        self.identity = identity
        super().__init__(f"Profile {identity!r} not found")


# === DATA INTEGRITY ===


class IntegrityError(CreditAIError):
    """Stored data is corrupt or inconsistent."""


class MalformedVectorError(IntegrityError):
    """Encoded embedding cannot be decoded, or holds non-finite values."""


class DimensionMismatchError(IntegrityError):
    """Two vectors that must be compared have different lengths."""

    def __init__(self, left: int, right: int) -> None:
        self.left = left
        self.right = right
        super().__init__(f"Vector dimension mismatch: {left} != {right}")


# === COLLABORATORS ===


class CollaboratorError(CreditAIError):
    """An external collaborator (embedder, LLM) failed."""


class EmbeddingGenerationError(CollaboratorError):
    """Embedding generator failed or returned an unexpected shape."""


class TextGenerationError(CollaboratorError):
    """Text-generation collaborator failed or returned nothing usable."""


# === ELIGIBILITY ===


class TargetNotEligibleError(CreditAIError):
    """Target profile has no embedding and cannot anchor a similarity search."""

    def __init__(self, identity: str) -> None:
        self.identity = identity
        super().__init__(f"Profile {identity!r} has no behavioral embedding yet")
