# src/storage/base_profile_store.py
"""Abstract profile store interface.

Only single-row insert atomicity is required; no multi-step transactions.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from creditai.core.models import Profile


class DuplicateProfileError(ValueError):
    """Raised when inserting a profile whose identity already exists."""

    def __init__(self, identity: str) -> None:
        self.identity = identity
        super().__init__(f"Profile {identity!r} already exists")


class BaseProfileStore(ABC):
    """Unified interface for profile storage backends."""

    @abstractmethod
    async def get(self, identity: str) -> Profile | None:
        """Fetch one profile by identity."""

    @abstractmethod
    async def list_candidates(self, exclude_identity: str) -> list[Profile]:
        """Fetch all profiles carrying an embedding, except ``exclude_identity``."""

    @abstractmethod
    async def insert(self, profile: Profile) -> None:
        """Insert one profile. Identities are never reused."""

    @abstractmethod
    async def list_profiles(self, offset: int = 0, limit: int = 20) -> list[Profile]:
        """Page through profiles ordered by display name."""

    @abstractmethod
    async def count(self) -> int:
        """Total number of stored profiles."""

    def close(self) -> None:
        """Release backend resources (no-op by default)."""
