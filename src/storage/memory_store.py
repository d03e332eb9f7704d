# src/storage/memory_store.py
"""In-memory profile store (STORE_BACKEND=memory), for tests and demos."""

from __future__ import annotations

from creditai.core.models import Profile
from creditai.storage.base_profile_store import BaseProfileStore, DuplicateProfileError


class InMemoryProfileStore(BaseProfileStore):
    """Dict-backed store. Profiles are immutable, so no copies are needed."""

    def __init__(self) -> None:
        self._profiles: dict[str, Profile] = {}

    async def get(self, identity: str) -> Profile | None:
        return self._profiles.get(identity)

    async def list_candidates(self, exclude_identity: str) -> list[Profile]:
        return [
            p for p in self._profiles.values()
            if p.identity != exclude_identity and p.has_embedding
        ]

    async def insert(self, profile: Profile) -> None:
        if profile.identity in self._profiles:
            raise DuplicateProfileError(profile.identity)
        self._profiles[profile.identity] = profile

    async def list_profiles(self, offset: int = 0, limit: int = 20) -> list[Profile]:
        ordered = sorted(
            self._profiles.values(), key=lambda p: (p.display_name, p.identity)
        )
        return ordered[offset:offset + limit]

    async def count(self) -> int:
        return len(self._profiles)
