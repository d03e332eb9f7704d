# src/storage/store_factory.py
"""Factory: instantiate the profile store from configuration."""

from __future__ import annotations

import logging

from creditai.config.settings import Settings
from creditai.storage.base_profile_store import BaseProfileStore

logger = logging.getLogger(__name__)


class UnsupportedStoreBackendError(ValueError):
    """Raised when STORE_BACKEND names an unknown backend."""


def create_profile_store(settings: Settings) -> BaseProfileStore:
    """Instantiate the configured profile store.

    Args:
        settings: Application settings. Uses STORE_BACKEND and STORE_PATH.

    Returns:
        Configured BaseProfileStore instance.
    """
    backend = settings.store_backend
    logger.debug("Creating profile store: backend=%s", backend)

    if backend == "memory":
        from creditai.storage.memory_store import InMemoryProfileStore

        return InMemoryProfileStore()
    if backend == "sqlite":
        from creditai.storage.sqlite_store import SqliteProfileStore

        return SqliteProfileStore(settings.store_path)

    raise UnsupportedStoreBackendError(f"Unsupported store backend: {backend!r}")
