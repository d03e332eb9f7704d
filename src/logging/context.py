# src/logging/context.py
"""Contextual logging support: attach operation and profile_id to log records."""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

# Context variables for structured logging, set per service operation.
_operation: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "operation", default=None
)
_profile_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "profile_id", default=None
)


@dataclass
class LogContext:
    """Snapshot of current logging context."""

    operation: str | None = None
    profile_id: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(operation=_operation.get(), profile_id=_profile_id.get())


def set_operation_context(operation: str, profile_id: str | None = None) -> None:
    """Set operation-level context (called once per facade operation)."""
    _operation.set(operation)
    _profile_id.set(profile_id)


def set_profile_context(profile_id: str) -> None:
    """Attach the profile being processed once its identity is known."""
    _profile_id.set(profile_id)


def clear_context() -> None:
    """Reset all context variables."""
    _operation.set(None)
    _profile_id.set(None)
