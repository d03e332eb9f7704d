# src/llm/base_client.py
"""Abstract text-generation client interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from creditai.llm.models import LLMResponse, Message


class BaseLLMClient(ABC):
    """Unified interface for all LLM providers."""

    @abstractmethod
    async def complete(
        self,
        messages: list[Message],
        system: str | None = None,
        max_tokens: int = 1024,
        temperature: float = 0.2,
    ) -> LLMResponse:
        """Text completion."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider identifier (openai, mistral, anthropic)."""

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Model identifier."""
