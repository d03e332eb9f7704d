# src/llm/adapters/openai_adapter.py
"""OpenAI-compatible chat adapter implementing BaseLLMClient.

Uses the official openai SDK. Mistral (mistral-small-latest) is reached
through the same adapter with ``base_url`` pointing at its endpoint.
"""

from __future__ import annotations

import time
from typing import Any

from creditai.llm.base_client import BaseLLMClient
from creditai.llm.models import LLMResponse, Message


class OpenAIAdapter(BaseLLMClient):
    """OpenAI-compatible chat completions adapter."""

    def __init__(
        self,
        model: str = "gpt-4o-mini",
        api_key: str = "",
        base_url: str | None = None,
        provider: str = "openai",
    ) -> None:
        self._model = model
        self._api_key = api_key
        self._base_url = base_url or None
        self._provider = provider
        self.__client = None

    @property
    def _client(self):
        if self.__client is None:
            try:
                import openai
            except ImportError as e:
                raise ImportError(
                    "openai package required: pip install openai"
                ) from e
            self.__client = openai.AsyncOpenAI(
                api_key=self._api_key or "", base_url=self._base_url
            )
        return self.__client

    async def complete(
        self,
        messages: list[Message],
        system: str | None = None,
        max_tokens: int = 1024,
        temperature: float = 0.2,
    ) -> LLMResponse:
        oai_messages: list[dict[str, Any]] = []
        if system:
            oai_messages.append({"role": "system", "content": system})
        for m in messages:
            oai_messages.append({"role": m.role, "content": m.content})

        t0 = time.monotonic()
        resp = await self._client.chat.completions.create(
            model=self._model,
            messages=oai_messages,
            max_tokens=max_tokens,
            temperature=temperature,
        )
        latency = int((time.monotonic() - t0) * 1000)

        choice = resp.choices[0]
        usage = resp.usage
        return LLMResponse(
            content=choice.message.content or "",
            input_tokens=usage.prompt_tokens if usage else 0,
            output_tokens=usage.completion_tokens if usage else 0,
            model=self._model,
            provider=self._provider,
            latency_ms=latency,
            raw_response=resp,
        )

    @property
    def provider_name(self) -> str:
        return self._provider

    @property
    def model_name(self) -> str:
        return self._model
