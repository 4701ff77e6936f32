"""Placeholder for provider identities exposed in settings without a backend.

Every generation call fails fast with ProviderNotConfiguredError instead of
silently falling back to the default provider.
"""

from typing import Any

from ..base import LLMProvider
from ..errors import ProviderNotConfiguredError
from ..models import ChatMessage, GenerationResult, LLMResponse, StreamingResponse


class UnconfiguredProvider(LLMProvider):
    """Provider identity with no wired backend."""

    def __init__(self, provider: str, model: str = "", reason: str | None = None, **_: Any):
        self._provider = provider
        self._model = model
        self._reason = reason or "no backend is available for this provider yet"

    @property
    def name(self) -> str:
        return self._provider

    @property
    def model(self) -> str:
        return self._model

    def _fail(self) -> ProviderNotConfiguredError:
        return ProviderNotConfiguredError(self._provider, self._reason)

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        raise self._fail()

    async def chat_completion_stream(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> StreamingResponse:
        raise self._fail()

    async def generate_image(
        self,
        prompt: str,
        model: str | None = None,
        **kwargs: Any
    ) -> GenerationResult:
        raise self._fail()

    async def close(self) -> None:
        pass
