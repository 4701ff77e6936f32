from abc import ABC, abstractmethod
from typing import Any

from .models import ChatMessage, GenerationResult, LLMResponse, StreamingResponse


class LLMProvider(ABC):
    """Abstract base class for generation providers.

    This module hides the design decision of which generative backend serves
    the studio. Implementations must handle provider-specific details like:
    - API client setup and authentication
    - Request/response format conversion
    - Extraction of inline binary payloads (images)

    Providers are constructed explicitly and passed to whichever component
    issues requests, so tests can substitute a scripted fake.

    Supports async context manager protocol for proper resource cleanup:
        async with provider:
            response = await provider.chat_completion(messages)
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider identity (e.g. 'gemini')."""

    @property
    @abstractmethod
    def model(self) -> str:
        """Default model identifier."""

    @abstractmethod
    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        """Generate a non-streaming chat completion.

        Args:
            messages: Conversation history; 'system' messages become the system instruction
            model: Model to use (None uses provider's default)
            temperature: Sampling temperature (0.0 to 2.0)
            max_tokens: Maximum tokens to generate
            **kwargs: Provider-specific parameters

        Returns:
            LLMResponse containing generated content and metadata

        Raises:
            ProviderError: If the provider cannot serve the request
        """

    @abstractmethod
    async def chat_completion_stream(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> StreamingResponse:
        """Generate a streaming chat completion.

        Returns:
            StreamingResponse yielding text fragments. Errors may be raised
            either by this call or while iterating the stream.
        """

    @abstractmethod
    async def generate_image(
        self,
        prompt: str,
        model: str | None = None,
        **kwargs: Any
    ) -> GenerationResult:
        """Generate content from a single prompt, requesting inline image output.

        Returns:
            GenerationResult with the response text and zero or one inline image
        """

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""

    async def __aenter__(self) -> "LLMProvider":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup.

        Note: Suppresses "Event loop is closed" errors during cleanup.
        This is a known harmless race condition in httpx/anyio cleanup:
        https://github.com/encode/httpx/issues/914
        """
        try:
            await self.close()
        except RuntimeError as e:
            if "Event loop is closed" not in str(e):
                raise
