from collections.abc import AsyncIterator
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class StreamingResponse:
    """Wrapper for streaming LLM responses that captures usage info.

    Acts as an async iterator for text fragments while storing token usage
    that becomes available at the end of the stream.

    Usage:
        stream = await provider.chat_completion_stream(messages)
        async for fragment in stream:
            print(fragment, end="")
        # After iteration, usage is available
        print(stream.usage)  # {"prompt_tokens": 100, "completion_tokens": 50, ...}
    """

    def __init__(self, async_iter: AsyncIterator[str]):
        """Initialize with an async iterator of text fragments.

        Args:
            async_iter: Async iterator yielding text fragments
        """
        self._iter = async_iter
        self._usage: dict[str, Any] | None = None

    @property
    def usage(self) -> dict[str, Any] | None:
        """Get token usage info (available after iteration completes)."""
        return self._usage

    def set_usage(self, usage: dict[str, Any]) -> None:
        """Set token usage info (called by provider at end of stream)."""
        self._usage = usage

    def __aiter__(self) -> "StreamingResponse":
        return self

    async def __anext__(self) -> str:
        return await self._iter.__anext__()


class ChatMessage(BaseModel):
    """A provider-facing chat message."""

    model_config = ConfigDict(frozen=True)

    role: str = Field(description="Role of the message sender: 'user', 'assistant', or 'system'")
    content: str = Field(description="Content of the message")


class LLMResponse(BaseModel):
    """Response from an LLM provider."""

    model_config = ConfigDict(frozen=True)

    content: str = Field(description="Generated text content")
    model: str = Field(description="Model that generated the response")
    usage: dict[str, int] | None = Field(
        default=None,
        description="Token usage information"
    )


class InlineImage(BaseModel):
    """Binary image payload returned inline by a generation call."""

    model_config = ConfigDict(frozen=True)

    mime_type: str = Field(description="Media type of the payload, e.g. image/png")
    data: str = Field(description="Base64-encoded payload")

    @property
    def data_uri(self) -> str:
        """Payload encoded for direct embedding in a display surface."""
        return f"data:{self.mime_type};base64,{self.data}"

    @property
    def size_bytes(self) -> int:
        """Approximate decoded size of the payload."""
        padding = self.data.count("=", max(len(self.data) - 2, 0))
        return len(self.data) * 3 // 4 - padding


class GenerationResult(BaseModel):
    """Result of a non-streaming generation call: text plus an optional image."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(description="Response text")
    image: InlineImage | None = Field(default=None, description="Inline image, if any")

    @property
    def image_url(self) -> str | None:
        return self.image.data_uri if self.image else None
