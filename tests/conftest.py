"""Pytest configuration and shared fixtures."""
import base64
import os
from typing import Any

import pytest

from gamegen.llm import (
    ChatMessage,
    GenerationResult,
    InlineImage,
    LLMProvider,
    LLMResponse,
    ProviderError,
    StreamingResponse,
)
from gamegen.studio import StudioController, StudioListener


class FakeProvider(LLMProvider):
    """Scripted provider that records every call.

    Args:
        fragments: Text fragments yielded by chat_completion_stream
        fail_after: Raise ProviderError after yielding this many fragments
        reply: Content returned by chat_completion
        image_result: Result returned by generate_image
        error: Raised by every non-streaming call when set
    """

    def __init__(
        self,
        fragments: list[str] | None = None,
        fail_after: int | None = None,
        reply: str = "",
        image_result: GenerationResult | None = None,
        error: Exception | None = None,
        model: str = "fake-model",
    ) -> None:
        self.fragments = fragments or []
        self.fail_after = fail_after
        self.reply = reply
        self.image_result = image_result or GenerationResult(text="Here is your generated asset.")
        self.error = error
        self._model = model
        self.stream_calls: list[dict[str, Any]] = []
        self.completion_calls: list[dict[str, Any]] = []
        self.image_calls: list[dict[str, Any]] = []
        self.closed = False

    @property
    def name(self) -> str:
        return "fake"

    @property
    def model(self) -> str:
        return self._model

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        self.completion_calls.append({"messages": messages, "model": model, "temperature": temperature})
        if self.error is not None:
            raise self.error
        return LLMResponse(content=self.reply, model=model or self._model)

    async def chat_completion_stream(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> StreamingResponse:
        self.stream_calls.append({"messages": messages, "model": model, "temperature": temperature})

        async def _gen():
            for i, fragment in enumerate(self.fragments):
                if self.fail_after is not None and i >= self.fail_after:
                    raise ProviderError("connection reset")
                yield fragment
            if self.fail_after is not None and self.fail_after >= len(self.fragments):
                raise ProviderError("connection reset")

        return StreamingResponse(_gen())

    async def generate_image(
        self,
        prompt: str,
        model: str | None = None,
        **kwargs: Any
    ) -> GenerationResult:
        self.image_calls.append({"prompt": prompt, "model": model})
        if self.error is not None:
            raise self.error
        return self.image_result

    async def close(self) -> None:
        self.closed = True


class RecordingListener(StudioListener):
    """Listener that records every hook invocation as (hook, payload)."""

    def __init__(self) -> None:
        self.events: list[tuple[str, Any]] = []

    def on_turn_added(self, session, turn) -> None:
        self.events.append(("turn_added", (session.name, turn.role.value, turn.text)))

    def on_turn_updated(self, session, turn) -> None:
        self.events.append(("turn_updated", (session.name, turn.text)))

    def on_busy_changed(self, session, busy) -> None:
        self.events.append(("busy", (session.name, busy)))

    def on_editor_changed(self, text) -> None:
        self.events.append(("editor", text))

    def on_tab_changed(self, tab) -> None:
        self.events.append(("tab", tab))

    def on_asset_added(self, record) -> None:
        self.events.append(("asset", record.name))

    def of(self, hook: str) -> list[Any]:
        return [payload for name, payload in self.events if name == hook]


@pytest.fixture
def png_image():
    """Small inline PNG payload."""
    raw = b"\x89PNG\r\n\x1a\nfake-image-bytes"
    return InlineImage(mime_type="image/png", data=base64.b64encode(raw).decode("ascii"))


@pytest.fixture
def listener():
    return RecordingListener()


@pytest.fixture
def make_controller(listener):
    """Build a controller around two fake providers."""

    def _make(code_llm: FakeProvider | None = None, asset_llm: FakeProvider | None = None, **kwargs):
        return StudioController(
            code_llm=code_llm or FakeProvider(),
            asset_llm=asset_llm or FakeProvider(),
            listener=listener,
            **kwargs,
        )

    return _make


@pytest.fixture(scope="session")
def api_keys():
    """Return API keys from environment."""
    return {
        "gemini": os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY"),
    }
