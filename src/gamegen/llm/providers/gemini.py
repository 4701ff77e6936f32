"""Google Gemini provider implementation.

Uses the official Google GenAI SDK for async chat completions, streamed code
generation and inline image generation.
Reference: https://github.com/googleapis/python-genai

Note: Gemini can return empty responses due to safety filtering or service issues.
Non-streaming text calls retry a few times before giving up.
"""

import asyncio
import base64
import logging
from collections.abc import AsyncIterator, Callable
from typing import Any

from google import genai
from google.genai import errors, types

from ..base import LLMProvider
from ..errors import ProviderError
from ..models import ChatMessage, GenerationResult, InlineImage, LLMResponse, StreamingResponse

logger = logging.getLogger(__name__)

# Relaxed safety settings to avoid blocking game code (weapons, combat, etc.)
DEFAULT_SAFETY_SETTINGS = [
    types.SafetySetting(category="HARM_CATEGORY_HARASSMENT", threshold="BLOCK_ONLY_HIGH"),
    types.SafetySetting(category="HARM_CATEGORY_HATE_SPEECH", threshold="BLOCK_ONLY_HIGH"),
    types.SafetySetting(category="HARM_CATEGORY_SEXUALLY_EXPLICIT", threshold="BLOCK_ONLY_HIGH"),
    types.SafetySetting(category="HARM_CATEGORY_DANGEROUS_CONTENT", threshold="BLOCK_ONLY_HIGH"),
]

DEFAULT_IMAGE_TEXT = "Here is your generated asset."


class GeminiProvider(LLMProvider):
    """Google Gemini provider implementation.

    Hidden design decisions:
    - Google GenAI client initialization
    - Message format conversion ('assistant' turns become 'model' contents)
    - Retry logic for empty responses (known Gemini issue)
    - Inline image payload extraction into data URIs
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash",
        max_retries: int = 3,
        **client_kwargs: Any
    ):
        """Initialize Gemini provider.

        Args:
            api_key: Google AI API key
            model: Default model (gemini-3-pro-preview, gemini-2.5-flash, gemini-2.5-flash-image)
            max_retries: Max retries for empty responses (default 3)
            **client_kwargs: Additional kwargs for Client
        """
        self._model = model
        self._max_retries = max_retries
        self._client = genai.Client(api_key=api_key, **client_kwargs)

    @property
    def name(self) -> str:
        return "gemini"

    @property
    def model(self) -> str:
        return self._model

    def _convert_messages(self, messages: list[ChatMessage]) -> tuple[str | None, list[types.Content]]:
        """Convert ChatMessage list to Gemini format.

        Returns:
            Tuple of (system_instruction, contents)
        """
        system_parts = []
        contents = []

        for msg in messages:
            if msg.role == "system":
                system_parts.append(msg.content)
            elif msg.role == "user":
                contents.append(types.Content(
                    role="user",
                    parts=[types.Part(text=msg.content)]
                ))
            elif msg.role == "assistant":
                contents.append(types.Content(
                    role="model",
                    parts=[types.Part(text=msg.content)]
                ))

        system_instruction = "\n\n".join(system_parts) if system_parts else None
        return system_instruction, contents

    def _build_config(
        self,
        system_instruction: str | None,
        temperature: float,
        max_tokens: int | None,
        **kwargs: Any
    ) -> types.GenerateContentConfig:
        # Disable automatic function detection; generated game code is full of call-like syntax
        tool_config = types.ToolConfig(
            function_calling_config=types.FunctionCallingConfig(mode="NONE")
        )
        config = types.GenerateContentConfig(
            temperature=temperature,
            system_instruction=system_instruction,
            safety_settings=DEFAULT_SAFETY_SETTINGS,
            tool_config=tool_config,
            **kwargs
        )
        if max_tokens is not None:
            config.max_output_tokens = max_tokens
        return config

    def _extract_content(self, response) -> str:
        """Extract text content from a Gemini response, handling empty responses."""
        if response.candidates:
            candidate = response.candidates[0]
            if candidate.content and candidate.content.parts:
                texts = [part.text for part in candidate.content.parts if getattr(part, "text", None)]
                if texts:
                    return "".join(texts)

        try:
            return response.text or ""
        except (ValueError, AttributeError):
            return ""

    def _extract_image(self, response) -> GenerationResult:
        """Split a response into text and the first inline image part."""
        text = DEFAULT_IMAGE_TEXT
        image = None

        if response.candidates:
            candidate = response.candidates[0]
            parts = candidate.content.parts if candidate.content and candidate.content.parts else []
            for part in parts:
                inline = getattr(part, "inline_data", None)
                if inline is not None and inline.data:
                    data = inline.data
                    if isinstance(data, bytes):
                        data = base64.b64encode(data).decode("ascii")
                    image = InlineImage(mime_type=inline.mime_type or "image/png", data=data)
                elif getattr(part, "text", None):
                    text = part.text

        return GenerationResult(text=text, image=image)

    @staticmethod
    def _usage(metadata) -> dict[str, int] | None:
        if not metadata:
            return None
        return {
            "prompt_tokens": metadata.prompt_token_count or 0,
            "completion_tokens": metadata.candidates_token_count or 0,
            "total_tokens": metadata.total_token_count or 0,
        }

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        """Generate a chat completion using Google Gemini.

        Includes retry logic for empty responses (known Gemini service issue).
        """
        model_to_use = model or self._model
        system_instruction, contents = self._convert_messages(messages)
        config = self._build_config(system_instruction, temperature, max_tokens, **kwargs)

        content = ""
        usage = None

        for attempt in range(self._max_retries):
            try:
                response = await self._client.aio.models.generate_content(
                    model=model_to_use,
                    contents=contents,
                    config=config
                )
            except errors.APIError as e:
                raise ProviderError(f"Gemini request failed: {e}") from e

            usage = self._usage(response.usage_metadata)
            content = self._extract_content(response)

            if content:
                break

            logger.warning("Empty response from %s (attempt %d/%d)", model_to_use, attempt + 1, self._max_retries)
            if attempt < self._max_retries - 1:
                await asyncio.sleep(0.5 * (attempt + 1))

        return LLMResponse(
            content=content,
            model=model_to_use,
            usage=usage
        )

    async def chat_completion_stream(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> StreamingResponse:
        """Generate a streaming chat completion using Google Gemini."""
        model_to_use = model or self._model
        system_instruction, contents = self._convert_messages(messages)
        config = self._build_config(system_instruction, temperature, max_tokens, **kwargs)

        # The generator runs only once iterated, after response is bound
        def record_usage(usage: dict[str, int]) -> None:
            response.set_usage(usage)

        response = StreamingResponse(
            self._stream_generator(model_to_use, contents, config, record_usage)
        )
        return response

    async def _stream_generator(
        self,
        model: str,
        contents: list[types.Content],
        config: types.GenerateContentConfig,
        on_usage: Callable[[dict[str, int]], None],
    ) -> AsyncIterator[str]:
        """Internal generator that yields text and reports usage from chunks."""
        usage = None

        try:
            stream = await self._client.aio.models.generate_content_stream(
                model=model, contents=contents, config=config
            )
            async for chunk in stream:
                if chunk.usage_metadata:
                    usage = self._usage(chunk.usage_metadata)

                text = self._extract_content(chunk)
                if text:
                    yield text
        except errors.APIError as e:
            raise ProviderError(f"Gemini stream failed: {e}") from e

        if usage:
            on_usage(usage)
            logger.debug("Stream usage for %s: %s", model, usage)

    async def generate_image(
        self,
        prompt: str,
        model: str | None = None,
        **kwargs: Any
    ) -> GenerationResult:
        """Generate an asset image with Gemini's image-capable model."""
        model_to_use = model or self._model
        config = types.GenerateContentConfig(
            response_modalities=["TEXT", "IMAGE"],
            **kwargs
        )

        try:
            response = await self._client.aio.models.generate_content(
                model=model_to_use,
                contents=[types.Content(role="user", parts=[types.Part(text=prompt)])],
                config=config
            )
        except errors.APIError as e:
            raise ProviderError(f"Gemini image request failed: {e}") from e

        return self._extract_image(response)

    async def close(self) -> None:
        """Close the Gemini client.

        Note: The Google GenAI client doesn't require explicit closing,
        but we implement this for interface consistency.
        """
        pass
