from .base import LLMProvider
from .errors import ProviderError, ProviderNotConfiguredError
from .factory import create_llm_provider
from .models import ChatMessage, GenerationResult, InlineImage, LLMResponse, StreamingResponse
from .providers import GeminiProvider, UnconfiguredProvider

__all__ = [
    "LLMProvider",
    "create_llm_provider",
    "ChatMessage",
    "GenerationResult",
    "InlineImage",
    "LLMResponse",
    "StreamingResponse",
    "ProviderError",
    "ProviderNotConfiguredError",
    "GeminiProvider",
    "UnconfiguredProvider",
]
