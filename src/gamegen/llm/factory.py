from typing import Any

from .base import LLMProvider
from .errors import ProviderNotConfiguredError
from .providers import GeminiProvider, UnconfiguredProvider

# Identities the settings surface offers but no backend serves yet
UNWIRED_PROVIDERS = ("openai", "grok", "custom")


def create_llm_provider(provider: str, **config: Any) -> LLMProvider:
    """Create a provider instance.

    This factory function hides the instantiation logic for different providers.
    Only Gemini is wired to a real backend; the remaining identities return an
    UnconfiguredProvider that fails fast on every call.

    Args:
        provider: Provider identity ('gemini', 'openai', 'grok', 'custom')
        **config: Provider-specific configuration
            For Gemini:
                - api_key: str (required)
                - model: str (default: 'gemini-2.5-flash')
            For unwired identities:
                - model: str (kept for display only)

    Returns:
        Initialized provider instance

    Raises:
        ValueError: If provider identity is not known
        ProviderNotConfiguredError: If Gemini is requested without an API key

    Examples:
        >>> provider = create_llm_provider(
        ...     "gemini",
        ...     api_key="...",
        ...     model="gemini-3-pro-preview"
        ... )
    """
    provider_lower = provider.lower()

    if provider_lower == "gemini":
        if not config.get("api_key"):
            raise ProviderNotConfiguredError("gemini", "GEMINI_API_KEY is not set")
        return GeminiProvider(**config)

    if provider_lower in UNWIRED_PROVIDERS:
        return UnconfiguredProvider(provider_lower, model=config.get("model", ""))

    raise ValueError(
        f"Unsupported provider: {provider}. "
        f"Supported providers: gemini, {', '.join(UNWIRED_PROVIDERS)}"
    )
