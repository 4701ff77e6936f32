"""Error types raised by LLM providers.

Callers catch ProviderError to handle any generation failure uniformly;
ProviderNotConfiguredError distinguishes a provider identity that the studio
exposes but does not wire to a backend.
"""


class ProviderError(Exception):
    """Base class for provider failures."""


class ProviderNotConfiguredError(ProviderError):
    """Raised when a provider identity has no working backend or credential."""

    def __init__(self, provider: str, reason: str | None = None):
        self.provider = provider
        message = f"Provider '{provider}' is not configured"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
