from .gemini import GeminiProvider
from .unconfigured import UnconfiguredProvider

__all__ = ["GeminiProvider", "UnconfiguredProvider"]
