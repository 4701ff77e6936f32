"""Provider factory functions for CLI.

Centralizes creation of settings, providers and the studio controller from
environment variables. Hides configuration details from command
implementations.
"""

import os

from pydantic import SecretStr
from rich.console import Console

from ..studio import ProviderConfig, StudioController, StudioSettings, create_role_provider
from ..studio.controller import DEFAULT_CODE
from ..studio.settings import DEFAULT_CODE_MODEL, DEFAULT_IMAGE_MODEL, DEFAULT_TEXT_MODEL

# Default console for output
_console = Console()


def get_gemini_api_key() -> str | None:
    """Gemini key from the environment.

    Environment variables:
        GEMINI_API_KEY: Gemini API key
        API_KEY: Fallback name for the same key
    """
    return os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY") or None


def load_settings() -> StudioSettings:
    """Create studio settings from environment variables.

    Environment variables:
        GAMEGEN_CODE_MODEL: Code assistant model (default: gemini-3-pro-preview)
        GAMEGEN_ASSET_MODEL: Image generation model (default: gemini-2.5-flash-image)
        GAMEGEN_TEXT_MODEL: Asset consultant text model (default: gemini-2.5-flash)
    """
    api_key = get_gemini_api_key()
    return StudioSettings(
        code_ai=ProviderConfig(model=os.getenv("GAMEGEN_CODE_MODEL", DEFAULT_CODE_MODEL)),
        asset_ai=ProviderConfig(model=os.getenv("GAMEGEN_ASSET_MODEL", DEFAULT_IMAGE_MODEL)),
        asset_text_model=os.getenv("GAMEGEN_TEXT_MODEL", DEFAULT_TEXT_MODEL),
        gemini_api_key=SecretStr(api_key) if api_key else None,
    )


def get_controller(
    console: Console | None = None,
    editor_text: str | None = None,
    welcome: bool = True,
) -> StudioController:
    """Create the studio controller with both role providers.

    A missing Gemini key is reported but not fatal; requests then fail
    with the fixed chat error messages.

    Args:
        console: Optional Rich console for output
        editor_text: Initial editor buffer (default: the starter script)
        welcome: Seed both chats with their greeting turns

    Returns:
        StudioController instance
    """
    con = console or _console
    settings = load_settings()
    if settings.gemini_api_key is None:
        con.print("[yellow]Warning: GEMINI_API_KEY not set, generation disabled[/yellow]")

    return StudioController(
        code_llm=create_role_provider(settings.code_ai, settings.gemini_api_key),
        asset_llm=create_role_provider(settings.asset_ai, settings.gemini_api_key),
        settings=settings,
        editor_text=DEFAULT_CODE if editor_text is None else editor_text,
        welcome=welcome,
    )
