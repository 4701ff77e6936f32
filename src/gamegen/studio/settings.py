"""Provider settings for the two assistant roles.

Hides the credential rules:
- Gemini's key always comes from the environment secret and cannot be edited
- The Gemini key is never displayed in cleartext
- Switching provider identity keeps the model identifier
"""

import logging
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, SecretStr

from ..llm import LLMProvider, ProviderNotConfiguredError, UnconfiguredProvider, create_llm_provider

logger = logging.getLogger(__name__)

MASKED_SECRET = "ENV_VAR_SECURE_KEY_LOADED"
MASKED_USER_KEY = "********"

DEFAULT_CODE_MODEL = "gemini-3-pro-preview"
DEFAULT_IMAGE_MODEL = "gemini-2.5-flash-image"
DEFAULT_TEXT_MODEL = "gemini-2.5-flash"


class ProviderIdentity(str, Enum):
    GEMINI = "gemini"
    OPENAI = "openai"
    GROK = "grok"
    CUSTOM = "custom"

    @property
    def label(self) -> str:
        return _PROVIDER_LABELS[self]

    @property
    def secret_sourced(self) -> bool:
        """True if the credential is managed by the environment, not the user."""
        return self is ProviderIdentity.GEMINI


_PROVIDER_LABELS = {
    ProviderIdentity.GEMINI: "Google Gemini",
    ProviderIdentity.OPENAI: "OpenAI (GPT)",
    ProviderIdentity.GROK: "xAI (Grok)",
    ProviderIdentity.CUSTOM: "Custom (Local LLM)",
}


class CredentialLockedError(ValueError):
    """Raised on an attempt to edit a secret-sourced credential."""

    def __init__(self, provider: ProviderIdentity):
        self.provider = provider
        super().__init__(f"The {provider.label} credential is managed by the environment")


class ProviderConfig(BaseModel):
    """Provider identity, model and credential for one assistant role."""

    model_config = ConfigDict(frozen=True)

    provider: ProviderIdentity = ProviderIdentity.GEMINI
    model: str
    api_key: SecretStr = Field(default=SecretStr(""), description="User key for non-Gemini providers")
    base_url: str | None = None

    def with_provider(self, provider: ProviderIdentity) -> "ProviderConfig":
        return self.model_copy(update={"provider": provider})

    def with_model(self, model: str) -> "ProviderConfig":
        return self.model_copy(update={"model": model})

    def with_api_key(self, api_key: str) -> "ProviderConfig":
        if self.provider.secret_sourced:
            raise CredentialLockedError(self.provider)
        return self.model_copy(update={"api_key": SecretStr(api_key)})

    def display_api_key(self) -> str:
        if self.provider.secret_sourced:
            return MASKED_SECRET
        return MASKED_USER_KEY if self.api_key.get_secret_value() else ""

    def resolve_api_key(self, secret: SecretStr | None) -> str:
        """Credential to hand to the provider client."""
        if self.provider.secret_sourced:
            return secret.get_secret_value() if secret else ""
        return self.api_key.get_secret_value()

    def is_configured(self, secret: SecretStr | None = None) -> bool:
        return bool(self.model) and bool(self.resolve_api_key(secret))


class StudioSettings(BaseModel):
    """Both assistant configurations plus the environment-held Gemini secret."""

    model_config = ConfigDict(frozen=True)

    code_ai: ProviderConfig = Field(default_factory=lambda: ProviderConfig(model=DEFAULT_CODE_MODEL))
    asset_ai: ProviderConfig = Field(default_factory=lambda: ProviderConfig(model=DEFAULT_IMAGE_MODEL))
    asset_text_model: str = DEFAULT_TEXT_MODEL
    gemini_api_key: SecretStr | None = Field(default=None, exclude=True)

    def with_configs(
        self,
        code_ai: ProviderConfig | None = None,
        asset_ai: ProviderConfig | None = None,
    ) -> "StudioSettings":
        """Copy with edited role configs; the secret is carried over untouched."""
        update = {}
        if code_ai is not None:
            update["code_ai"] = code_ai
        if asset_ai is not None:
            update["asset_ai"] = asset_ai
        return self.model_copy(update=update)


def create_role_provider(config: ProviderConfig, secret: SecretStr | None) -> LLMProvider:
    """Build the provider serving one role from its config.

    A missing credential yields an UnconfiguredProvider, so the studio stays
    usable and the failure surfaces on the first request instead.
    """
    kwargs = {"model": config.model}
    api_key = config.resolve_api_key(secret)
    if api_key:
        kwargs["api_key"] = api_key
    try:
        return create_llm_provider(config.provider.value, **kwargs)
    except ProviderNotConfiguredError as e:
        logger.warning("%s", e)
        return UnconfiguredProvider(config.provider.value, model=config.model, reason="missing credential")
