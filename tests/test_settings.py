"""Unit tests for provider settings and credential rules."""
import pytest
from hypothesis import given
from hypothesis import strategies as st
from pydantic import SecretStr

from gamegen.llm import GeminiProvider, UnconfiguredProvider
from gamegen.studio import (
    CredentialLockedError,
    ProviderConfig,
    ProviderIdentity,
    StudioSettings,
    create_role_provider,
)
from gamegen.studio.settings import (
    DEFAULT_CODE_MODEL,
    DEFAULT_IMAGE_MODEL,
    DEFAULT_TEXT_MODEL,
    MASKED_SECRET,
    MASKED_USER_KEY,
)


class TestProviderConfig:
    """Tests for ProviderConfig credential rules."""

    def test_gemini_key_cannot_be_edited(self):
        config = ProviderConfig(model="gemini-2.5-flash")
        with pytest.raises(CredentialLockedError):
            config.with_api_key("user-key")

    def test_gemini_key_is_never_displayed(self):
        config = ProviderConfig(model="m")
        assert config.display_api_key() == MASKED_SECRET
        assert config.resolve_api_key(SecretStr("real-secret")) == "real-secret"
        assert "real-secret" not in repr(StudioSettings(gemini_api_key=SecretStr("real-secret")))

    def test_user_key_is_masked(self):
        config = ProviderConfig(provider=ProviderIdentity.OPENAI, model="gpt").with_api_key("sk-123")
        assert config.display_api_key() == MASKED_USER_KEY
        assert config.resolve_api_key(SecretStr("ignored")) == "sk-123"

    def test_empty_user_key_displays_nothing(self):
        config = ProviderConfig(provider=ProviderIdentity.GROK, model="grok")
        assert config.display_api_key() == ""
        assert not config.is_configured()

    @given(st.sampled_from(list(ProviderIdentity)), st.sampled_from(list(ProviderIdentity)), st.text(min_size=1))
    def test_switching_provider_keeps_model(self, start, target, model: str):
        """Property: switching provider identity never resets the model."""
        config = ProviderConfig(provider=start, model=model)
        assert config.with_provider(target).model == model

    def test_is_configured_uses_secret_for_gemini(self):
        config = ProviderConfig(model="m")
        assert not config.is_configured(None)
        assert config.is_configured(SecretStr("k"))

    def test_labels(self):
        assert ProviderIdentity.GEMINI.label == "Google Gemini"
        assert ProviderIdentity.CUSTOM.label == "Custom (Local LLM)"


class TestStudioSettings:
    """Tests for StudioSettings defaults and edits."""

    def test_defaults(self):
        settings = StudioSettings()
        assert settings.code_ai.model == DEFAULT_CODE_MODEL
        assert settings.asset_ai.model == DEFAULT_IMAGE_MODEL
        assert settings.asset_text_model == DEFAULT_TEXT_MODEL
        assert settings.code_ai.provider == ProviderIdentity.GEMINI

    def test_with_configs_keeps_secret(self):
        settings = StudioSettings(gemini_api_key=SecretStr("s"))
        edited = settings.with_configs(code_ai=settings.code_ai.with_model("other"))
        assert edited.code_ai.model == "other"
        assert edited.asset_ai == settings.asset_ai
        assert edited.gemini_api_key.get_secret_value() == "s"

    def test_secret_excluded_from_dump(self):
        settings = StudioSettings(gemini_api_key=SecretStr("s"))
        assert "gemini_api_key" not in settings.model_dump()


class TestCreateRoleProvider:
    """Tests for building the provider that serves one role."""

    def test_gemini_with_secret(self):
        provider = create_role_provider(ProviderConfig(model="gemini-2.5-flash"), SecretStr("key"))
        assert isinstance(provider, GeminiProvider)
        assert provider.model == "gemini-2.5-flash"

    def test_gemini_without_secret_is_unconfigured(self):
        provider = create_role_provider(ProviderConfig(model="gemini-2.5-flash"), None)
        assert isinstance(provider, UnconfiguredProvider)
        assert provider.name == "gemini"

    def test_unwired_identity(self):
        config = ProviderConfig(provider=ProviderIdentity.OPENAI, model="gpt-4o").with_api_key("sk")
        provider = create_role_provider(config, None)
        assert isinstance(provider, UnconfiguredProvider)
        assert provider.model == "gpt-4o"
