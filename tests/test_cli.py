"""Tests for the Typer command line."""
import pytest
from typer.testing import CliRunner

from conftest import FakeProvider
from gamegen.cli import app as cli_app
from gamegen.cli.providers import get_controller, get_gemini_api_key, load_settings
from gamegen.llm import GeminiProvider, GenerationResult, ProviderError, UnconfiguredProvider
from gamegen.studio import StudioController

runner = CliRunner()


@pytest.fixture
def no_keys(monkeypatch):
    for name in ("GEMINI_API_KEY", "API_KEY"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def scripted(monkeypatch):
    """Install a controller factory backed by fake providers."""

    def _install(code_llm=None, asset_llm=None):
        created = {}

        def _factory(console=None, editor_text=None, welcome=True):
            controller = StudioController(
                code_llm=code_llm or FakeProvider(),
                asset_llm=asset_llm or FakeProvider(),
                editor_text=editor_text or "",
                welcome=welcome,
            )
            created["controller"] = controller
            return controller

        monkeypatch.setattr(cli_app, "get_controller", _factory)
        return created

    return _install


class TestProviders:
    """Tests for environment driven construction."""

    def test_key_fallback(self, no_keys, monkeypatch):
        assert get_gemini_api_key() is None
        monkeypatch.setenv("API_KEY", "fallback")
        assert get_gemini_api_key() == "fallback"
        monkeypatch.setenv("GEMINI_API_KEY", "primary")
        assert get_gemini_api_key() == "primary"

    def test_model_overrides(self, no_keys, monkeypatch):
        monkeypatch.setenv("GAMEGEN_CODE_MODEL", "gemini-2.5-pro")
        monkeypatch.setenv("GAMEGEN_TEXT_MODEL", "gemini-2.0-flash")
        settings = load_settings()
        assert settings.code_ai.model == "gemini-2.5-pro"
        assert settings.asset_text_model == "gemini-2.0-flash"
        assert settings.gemini_api_key is None

    def test_controller_without_key(self, no_keys):
        controller = get_controller()
        assert isinstance(controller.code_llm, UnconfiguredProvider)
        assert isinstance(controller.asset_llm, UnconfiguredProvider)

    def test_controller_with_key(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "test-key")
        controller = get_controller(editor_text="", welcome=False)
        assert isinstance(controller.code_llm, GeminiProvider)
        assert controller.editor_text == ""
        assert len(controller.code_session) == 0


class TestCommands:
    """Tests for CLI commands."""

    def test_health_missing_key(self, no_keys):
        result = runner.invoke(cli_app.app, ["health"])
        assert result.exit_code == 1
        assert "missing" in result.output

    def test_health_with_key(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "test-key")
        result = runner.invoke(cli_app.app, ["health"])
        assert result.exit_code == 0
        assert "set" in result.output

    def test_settings_masks_key(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "super-secret-key")
        result = runner.invoke(cli_app.app, ["settings"])
        assert result.exit_code == 0
        assert "super-secret-key" not in result.output
        assert "Gemini" in result.output

    def test_code_writes_extracted_block(self, scripted, tmp_path):
        scripted(code_llm=FakeProvider(fragments=["Here:\n```ts\nlet speed = 5;\n```\n```"]))
        target = tmp_path / "player.ts"

        result = runner.invoke(cli_app.app, ["code", "write a movement script", "--file", str(target)])

        assert result.exit_code == 0
        assert target.read_text() == "let speed = 5;\n"

    def test_code_uses_file_as_context(self, scripted, tmp_path):
        code_llm = FakeProvider(fragments=["No code needed."])
        scripted(code_llm=code_llm)
        target = tmp_path / "enemy.ts"
        target.write_text("class Enemy {}")

        result = runner.invoke(cli_app.app, ["code", "explain", "-f", str(target)])

        assert result.exit_code == 0
        assert "class Enemy {}" in code_llm.stream_calls[0]["messages"][0].content
        assert target.read_text() == "class Enemy {}"

    def test_code_stream_failure_exits(self, scripted):
        scripted(code_llm=FakeProvider(fragments=["partial"], fail_after=0))
        result = runner.invoke(cli_app.app, ["code", "write code"])
        assert result.exit_code == 1

    def test_asset_writes_image(self, scripted, tmp_path, png_image):
        scripted(asset_llm=FakeProvider(image_result=GenerationResult(text="Done", image=png_image)))
        target = tmp_path / "sword.png"

        result = runner.invoke(cli_app.app, ["asset", "sword sprite", "--out", str(target)])

        assert result.exit_code == 0
        assert target.read_bytes().startswith(b"\x89PNG")
        assert "Generated Asset 1" in result.output

    def test_asset_failure_exits(self, scripted):
        scripted(asset_llm=FakeProvider(error=ProviderError("boom")))
        result = runner.invoke(cli_app.app, ["asset", "a laser sfx"])
        assert result.exit_code == 1

    def test_code_reply_with_error_wording_succeeds(self, scripted):
        scripted(code_llm=FakeProvider(fragments=["Error connecting to AI Service."]))
        result = runner.invoke(cli_app.app, ["code", "repeat the error text"])
        assert result.exit_code == 0

    def test_asset_reply_with_error_wording_succeeds(self, scripted):
        scripted(asset_llm=FakeProvider(reply="Failed to process asset request."))
        result = runner.invoke(cli_app.app, ["asset", "tell me about lighting"])
        assert result.exit_code == 0
