"""Unit tests for prompt loading and assembly."""
import pytest

from gamegen.prompts import (
    EDITOR_CONTEXT_LIMIT,
    build_image_prompt,
    clear_cache,
    get_asset_consultant_prompt,
    get_code_system_prompt,
    load_prompt,
)


@pytest.fixture(autouse=True)
def fresh_prompt_cache():
    clear_cache()
    yield
    clear_cache()


class TestLoadPrompt:
    """Tests for load_prompt search order."""

    def test_packaged_prompts_exist(self):
        for name in ("code_assistant", "asset_consultant", "asset_image"):
            assert load_prompt(name).strip()

    def test_missing_prompt(self):
        with pytest.raises(FileNotFoundError):
            load_prompt("does_not_exist")

    def test_local_override(self, tmp_path, monkeypatch):
        (tmp_path / "prompts").mkdir()
        (tmp_path / "prompts" / "asset_image.txt").write_text("Pixel art of {request}")
        monkeypatch.chdir(tmp_path)

        assert build_image_prompt("a slime") == "Pixel art of a slime"


class TestPromptAssembly:
    """Tests for the prompt builders."""

    def test_code_prompt_embeds_editor(self):
        prompt = get_code_system_prompt("func _ready():\n    pass {braces}")
        assert "func _ready():\n    pass {braces}" in prompt
        assert "{editor_content}" not in prompt

    def test_code_prompt_truncates_editor(self):
        prompt = get_code_system_prompt("x" * (EDITOR_CONTEXT_LIMIT + 10))
        assert "x" * EDITOR_CONTEXT_LIMIT in prompt
        assert "x" * (EDITOR_CONTEXT_LIMIT + 1) not in prompt

    def test_image_prompt(self):
        prompt = build_image_prompt("cyberpunk sword sprite")
        assert prompt.startswith("Generate a high quality game asset: cyberpunk sword sprite.")

    def test_consultant_prompt(self):
        assert "Game Asset Consultant" in get_asset_consultant_prompt()
