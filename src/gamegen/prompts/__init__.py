"""Prompt management module.

Externalizes prompts to text files for easy customization.
Prompts can be overridden by placing files in the working directory.
"""

from functools import lru_cache
from pathlib import Path

# Default prompts directory (package location)
_PROMPTS_DIR = Path(__file__).parent

# Editor text sent as context is cut to this many characters
EDITOR_CONTEXT_LIMIT = 5000


@lru_cache(maxsize=16)
def load_prompt(name: str) -> str:
    """Load a prompt from file.

    Search order:
    1. Current working directory: ./prompts/{name}.txt
    2. Package prompts directory: gamegen/prompts/{name}.txt

    Args:
        name: Prompt name (without .txt extension)

    Returns:
        Prompt text content

    Raises:
        FileNotFoundError: If prompt file not found in any location
    """
    filename = f"{name}.txt"

    local_path = Path.cwd() / "prompts" / filename
    if local_path.exists():
        return local_path.read_text(encoding="utf-8")

    package_path = _PROMPTS_DIR / filename
    if package_path.exists():
        return package_path.read_text(encoding="utf-8")

    raise FileNotFoundError(
        f"Prompt '{name}' not found. Searched:\n"
        f"  - {local_path}\n"
        f"  - {package_path}"
    )


def get_code_system_prompt(editor_text: str) -> str:
    """System instruction for the code assistant, with the editor buffer as context."""
    # str.replace, not str.format: editor code is full of braces
    return load_prompt("code_assistant").replace(
        "{editor_content}", editor_text[:EDITOR_CONTEXT_LIMIT]
    )


def get_asset_consultant_prompt() -> str:
    """System instruction for text-only asset requests."""
    return load_prompt("asset_consultant").strip()


def build_image_prompt(request: str) -> str:
    """Prompt sent to the image model for an asset request."""
    return load_prompt("asset_image").strip().replace("{request}", request)


def clear_cache() -> None:
    """Clear the prompt cache (useful after modifying prompt files)."""
    load_prompt.cache_clear()


__all__ = [
    "EDITOR_CONTEXT_LIMIT",
    "build_image_prompt",
    "clear_cache",
    "get_asset_consultant_prompt",
    "get_code_system_prompt",
    "load_prompt",
]
