"""Text formatting utilities for the TUI.

Hides the details of how turns, images and assets are turned into
renderables.
"""

from rich.console import RenderableType
from rich.markdown import Markdown
from rich.text import Text

from ..studio import AssetRecord, ChatRole, ChatTurn, decode_data_uri
from .config import ASSET_NAME_MAX_LENGTH

THINKING_TEXT = "Thinking..."


def format_size(num_bytes: int) -> str:
    """Human-readable byte count."""
    if num_bytes < 1024:
        return f"{num_bytes} B"
    if num_bytes < 1024 * 1024:
        return f"{num_bytes / 1024:.1f} KB"
    return f"{num_bytes / (1024 * 1024):.1f} MB"


def describe_image(data_uri: str) -> str:
    """One-line description of an embedded image."""
    try:
        mime_type, payload = decode_data_uri(data_uri)
    except ValueError:
        return "[image]"
    return f"[{mime_type} | {format_size(len(payload))}]"


def turn_header(turn: ChatTurn, assistant_label: str = "Assistant") -> str:
    """Header line: direction icon, speaker and timestamp."""
    if turn.role == ChatRole.USER:
        icon, prefix = ">", "You"
    elif turn.role == ChatRole.SYSTEM:
        icon, prefix = "*", "System"
    else:
        icon, prefix = "<", assistant_label
    return f"{icon} {prefix} [{turn.created_at.strftime('%H:%M:%S')}]"


def render_turn_body(turn: ChatTurn) -> RenderableType:
    """Renderable for a turn's text; assistant text is rendered as markdown."""
    if turn.in_flight and not turn.text:
        return Text(THINKING_TEXT, style="dim italic")
    if turn.role == ChatRole.ASSISTANT:
        return Markdown(turn.text)
    return Text(turn.text, overflow="fold")


def truncate_name(name: str, limit: int = ASSET_NAME_MAX_LENGTH) -> str:
    return name if len(name) <= limit else name[: limit - 3] + "..."


def render_asset_card(record: AssetRecord) -> Text:
    """Gallery card: category badge, name, creation date and payload info."""
    text = Text()
    text.append(f"{record.category.short_label.upper()}\n", style="bold")
    text.append(f"{truncate_name(record.name)}\n")
    text.append(record.created_at.strftime("%Y-%m-%d"), style="dim")
    if record.content_ref:
        text.append(f"\n{describe_image(record.content_ref)}", style="dim")
    return text


VIEWPORT_STATUS = "Objects: 14 | Lights: 2 | Cameras: 1"


def render_viewport(playing: bool, resolution: str, width: int = 48, height: int = 11) -> Text:
    """Mock scene: a dashed placeholder in edit mode, a running banner in play mode."""
    width = max(width, 24)
    height = max(height, 7)
    if playing:
        lines = ["GAME RUNNING", "FPS: 60.01", f"[{resolution}]"]
        style = "bold cyan"
    else:
        lines = ["Scene View [Edit Mode]", "", "+"]
        style = "dim"

    text = Text()
    top = (height - len(lines)) // 2
    for row in range(height):
        idx = row - top
        if 0 <= idx < len(lines):
            text.append(lines[idx].center(width), style=style)
        elif row == height // 3:
            text.append("-" * width, style="dim magenta")
        else:
            text.append(" " * width)
        text.append("\n")
    text.append(VIEWPORT_STATUS, style="dim")
    return text
