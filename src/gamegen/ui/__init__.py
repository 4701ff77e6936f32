"""Terminal UI module for gamegen.

Provides a Textual-based studio: two chat panels, a code editor, an asset
gallery, a mock viewport and a log panel.

Module structure (Parnas principle - each module hides a design decision):
- config.py: UI constants and log levels
- formatting.py: How turns, assets and the scene become renderables
- widgets.py: Custom widgets (chat panels, gallery, viewport, log panel)
- styles.py: CSS styling (layout decisions)
- themes.py: Color palettes and theme configuration
- screens.py: Modal dialogs (provider settings)
- callbacks.py: Controller integration (how TUI receives updates)
- app.py: Application orchestration (user interaction flow)
"""

from .app import StudioApp, run_studio_tui
from .callbacks import TUIListener
from .config import LogLevel
from .screens import SettingsScreen
from .widgets import AssetGallery, ChatInputBar, ChatPanel, DebugPanel, DebugPanelHandler, GameViewport

__all__ = [
    "AssetGallery",
    "ChatInputBar",
    "ChatPanel",
    "DebugPanel",
    "DebugPanelHandler",
    "GameViewport",
    "LogLevel",
    "SettingsScreen",
    "StudioApp",
    "TUIListener",
    "run_studio_tui",
]
