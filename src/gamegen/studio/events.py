"""Listener interface between the studio controller and a presentation surface.

Hides how state changes reach the screen. The controller calls these hooks
as it mutates sessions, the editor buffer, the active tab and the asset
library; the default implementation ignores everything, so a headless
caller (CLI, tests) only overrides what it needs.
"""

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .assets import AssetRecord
    from .session import ChatSession, ChatTurn


class StudioTab(str, Enum):
    """Selection of the bottom tabbed panel."""

    CODE = "code"
    ASSETS = "assets"


class StudioListener:
    """No-op base listener."""

    def on_turn_added(self, session: "ChatSession", turn: "ChatTurn") -> None:
        pass

    def on_turn_updated(self, session: "ChatSession", turn: "ChatTurn") -> None:
        pass

    def on_busy_changed(self, session: "ChatSession", busy: bool) -> None:
        pass

    def on_editor_changed(self, text: str) -> None:
        pass

    def on_tab_changed(self, tab: StudioTab) -> None:
        pass

    def on_asset_added(self, record: "AssetRecord") -> None:
        pass


class NullListener(StudioListener):
    """Listener for headless callers; ignores every hook."""
