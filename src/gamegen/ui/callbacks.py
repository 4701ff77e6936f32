"""Listener implementation connecting the studio controller to the TUI.

Hides the details of how the TUI receives updates from the controller.
Uses thread-safe methods so updates are valid from any worker.
"""

import threading
from typing import TYPE_CHECKING, Any

from ..studio import AssetRecord, ChatSession, ChatTurn, StudioListener, StudioTab

if TYPE_CHECKING:
    from textual.app import App

    from .widgets import AssetGallery, ChatPanel


class TUIListener(StudioListener):
    """Forwards controller state changes to the studio widgets."""

    def __init__(
        self,
        panels: dict[str, "ChatPanel"],
        gallery: "AssetGallery",
        set_editor: Any,
        set_tab: Any,
        records: Any,
        app: "App | None" = None,
    ) -> None:
        """
        Args:
            panels: Chat panels keyed by session name
            gallery: Asset gallery widget
            set_editor: Callable replacing the code editor text
            set_tab: Callable selecting the bottom tab
            records: Callable returning the library records, newest first
            app: Owning app, for cross-thread dispatch
        """
        self.panels = panels
        self.gallery = gallery
        self._set_editor = set_editor
        self._set_tab = set_tab
        self._records = records
        self.app = app

    def _call_thread_safe(self, func: Any, *args: Any, **kwargs: Any) -> None:
        """Call a function in a thread-safe manner for UI updates."""
        if self.app is not None and self.app._thread_id != threading.get_ident():
            self.app.call_from_thread(func, *args, **kwargs)
        else:
            func(*args, **kwargs)

    def _panel(self, session: ChatSession) -> "ChatPanel | None":
        return self.panels.get(session.name)

    def on_turn_added(self, session: ChatSession, turn: ChatTurn) -> None:
        panel = self._panel(session)
        if panel is not None:
            self._call_thread_safe(panel.add_turn, turn)

    def on_turn_updated(self, session: ChatSession, turn: ChatTurn) -> None:
        panel = self._panel(session)
        if panel is not None:
            self._call_thread_safe(panel.update_turn, turn)

    def on_busy_changed(self, session: ChatSession, busy: bool) -> None:
        panel = self._panel(session)
        if panel is not None:
            self._call_thread_safe(panel.set_busy, busy)

    def on_editor_changed(self, text: str) -> None:
        self._call_thread_safe(self._set_editor, text)

    def on_tab_changed(self, tab: StudioTab) -> None:
        self._call_thread_safe(self._set_tab, tab)

    def on_asset_added(self, record: AssetRecord) -> None:
        self._call_thread_safe(self.gallery.set_records, self._records())
