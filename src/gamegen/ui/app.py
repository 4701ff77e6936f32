"""Main Textual TUI application.

Orchestrates the studio widgets and routes user interaction to the
StudioController. Each chat session runs its requests in its own worker
group, so a code request and an asset request can be in flight together.
"""

import asyncio
import logging

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Footer, Header, TabbedContent, TabPane, TextArea

from ..studio import SessionBusyError, StudioController, StudioSettings, StudioTab
from .callbacks import TUIListener
from .config import PANEL_LOGGER_NAME, PROVIDER_BADGES, LogLevel
from .screens import SettingsScreen
from .styles import APP_CSS
from .themes import STUDIO_DARK
from .widgets import AssetGallery, ChatPanel, DebugPanel, DebugPanelHandler, GameViewport


class StudioApp(App):
    """Textual TUI for the game development studio."""

    CSS = APP_CSS
    TITLE = "GameGen Studio"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("ctrl+s", "open_settings", "Settings"),
        Binding("ctrl+t", "toggle_tab", "Code/Assets"),
        Binding("f5", "toggle_play", "Play/Stop"),
        Binding("ctrl+b", "toggle_maximize_code", "Max Code Chat"),
        Binding("ctrl+d", "toggle_debug", "Debug"),
    ]

    def __init__(self, controller: StudioController, log_level: str | None = None) -> None:
        super().__init__()
        self._controller = controller
        self._log_level = log_level
        self._log_handler: DebugPanelHandler | None = None

    @property
    def controller(self) -> StudioController:
        return self._controller

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)

        yield ChatPanel(
            "assets", "Asset Architect", "Architect",
            placeholder="Describe an asset...", id="asset-chat",
        )

        with Vertical(id="center-panel"):
            yield GameViewport(id="viewport")
            with TabbedContent(initial=StudioTab.CODE.value, id="studio-tabs"):
                with TabPane("Code Editor", id=StudioTab.CODE.value):
                    yield TextArea.code_editor(self._controller.editor_text, id="code-editor")
                with TabPane("Asset Library", id=StudioTab.ASSETS.value):
                    yield AssetGallery(id="gallery")

        yield ChatPanel(
            "code", "Code Assistant", "Assistant",
            placeholder="Ask for a script...", id="code-chat",
        )

        yield DebugPanel(id="debug-panel")
        yield Footer()

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self.register_theme(STUDIO_DARK)
        self.theme = STUDIO_DARK.name

        log_panel = self.query_one("#debug-panel", DebugPanel)
        self._attach_log_handler(log_panel)
        if self._log_level is not None:
            log_panel.log_level = LogLevel.from_string(self._log_level)
            log_panel.show()
            log_panel.info("TUI", f"Log panel enabled with level: {self._log_level.upper()}")

        panels = {
            self._controller.code_session.name: self.query_one("#code-chat", ChatPanel),
            self._controller.asset_session.name: self.query_one("#asset-chat", ChatPanel),
        }
        gallery = self.query_one("#gallery", AssetGallery)
        self._controller.set_listener(
            TUIListener(
                panels,
                gallery,
                set_editor=self._show_editor_text,
                set_tab=self._show_tab,
                records=lambda: self._controller.library.records,
                app=self,
            )
        )

        for session in (self._controller.code_session, self._controller.asset_session):
            for turn in session.turns:
                panels[session.name].add_turn(turn)
        gallery.set_records(self._controller.library.records)
        self._refresh_provider_labels()
        panels[self._controller.code_session.name].focus_input()

    def on_unmount(self) -> None:
        """Detach the log handler."""
        if self._log_handler is not None:
            logging.getLogger(PANEL_LOGGER_NAME).removeHandler(self._log_handler)
            self._log_handler = None

    def _attach_log_handler(self, log_panel: DebugPanel) -> None:
        self._log_handler = DebugPanelHandler(log_panel, app=self)
        logger = logging.getLogger(PANEL_LOGGER_NAME)
        logger.addHandler(self._log_handler)
        logger.setLevel(logging.DEBUG)
        # Console handlers would draw over the screen
        logger.propagate = False

    def _refresh_provider_labels(self) -> None:
        settings = self._controller.settings
        self.query_one("#code-chat", ChatPanel).set_model(settings.code_ai.model)
        self.query_one("#asset-chat", ChatPanel).set_model(settings.asset_ai.model)
        badge = PROVIDER_BADGES.get(settings.code_ai.provider.value, settings.code_ai.provider.label)
        self.sub_title = f"{badge} | assets: {settings.asset_ai.provider.label}"

    def _show_editor_text(self, text: str) -> None:
        editor = self.query_one("#code-editor", TextArea)
        if editor.text != text:
            editor.load_text(text)

    def _show_tab(self, tab: StudioTab) -> None:
        self.query_one("#studio-tabs", TabbedContent).active = tab.value

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        if event.text_area.id == "code-editor":
            self._controller.set_editor_text(event.text_area.text, notify=False)

    def on_tabbed_content_tab_activated(self, event: TabbedContent.TabActivated) -> None:
        pane_id = event.pane.id
        if pane_id in (StudioTab.CODE.value, StudioTab.ASSETS.value):
            tab = StudioTab(pane_id)
            if tab != self._controller.active_tab:
                self._controller.set_active_tab(tab)

    def on_chat_panel_submitted(self, event: ChatPanel.Submitted) -> None:
        """Handle user input submission from either chat panel."""
        if event.session_key == self._controller.code_session.name:
            self._run_code_request(event.value)
        else:
            self._run_asset_request(event.value)

    @work(group="code")
    async def _run_code_request(self, text: str) -> None:
        log_panel = self.query_one("#debug-panel", DebugPanel)
        log_panel.debug("TUI", f"Code request: '{text[:50]}'")
        try:
            await self._controller.send_code_message(text)
        except SessionBusyError:
            self.notify("Code assistant is still responding", severity="warning", timeout=3)
        except asyncio.CancelledError:
            self.notify("Cancelled", severity="warning", timeout=2)
            raise

    @work(group="assets")
    async def _run_asset_request(self, text: str) -> None:
        log_panel = self.query_one("#debug-panel", DebugPanel)
        log_panel.debug("TUI", f"Asset request: '{text[:50]}'")
        try:
            await self._controller.send_asset_message(text)
        except SessionBusyError:
            self.notify("Asset architect is still working", severity="warning", timeout=3)
        except asyncio.CancelledError:
            self.notify("Cancelled", severity="warning", timeout=2)
            raise

    def action_open_settings(self) -> None:
        """Open the provider settings dialog."""
        self.push_screen(SettingsScreen(self._controller.settings), callback=self._on_settings_closed)

    def _on_settings_closed(self, settings: StudioSettings | None) -> None:
        if settings is not None:
            self._apply_settings(settings)

    @work(group="settings", exclusive=True)
    async def _apply_settings(self, settings: StudioSettings) -> None:
        await self._controller.apply_settings(settings)
        self._refresh_provider_labels()
        self.notify("Settings saved", timeout=2)

    def action_toggle_tab(self) -> None:
        if self._controller.active_tab == StudioTab.CODE:
            self._controller.set_active_tab(StudioTab.ASSETS)
        else:
            self._controller.set_active_tab(StudioTab.CODE)

    def action_toggle_play(self) -> None:
        playing = self.query_one("#viewport", GameViewport).toggle_playing()
        self.notify("Playing" if playing else "Stopped", timeout=1)

    def action_toggle_maximize_code(self) -> None:
        """Toggle maximize for the code chat panel."""
        chat = self.query_one("#code-chat", ChatPanel)
        others = [self.query_one("#asset-chat"), self.query_one("#center-panel")]
        maximized = not chat.has_class("-maximized")
        chat.set_class(maximized, "-maximized")
        for widget in others:
            widget.display = not maximized

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)


async def run_studio_tui(controller: StudioController, log_level: str | None = None) -> None:
    """Run the studio TUI.

    Args:
        controller: Controller holding both providers and all view state
        log_level: Log level for panel (debug/info/warning/error), None to hide
    """
    app = StudioApp(controller, log_level=log_level)
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
    finally:
        await controller.code_llm.close()
        await controller.asset_llm.close()
