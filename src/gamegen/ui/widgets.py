"""Custom Textual widgets for the studio TUI.

Hides widget implementation details:
- Input history management
- Chat turn rendering and in-place streaming updates
- Asset gallery tabs and card grid
- Mock viewport toolbar and scene
- Log rendering, level filtering and the logging bridge
"""

import logging
import threading
from datetime import datetime

from rich.markup import escape
from textual.containers import Grid, Horizontal, Vertical, VerticalScroll
from textual.events import Click
from textual.message import Message
from textual.widgets import Button, RichLog, Select, Static, Tab, Tabs, TextArea

from ..studio import AssetCategory, AssetRecord, ChatRole, ChatTurn
from .config import (
    GALLERY_MIN_SLOTS,
    INPUT_HISTORY_MAX_SIZE,
    LOG_MAX_MESSAGE_LENGTH,
    LOG_TIMESTAMP_FORMAT,
    VIEWPORT_DEFAULT_RESOLUTION,
    VIEWPORT_RESOLUTIONS,
    LogLevel,
)
from .formatting import (
    describe_image,
    render_asset_card,
    render_turn_body,
    render_viewport,
    turn_header,
)


class ChatInputBar(Horizontal):
    """Chat input bar with TextArea and Send button."""

    class Submitted(Message):
        """Message sent when user submits input."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def __init__(self, *args, placeholder: str = "", **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._placeholder = placeholder
        self._history: list[str] = []
        self._history_index: int = -1

    def compose(self):
        text_area = TextArea(classes="chat-input", show_line_numbers=False)
        text_area.cursor_blink = False
        text_area.border_subtitle = self._placeholder
        yield text_area
        yield Button("Send", classes="send-btn", variant="success").with_tooltip(
            "Submit message (Ctrl+J)"
        )

    def on_mount(self) -> None:
        # Disable cursor line highlighting to remove visual artifacts
        self._text_area.highlight_cursor_line = False

    @property
    def _text_area(self) -> TextArea:
        return self.query_one(".chat-input", TextArea)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.has_class("send-btn"):
            event.stop()
            self._submit()

    def on_key(self, event) -> None:
        """Handle keyboard shortcuts.

        Note: ctrl+enter cannot work in terminals (terminal doesn't pass
        ctrl/shift modifiers with Enter). Use ctrl+j as the submit shortcut.
        """
        if event.key == "ctrl+j":
            self._submit()
            event.prevent_default()
            event.stop()
        elif event.key == "up" and self._is_cursor_at_start():
            self._navigate_history(-1)
            event.prevent_default()
            event.stop()
        elif event.key == "down" and self._is_cursor_at_end():
            self._navigate_history(1)
            event.prevent_default()
            event.stop()

    def _is_cursor_at_start(self) -> bool:
        return self._text_area.cursor_location == (0, 0)

    def _is_cursor_at_end(self) -> bool:
        text_area = self._text_area
        lines = text_area.text.split("\n")
        last_row = len(lines) - 1
        last_col = len(lines[-1]) if lines else 0
        return text_area.cursor_location == (last_row, last_col)

    def _navigate_history(self, direction: int) -> None:
        if not self._history:
            return
        text_area = self._text_area
        if direction < 0:  # Up
            if self._history_index == -1:
                self._history_index = len(self._history) - 1
            elif self._history_index > 0:
                self._history_index -= 1
        else:  # Down
            if self._history_index < len(self._history) - 1:
                self._history_index += 1
            else:
                self._history_index = -1
                text_area.text = ""
                return
        text_area.text = self._history[self._history_index]

    def _submit(self) -> None:
        text_area = self._text_area
        value = text_area.text.strip()
        if value:
            if not self._history or self._history[-1] != value:
                self._history.append(value)
                del self._history[:-INPUT_HISTORY_MAX_SIZE]
            self._history_index = -1
            text_area.text = ""
            self.post_message(self.Submitted(value))

    def set_enabled(self, enabled: bool) -> None:
        self.query_one(".send-btn", Button).disabled = not enabled

    def focus_input(self) -> None:
        """Focus the text input."""
        self._text_area.focus()


class TurnView(Vertical):
    """One chat turn. Streaming updates replace the body in place."""

    def __init__(self, turn: ChatTurn, assistant_label: str, *args, **kwargs) -> None:
        role_class = "user-message" if turn.role == ChatRole.USER else "assistant-message"
        super().__init__(*args, classes=f"chat-message {role_class}", **kwargs)
        self._turn = turn
        self._assistant_label = assistant_label
        self._body = Static(render_turn_body(turn), classes="message-content")

    @property
    def turn(self) -> ChatTurn:
        return self._turn

    def compose(self):
        yield Static(turn_header(self._turn, self._assistant_label), classes="message-header")
        yield self._body
        for image in self._turn.images:
            yield Static(describe_image(image), classes="message-image")

    def refresh_turn(self) -> None:
        self._body.update(render_turn_body(self._turn))

    def on_click(self, event: Click) -> None:
        """Copy the turn text to the clipboard."""
        event.stop()
        if self._turn.text:
            self.app.copy_to_clipboard(self._turn.text)
            self.app.notify("Copied (terminal)", timeout=2)


class ChatPanel(Vertical):
    """Chat panel for one session: header, scrolling turns and input bar."""

    ALLOW_MAXIMIZE = True

    class Submitted(Message):
        """Posted when the user submits text in this panel."""

        def __init__(self, session_key: str, value: str) -> None:
            super().__init__()
            self.session_key = session_key
            self.value = value

    def __init__(
        self,
        session_key: str,
        title: str,
        assistant_label: str,
        placeholder: str = "",
        *args,
        **kwargs,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.session_key = session_key
        self.border_title = title
        self._assistant_label = assistant_label
        self._placeholder = placeholder
        self._views: dict[str, TurnView] = {}
        self._busy = False

    def compose(self):
        yield VerticalScroll(classes="chat-turns")
        yield ChatInputBar(classes="chat-input-bar", placeholder=self._placeholder)

    @property
    def busy(self) -> bool:
        return self._busy

    def set_model(self, model: str) -> None:
        self.border_subtitle = model

    def add_turn(self, turn: ChatTurn) -> None:
        view = TurnView(turn, self._assistant_label)
        self._views[turn.id] = view
        scroll = self.query_one(".chat-turns", VerticalScroll)
        scroll.mount(view)
        scroll.scroll_end(animate=False)

    def update_turn(self, turn: ChatTurn) -> None:
        view = self._views.get(turn.id)
        if view is None:
            self.add_turn(turn)
            return
        view.refresh_turn()
        self.query_one(".chat-turns", VerticalScroll).scroll_end(animate=False)

    def set_busy(self, busy: bool) -> None:
        self._busy = busy
        self.set_class(busy, "-busy")
        self.query_one(ChatInputBar).set_enabled(not busy)

    def clear_turns(self) -> None:
        self._views.clear()
        self.query_one(".chat-turns", VerticalScroll).remove_children()

    def focus_input(self) -> None:
        self.query_one(ChatInputBar).focus_input()

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        event.stop()
        self.post_message(self.Submitted(self.session_key, event.value))


def _category_tab_id(category: AssetCategory) -> str:
    return "tab-" + category.name.lower()


class AssetGallery(Vertical):
    """Category tabs over a grid of asset cards, padded with empty slots."""

    BORDER_TITLE = "Asset Library"

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._records: list[AssetRecord] = []
        self._category = AssetCategory.SPRITE_2D

    @property
    def category(self) -> AssetCategory:
        return self._category

    def compose(self):
        yield Tabs(
            *(Tab(c.value, id=_category_tab_id(c)) for c in AssetCategory),
            classes="gallery-tabs",
        )
        yield Grid(classes="gallery-grid")

    def on_mount(self) -> None:
        self._render_cards()

    def on_tabs_tab_activated(self, event: Tabs.TabActivated) -> None:
        event.stop()
        for category in AssetCategory:
            if event.tab.id == _category_tab_id(category):
                self._category = category
                break
        self._render_cards()

    def set_records(self, records: list[AssetRecord]) -> None:
        """Replace the displayed records (newest first)."""
        self._records = list(records)
        if self.is_mounted:
            self._render_cards()

    def _render_cards(self) -> None:
        grid = self.query_one(".gallery-grid", Grid)
        grid.remove_children()
        shown = [r for r in self._records if r.category == self._category]
        cards: list[Static] = [Static(render_asset_card(r), classes="asset-card") for r in shown]
        for _ in range(max(0, GALLERY_MIN_SLOTS - len(shown))):
            cards.append(Static("", classes="asset-slot"))
        grid.mount(*cards)
        self.border_subtitle = f"{len(shown)} {self._category.short_label}"


class GameViewport(Vertical):
    """Mock game viewport with a play/stop toggle and resolution selector."""

    BORDER_TITLE = "Viewport"

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._playing = False
        self._resolution = VIEWPORT_DEFAULT_RESOLUTION

    @property
    def playing(self) -> bool:
        return self._playing

    def compose(self):
        with Horizontal(classes="viewport-toolbar"):
            yield Button("Play", classes="play-btn", variant="success")
            yield Select(
                VIEWPORT_RESOLUTIONS,
                value=VIEWPORT_DEFAULT_RESOLUTION,
                allow_blank=False,
                classes="resolution-select",
            )
        yield Static(classes="viewport-scene")

    def on_mount(self) -> None:
        self._render_scene()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.has_class("play-btn"):
            event.stop()
            self.toggle_playing()

    def on_select_changed(self, event: Select.Changed) -> None:
        event.stop()
        self._resolution = str(event.value)
        self._render_scene()

    def toggle_playing(self) -> bool:
        self._playing = not self._playing
        button = self.query_one(".play-btn", Button)
        button.label = "Stop" if self._playing else "Play"
        button.variant = "error" if self._playing else "success"
        self._render_scene()
        return self._playing

    def _render_scene(self) -> None:
        scene = self.query_one(".viewport-scene", Static)
        self.border_subtitle = "Playing" if self._playing else "Edit Mode"
        scene.update(render_viewport(self._playing, self._resolution))


class DebugPanel(RichLog):
    """Log panel for real-time tracing with level filtering.

    Shows timestamped log messages from all components.
    Supports standard log levels: DEBUG < INFO < WARNING < ERROR.
    Hidden by default, shown with --log-level flag or toggled with Ctrl+D.
    """

    BORDER_TITLE = "Log"
    BORDER_SUBTITLE = "Trace log"

    def __init__(self, *args, log_level: int = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(
            *args,
            markup=True,
            highlight=False,
            auto_scroll=True,
            wrap=False,
            **kwargs
        )
        self._log_level = log_level

    @property
    def log_level(self) -> int:
        """Current log level threshold."""
        return self._log_level

    @log_level.setter
    def log_level(self, level: int) -> None:
        self._log_level = level
        self._update_subtitle()

    def _update_subtitle(self) -> None:
        if self.display:
            self.border_subtitle = f"Level: {LogLevel.name(self._log_level)}"
        else:
            self.border_subtitle = "Hidden"

    def on_mount(self) -> None:
        """Hide by default."""
        self.display = False

    def log(
        self,
        component: str,
        message: str,
        level: int = LogLevel.DEBUG
    ) -> None:
        """Add a log entry if it meets the current level threshold.

        Args:
            component: Component name (TUI, CONTROLLER, GEMINI, etc.)
            message: Log message, written without markup parsing
            level: Log level (LogLevel.DEBUG, INFO, WARNING, ERROR)
        """
        level = LogLevel.normalize(level)
        if level < self._log_level:
            return

        timestamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)

        level_colors = {
            LogLevel.DEBUG: "dim white",
            LogLevel.INFO: "cyan",
            LogLevel.WARNING: "yellow",
            LogLevel.ERROR: "red",
        }
        component_colors = {
            "TUI": "cyan",
            "CONTROLLER": "green",
            "GEMINI": "magenta",
            "SETTINGS": "yellow",
            "FACTORY": "bright_blue",
        }
        level_color = level_colors.get(level, "white")
        comp_color = component_colors.get(component, "white")

        if len(message) > LOG_MAX_MESSAGE_LENGTH:
            message = message[:LOG_MAX_MESSAGE_LENGTH] + "..."

        self.write(
            f"[dim]{timestamp}[/] "
            f"[{level_color}]{LogLevel.name(level):<5}[/] "
            f"[{comp_color}]\\[{component}][/] {escape(message)}"
        )

    def debug(self, component: str, message: str) -> None:
        self.log(component, message, LogLevel.DEBUG)

    def info(self, component: str, message: str) -> None:
        self.log(component, message, LogLevel.INFO)

    def warning(self, component: str, message: str) -> None:
        self.log(component, message, LogLevel.WARNING)

    def error(self, component: str, message: str) -> None:
        self.log(component, message, LogLevel.ERROR)

    def show(self) -> None:
        self.display = True
        self._update_subtitle()

    def hide(self) -> None:
        self.display = False
        self.border_subtitle = "Hidden"

    def toggle(self) -> bool:
        """Toggle visibility. Returns new state."""
        if self.display:
            self.hide()
            return False
        self.show()
        return True

    def get_plain_text(self) -> str:
        """Get plain text content of the log for copying."""
        return "\n".join(line.text for line in self.lines)

    def on_click(self, event: Click) -> None:
        """Copy log content to clipboard when clicked."""
        event.stop()
        text = self.get_plain_text()
        if not text.strip():
            self.app.notify("Debug log is empty", timeout=2)
            return
        self.app.copy_to_clipboard(text)
        self.app.notify("Debug log copied (terminal)", timeout=2)


class DebugPanelHandler(logging.Handler):
    """Routes stdlib log records into a DebugPanel.

    The panel applies its own level threshold; the handler forwards
    everything it receives.
    """

    def __init__(self, panel: DebugPanel, app=None) -> None:
        super().__init__(level=logging.DEBUG)
        self._panel = panel
        self._app = app

    @staticmethod
    def component_for(record: logging.LogRecord) -> str:
        return record.name.rsplit(".", 1)[-1].upper()

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = record.getMessage()
            if record.exc_info and record.exc_info[1] is not None:
                message = f"{message} ({record.exc_info[1]})"
            component = self.component_for(record)
            if self._app is not None and self._app._thread_id != threading.get_ident():
                self._app.call_from_thread(self._panel.log, component, message, record.levelno)
            else:
                self._panel.log(component, message, record.levelno)
        except Exception:
            self.handleError(record)
