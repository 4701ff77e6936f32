"""CSS styles for the studio TUI.

Hides layout and styling decisions from the application logic.
Uses Textual CSS features: nesting, pseudo-classes, variables.

Layout: asset chat on the left, viewport over the code/asset tabs in the
center, code chat on the right, log panel across the bottom.
"""

APP_CSS = """
/* ============================================
   Main Screen Layout - 3 columns
   ============================================ */
Screen {
    layout: grid;
    grid-size: 3 2;
    grid-columns: 1fr 2fr 1fr;
    grid-rows: 1fr auto;
    background: $background;
}

#center-panel {
    height: 100%;
    padding: 0;
}

/* ============================================
   Chat Panels
   ============================================ */
ChatPanel {
    height: 100%;
    background: $panel;
    border: round $border;
    border-title-style: bold;
    border-title-align: left;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;

    &.-busy {
        border: round $warning;
        border-title-color: $warning;
    }
}

#code-chat {
    border-title-color: $secondary;
    &:focus-within {
        border: round $secondary;
    }
}

#asset-chat {
    border-title-color: $accent;
    &:focus-within {
        border: round $accent;
    }
}

.chat-turns {
    height: 1fr;
    scrollbar-gutter: stable;
}

/* ============================================
   Chat Input Bar - Text Entry + Send
   ============================================ */
ChatInputBar {
    height: 5;
    border: round $primary 60%;
    background: $panel;

    &:focus-within {
        border: round $primary;
    }
}

.chat-input {
    width: 1fr;
    height: 100%;
    border: none;
    padding: 0 1;
    background: transparent;

    &:focus {
        background: transparent;
    }
}

.send-btn {
    width: 10;
    height: 100%;
    margin: 0 0 0 1;
    min-width: 8;
    border: tall $success;
    background: $success;
    color: $background;
    text-style: bold;

    &:hover {
        background: $success-lighten-1;
        border: tall $success-lighten-1;
    }

    &:disabled {
        background: $surface;
        border: tall $border;
        color: $text-disabled;
    }
}

/* ============================================
   Chat Messages
   ============================================ */
.chat-message {
    width: 100%;
    height: auto;
    margin: 0 0 1 0;
    padding: 0 1;
    background: transparent;
}

.user-message {
    border-left: tall $success;
    background: $success 8%;

    & .message-header {
        color: $success;
        text-style: bold;
    }
}

.assistant-message {
    border-left: tall $primary;
    background: $primary 8%;

    & .message-header {
        color: $primary;
        text-style: bold;
    }
}

.message-header,
.message-content,
.message-image {
    height: auto;
    padding: 0;
    margin: 0;
}

.message-image {
    color: $accent;
}

/* ============================================
   Viewport
   ============================================ */
GameViewport {
    height: 1fr;
    background: $surface;
    border: round $border;
    border-title-color: $foreground;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
}

.viewport-toolbar {
    height: 3;
    background: $panel;
}

.play-btn {
    min-width: 10;
}

.resolution-select {
    width: 28;
    dock: right;
}

.viewport-scene {
    height: 1fr;
    content-align: center middle;
    background: $background;
}

/* ============================================
   Code / Asset tabs
   ============================================ */
#studio-tabs {
    height: 1fr;
}

#code-editor {
    height: 100%;
    border: none;
}

AssetGallery {
    height: 100%;
    border: round $border;
    border-title-color: $accent;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
}

.gallery-grid {
    grid-size: 4;
    grid-gutter: 1;
    height: auto;
    padding: 1;
}

.asset-card,
.asset-slot {
    height: 6;
    padding: 0 1;
    border: round $border;
}

.asset-card {
    background: $panel;
    border: round $accent 60%;
}

.asset-slot {
    background: $surface;
}

/* ============================================
   Debug/Log Panel
   ============================================ */
#debug-panel {
    column-span: 3;
    height: auto;
    min-height: 6;
    max-height: 14;
    background: $panel;
    border: round $warning 60%;
    border-title-color: $warning;
    border-title-style: bold;
    border-title-align: left;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    overflow-y: scroll;
    overflow-x: auto;
    scrollbar-gutter: stable;
}

/* ============================================
   Maximized Panel States
   ============================================ */
ChatPanel.-maximized {
    column-span: 3;
}

/* ============================================
   Notification Toasts
   ============================================ */
Toast {
    background: $surface;
    border: tall $border;
    padding: 0 1;

    &.-information {
        border: tall $primary;
        background: $primary 12%;
    }

    &.-error {
        border: tall $error;
        background: $error 12%;
    }

    &.-warning {
        border: tall $warning;
        background: $warning 12%;
    }
}

* {
    scrollbar-background: $panel;
    scrollbar-color: $surface-lighten-1;
    scrollbar-color-hover: $primary 50%;
    scrollbar-color-active: $primary;
    scrollbar-size: 1 1;
}

Header {
    background: $panel;
    color: $foreground;
    dock: top;
    height: 1;
}

HeaderTitle {
    color: $primary;
    text-style: bold;
}
"""
