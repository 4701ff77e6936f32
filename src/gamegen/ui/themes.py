"""Theme definitions for the TUI.

This module hides the design decisions about:
- Color palettes and visual appearance
- Theme variables (borders, scrollbars, etc.)

To add a new theme, define it here and register in the app.
"""

from textual.theme import Theme

# Dark engine-editor palette: charcoal panels, violet accent
STUDIO_DARK = Theme(
    name="gamegen-studio",
    primary="#8b5cf6",      # Violet - main accent
    secondary="#38bdf8",    # Sky - code assistant
    accent="#f59e0b",       # Amber - asset architect
    foreground="#e5e5e5",
    background="#121212",
    success="#22c55e",
    warning="#eab308",
    error="#ef4444",
    surface="#1e1e1e",
    panel="#1a1a1a",
    dark=True,
    variables={
        "block-cursor-foreground": "#121212",
        "block-cursor-background": "#a78bfa",
        "block-cursor-text-style": "bold",
        "block-hover-background": "#333333 20%",

        "input-cursor-background": "#e5e5e5",
        "input-cursor-foreground": "#121212",
        "input-selection-background": "#8b5cf6 30%",

        "border": "#3e3e42",
        "border-blurred": "#2d2d30",

        "scrollbar": "#2d2d30",
        "scrollbar-hover": "#3e3e42",
        "scrollbar-active": "#8b5cf6",
        "scrollbar-background": "#1a1a1a",
        "scrollbar-corner-color": "#1a1a1a",

        "footer-foreground": "#a3a3a3",
        "footer-background": "#121212",
        "footer-key-foreground": "#f59e0b",
        "footer-key-background": "#2d2d30",
        "footer-description-foreground": "#a3a3a3",

        "text-muted": "#737373",
        "text-disabled": "#525252",

        "button-foreground": "#e5e5e5",
        "button-color-foreground": "#121212",
        "button-focus-text-style": "bold reverse",
    },
)
