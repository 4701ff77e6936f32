"""Modal screens for the TUI.

This module hides the design decisions about:
- Settings dialog appearance (CSS, layout)
- Which credential fields are editable and how they are masked
- Keyboard shortcuts for dialogs

To change how settings are edited, modify only this file.
"""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Select, Static

from ..studio import ProviderConfig, ProviderIdentity, StudioSettings
from ..studio.settings import MASKED_SECRET

ROLES = (
    ("code", "Code Assistant"),
    ("asset", "Asset Assistant"),
)

PROVIDER_OPTIONS = [(identity.label, identity.value) for identity in ProviderIdentity]


class SettingsScreen(ModalScreen[StudioSettings | None]):
    """Modal editor for the two provider configurations.

    Dismisses with the edited settings on save, or None on cancel.
    The Gemini credential field is disabled and shows a masked marker.
    """

    CSS = """
    SettingsScreen {
        align: center middle;
        background: $background 70%;
    }

    #settings-dialog {
        width: 72;
        height: auto;
        border: tall $primary;
        background: $surface;
        padding: 1 2;
    }

    #settings-title {
        width: 100%;
        text-align: center;
        text-style: bold;
        color: $primary;
        padding: 0 0 1 0;
        border-bottom: solid $border;
        margin-bottom: 1;
    }

    .role-section {
        height: auto;
        margin-bottom: 1;
        padding: 0 1;
        border: round $border;
    }

    .role-title {
        text-style: bold;
        color: $accent;
    }

    .role-section Input, .role-section Select {
        margin-bottom: 1;
    }

    #settings-buttons {
        width: 100%;
        height: 3;
        align: center middle;
    }

    #settings-buttons Button {
        margin: 0 1;
        min-width: 10;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=False),
    ]

    def __init__(self, settings: StudioSettings) -> None:
        super().__init__()
        self._settings = settings

    def _config(self, role: str) -> ProviderConfig:
        return self._settings.code_ai if role == "code" else self._settings.asset_ai

    def compose(self) -> ComposeResult:
        with Vertical(id="settings-dialog"):
            yield Static("AI Provider Settings", id="settings-title")
            for role, title in ROLES:
                config = self._config(role)
                with Vertical(classes="role-section"):
                    yield Static(title, classes="role-title")
                    yield Label("Provider")
                    yield Select(
                        PROVIDER_OPTIONS,
                        value=config.provider.value,
                        allow_blank=False,
                        id=f"{role}-provider",
                    )
                    yield Label("Model")
                    yield Input(value=config.model, id=f"{role}-model")
                    yield Label("API Key")
                    yield Input(password=True, id=f"{role}-key")
            with Horizontal(id="settings-buttons"):
                yield Button("Save", id="btn-save", variant="success")
                yield Button("Cancel", id="btn-cancel", variant="error")

    def on_mount(self) -> None:
        for role, _ in ROLES:
            config = self._config(role)
            self._sync_key_field(role, config.provider, config.api_key.get_secret_value())

    def _sync_key_field(self, role: str, provider: ProviderIdentity, user_key: str = "") -> None:
        key_input = self.query_one(f"#{role}-key", Input)
        if provider.secret_sourced:
            key_input.password = False
            key_input.value = MASKED_SECRET
            key_input.disabled = True
        else:
            key_input.password = True
            key_input.disabled = False
            if key_input.value == MASKED_SECRET or user_key:
                key_input.value = user_key

    def on_select_changed(self, event: Select.Changed) -> None:
        select_id = event.select.id or ""
        if select_id.endswith("-provider"):
            role = select_id[: -len("-provider")]
            self._sync_key_field(role, ProviderIdentity(event.value))

    def _edited_config(self, role: str) -> ProviderConfig:
        provider = ProviderIdentity(self.query_one(f"#{role}-provider", Select).value)
        model = self.query_one(f"#{role}-model", Input).value.strip()
        config = self._config(role).with_provider(provider)
        if model:
            config = config.with_model(model)
        if not provider.secret_sourced:
            config = config.with_api_key(self.query_one(f"#{role}-key", Input).value.strip())
        return config

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "btn-save":
            self.dismiss(
                self._settings.with_configs(
                    code_ai=self._edited_config("code"),
                    asset_ai=self._edited_config("asset"),
                )
            )
        elif event.button.id == "btn-cancel":
            self.dismiss(None)

    def action_cancel(self) -> None:
        self.dismiss(None)
