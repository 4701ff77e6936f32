"""
GameGen Studio: a chat-driven game development studio in the terminal.

A code assistant streams scripts straight into the editor pane while an
asset architect generates sprites and plans models and sound, all backed by
Google Gemini.
"""

__version__ = "0.1.0"

from .studio import (
    AssetCategory,
    AssetRecord,
    StreamedCodeBlockInterpreter,
    StudioController,
    StudioSettings,
)

__all__ = [
    "AssetCategory",
    "AssetRecord",
    "StreamedCodeBlockInterpreter",
    "StudioController",
    "StudioSettings",
]
