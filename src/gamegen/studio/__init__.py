"""Studio core: streamed-response interpretation and view state.

Module structure (each module hides a design decision):
- interpreter.py: how a fragment stream becomes display text and a code extraction
- intent.py: keyword heuristics read from request text
- assets.py: asset records, the library and the response classifier
- session.py: chat turns and the single-request-per-session rule
- settings.py: provider configs and credential rules
- events.py: listener hooks toward a presentation surface
- controller.py: request/response wiring across all of the above
"""

from .assets import AssetCategory, AssetLibrary, AssetRecord, classify_asset_response, decode_data_uri
from .controller import StudioController
from .events import NullListener, StudioListener, StudioTab
from .interpreter import (
    InterpretedFragment,
    StreamAccumulator,
    StreamedCodeBlockInterpreter,
    count_fence_markers,
    extract_code_block,
)
from .session import ChatRole, ChatSession, ChatTurn, SessionBusyError
from .settings import (
    CredentialLockedError,
    ProviderConfig,
    ProviderIdentity,
    StudioSettings,
    create_role_provider,
)

__all__ = [
    "AssetCategory",
    "AssetLibrary",
    "AssetRecord",
    "ChatRole",
    "ChatSession",
    "ChatTurn",
    "CredentialLockedError",
    "InterpretedFragment",
    "NullListener",
    "ProviderConfig",
    "ProviderIdentity",
    "SessionBusyError",
    "StreamAccumulator",
    "StreamedCodeBlockInterpreter",
    "StudioController",
    "StudioListener",
    "StudioSettings",
    "StudioTab",
    "classify_asset_response",
    "count_fence_markers",
    "create_role_provider",
    "decode_data_uri",
    "extract_code_block",
]
