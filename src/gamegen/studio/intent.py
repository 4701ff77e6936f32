"""Keyword predicates that read intent from free-form request text.

Both the code-extraction gate and the asset classifier use naive,
case-insensitive substring matching. Keeping each rule behind a named
predicate lets a structured intent signal replace it later without touching
the callers' control flow.
"""

import re
from collections.abc import Callable

CODE_INTENT_KEYWORDS = ("code", "script")
MODEL_3D_KEYWORDS = ("3d model",)
AUDIO_KEYWORDS = ("sound", "sfx")

_IMAGE_REQUEST_PATTERN = re.compile(
    r"sprite|texture|image|background|icon|ui|character|concept",
    re.IGNORECASE,
)

IntentPredicate = Callable[[str], bool]


def _contains_any(text: str, keywords: tuple[str, ...]) -> bool:
    lowered = text.lower()
    return any(keyword in lowered for keyword in keywords)


def has_code_intent(text: str) -> bool:
    """True if the request asks for code ("code" or "script" anywhere)."""
    return _contains_any(text, CODE_INTENT_KEYWORDS)


def wants_image(text: str) -> bool:
    """True if an asset request should be served by the image model."""
    return _IMAGE_REQUEST_PATTERN.search(text) is not None


def mentions_3d_model(text: str) -> bool:
    return _contains_any(text, MODEL_3D_KEYWORDS)


def mentions_audio(text: str) -> bool:
    return _contains_any(text, AUDIO_KEYWORDS)
