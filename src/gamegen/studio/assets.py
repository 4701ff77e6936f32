"""Asset library data model and the asset response classifier.

Hides how a generation result becomes a library entry:
- A result carrying an image is always a 2D sprite
- Otherwise keywords in the request pick a placeholder category
- Anything else produces no entry
"""

import base64
from datetime import datetime
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from ..llm.models import GenerationResult
from .intent import mentions_3d_model, mentions_audio

PLACEHOLDER_NAME_LENGTH = 15


class AssetCategory(str, Enum):
    """Closed set of library categories (also the gallery tabs)."""

    SPRITE_2D = "2D Sprite"
    MODEL_3D = "3D Model"
    AUDIO = "Audio/SFX"
    PARTICLE = "Particle Effect"
    ANIMATION = "Animation"

    @property
    def short_label(self) -> str:
        return self.value.split(" ")[0].split("/")[0]


class AssetRecord(BaseModel):
    """A generated asset. Never mutated after creation."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str
    category: AssetCategory
    content_ref: str | None = Field(default=None, description="Embedded payload, e.g. a data URI")
    created_at: datetime = Field(default_factory=datetime.now)


class AssetLibrary:
    """Generated assets, newest first."""

    def __init__(self) -> None:
        self._records: list[AssetRecord] = []

    def add(self, record: AssetRecord) -> AssetRecord:
        self._records.insert(0, record)
        return record

    def by_category(self, category: AssetCategory) -> list[AssetRecord]:
        return [r for r in self._records if r.category == category]

    def get(self, record_id: str) -> AssetRecord | None:
        for record in self._records:
            if record.id == record_id:
                return record
        return None

    @property
    def records(self) -> list[AssetRecord]:
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self):
        return iter(list(self._records))


def decode_data_uri(uri: str) -> tuple[str, bytes]:
    """Split a base64 data URI into (mime_type, payload bytes).

    Raises:
        ValueError: If the URI is not a base64 data URI
    """
    header, sep, payload = uri.partition(",")
    if not sep or not header.startswith("data:") or not header.endswith(";base64"):
        raise ValueError("Not a base64 data URI")
    mime_type = header[len("data:"):-len(";base64")] or "application/octet-stream"
    return mime_type, base64.b64decode(payload)


def classify_asset_response(
    request_text: str,
    result: GenerationResult,
    library_size: int = 0,
) -> AssetRecord | None:
    """Decide which library entry, if any, a generation round produces.

    Args:
        request_text: The user's original request
        result: What the provider returned
        library_size: Current library size, used to number generated sprites

    Returns:
        A new AssetRecord, or None when the round yields no asset
    """
    if result.image is not None:
        return AssetRecord(
            name=f"Generated Asset {library_size + 1}",
            category=AssetCategory.SPRITE_2D,
            content_ref=result.image.data_uri,
        )

    prefix = request_text[:PLACEHOLDER_NAME_LENGTH]
    if mentions_3d_model(request_text):
        return AssetRecord(name=f"3D: {prefix}", category=AssetCategory.MODEL_3D)
    if mentions_audio(request_text):
        return AssetRecord(name=f"SFX: {prefix}", category=AssetCategory.AUDIO)
    return None
