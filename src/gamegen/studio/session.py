"""Chat session state for one assistant panel.

Hides the turn bookkeeping:
- Append-only turns in display order
- The busy flag that admits a single outstanding request
- The in-flight assistant turn that grows while a response streams
"""

from datetime import datetime
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, Field

from ..llm.models import ChatMessage


class ChatRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class ChatTurn(BaseModel):
    """One entry in a chat session."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    role: ChatRole
    text: str = ""
    created_at: datetime = Field(default_factory=datetime.now)
    in_flight: bool = False
    images: list[str] = Field(default_factory=list, description="Attached image data URIs")
    failed: bool = Field(default=False, description="Text is a fixed error message, not a model reply")


class SessionBusyError(RuntimeError):
    """Raised when a send is attempted while a request is outstanding."""

    def __init__(self, session: str):
        self.session = session
        super().__init__(f"Session '{session}' already has a request in flight")


class ChatSession:
    """Ordered turns plus a busy flag.

    Lifecycle of one request:
        session.begin(text)          # user turn, busy set (or SessionBusyError)
        session.open_response()      # in-flight assistant turn (streaming only)
        session.update_response(t)   # repeated while fragments arrive
        session.close_response(t)   # final text, turn frozen
        session.release()            # busy cleared
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._turns: list[ChatTurn] = []
        self._busy = False
        self._pending: ChatTurn | None = None

    @property
    def turns(self) -> list[ChatTurn]:
        return list(self._turns)

    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def pending_turn(self) -> ChatTurn | None:
        return self._pending

    def add_turn(
        self,
        role: ChatRole,
        text: str,
        images: list[str] | None = None,
        failed: bool = False,
    ) -> ChatTurn:
        turn = ChatTurn(role=role, text=text, images=images or [], failed=failed)
        self._turns.append(turn)
        return turn

    def begin(self, text: str) -> ChatTurn:
        """Append the user's turn and mark the session busy."""
        if self._busy:
            raise SessionBusyError(self.name)
        self._busy = True
        return self.add_turn(ChatRole.USER, text)

    def open_response(self) -> ChatTurn:
        """Append an empty in-flight assistant turn for a streaming response."""
        if self._pending is not None:
            raise SessionBusyError(self.name)
        turn = ChatTurn(role=ChatRole.ASSISTANT, in_flight=True)
        self._turns.append(turn)
        self._pending = turn
        return turn

    def update_response(self, text: str) -> ChatTurn:
        """Replace the in-flight turn's text; the loading marker clears on first update."""
        if self._pending is None:
            raise RuntimeError(f"Session '{self.name}' has no response in flight")
        self._pending.text = text
        self._pending.in_flight = False
        return self._pending

    def close_response(self, text: str | None = None, failed: bool = False) -> ChatTurn:
        """Freeze the in-flight turn, optionally replacing its text.

        With ``failed`` set, the text is marked as an error message.
        """
        if self._pending is None:
            raise RuntimeError(f"Session '{self.name}' has no response in flight")
        turn = self._pending
        if text is not None:
            turn.text = text
        turn.failed = failed
        turn.in_flight = False
        self._pending = None
        return turn

    def release(self) -> None:
        self._busy = False

    def history_for_provider(self, before: ChatTurn | None = None) -> list[ChatMessage]:
        """Role/text pairs to send back as context.

        System turns and the in-flight turn are excluded. If ``before`` is
        given, only turns preceding it are included.
        """
        history = []
        for turn in self._turns:
            if before is not None and turn.id == before.id:
                break
            if turn.role == ChatRole.SYSTEM or turn is self._pending:
                continue
            history.append(ChatMessage(role=turn.role.value, content=turn.text))
        return history

    def clear(self) -> None:
        """Drop all turns. Refused while a request is outstanding."""
        if self._busy:
            raise SessionBusyError(self.name)
        self._turns.clear()

    def __len__(self) -> int:
        return len(self._turns)
