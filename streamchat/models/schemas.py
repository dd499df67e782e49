import secrets
import time
import uuid
from datetime import datetime
from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator


def generate_conversation_id() -> str:
    """Create a fresh conversation (thread) identifier.

    Format is ``thread_<epoch millis>_<9 random chars>``, which is what the
    agent backend expects for ``thread_id``.
    """
    return f"thread_{int(time.time() * 1000)}_{secrets.token_hex(5)[:9]}"


class Role(str, Enum):
    """Speaker of a chat message."""

    USER = "user"
    ASSISTANT = "assistant"


class SessionStatus(str, Enum):
    """Whether a turn is currently streaming into the session."""

    IDLE = "idle"
    STREAMING = "streaming"


class Message(BaseModel):
    """A single message in the conversation log.

    Attributes:
        id: Opaque unique token.
        role: Who wrote the message.
        text: Message body. Append-only while streaming, replaced on error.
        created_at: Creation timestamp.
        failed: Whether the turn producing this message failed.
    """

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    role: Role
    text: str = ""
    created_at: datetime = Field(default_factory=datetime.now)
    failed: bool = False


class ConversationSession(BaseModel):
    """Ordered message log plus the live-message pointer.

    Attributes:
        conversation_id: Backend thread identifier for memory continuity.
        messages: Messages in submission order.
        live_message_id: Assistant message currently receiving stream output.
        status: ``streaming`` while a turn is in flight.
        transient_status: Progress text shown before/between text deltas.
    """

    conversation_id: str = Field(default_factory=generate_conversation_id)
    messages: list[Message] = Field(default_factory=list)
    live_message_id: str | None = None
    status: SessionStatus = SessionStatus.IDLE
    transient_status: str | None = None

    def get_message(self, message_id: str) -> Message | None:
        for message in self.messages:
            if message.id == message_id:
                return message
        return None

    @property
    def live_message(self) -> Message | None:
        if self.live_message_id is None:
            return None
        return self.get_message(self.live_message_id)


# Decoded events. Ephemeral: consumed by the turn controller, never stored.


class EventKind(str, Enum):
    TEXT = "text"
    STATUS = "status"
    DONE = "done"
    MALFORMED = "malformed"


class TextEvent(BaseModel):
    """Answer delta to append to the live message."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[EventKind.TEXT] = EventKind.TEXT
    payload: str


class StatusEvent(BaseModel):
    """Transient progress update (e.g. a tool call in progress)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[EventKind.STATUS] = EventKind.STATUS
    payload: str


class DoneEvent(BaseModel):
    """End-of-answer marker."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[EventKind.DONE] = EventKind.DONE


class MalformedEvent(BaseModel):
    """A line that could not be decoded into a known event."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[EventKind.MALFORMED] = EventKind.MALFORMED
    raw: str


Event = TextEvent | StatusEvent | DoneEvent | MalformedEvent


# Wire records, one JSON object per NDJSON line.


class TextLine(BaseModel):
    type: Literal["text"]
    content: str


class StatusLine(BaseModel):
    type: Literal["status"]
    content: str


class DoneLine(BaseModel):
    type: Literal["done"]


StreamLine = Annotated[TextLine | StatusLine | DoneLine, Field(discriminator="type")]

stream_line_adapter: TypeAdapter[TextLine | StatusLine | DoneLine] = TypeAdapter(StreamLine)


# Outbound request payload.


class ChatInputMessage(BaseModel):
    """A message sent to the agent backend.

    Attributes:
        role: Speaker role, always ``user`` from this client.
        content: The message text.
    """

    role: Literal["user"] = "user"
    content: str = Field(..., min_length=1)

    @field_validator("content")
    @classmethod
    def reject_blank_content(cls, v: str) -> str:
        """Reject whitespace-only content."""
        if not v.strip():
            raise ValueError("content must not be blank")
        return v


class ChatInput(BaseModel):
    messages: list[ChatInputMessage] = Field(..., min_length=1)


class Configurable(BaseModel):
    thread_id: str = Field(..., min_length=1)


class RunConfig(BaseModel):
    configurable: Configurable


class ChatPayload(BaseModel):
    """Body of ``POST /chat``.

    Mirrors the agent runtime's invoke shape: the new input messages plus a
    ``thread_id`` that selects the server-side conversation memory.
    """

    input: ChatInput
    config: RunConfig

    @classmethod
    def for_message(cls, text: str, conversation_id: str) -> "ChatPayload":
        return cls(
            input=ChatInput(messages=[ChatInputMessage(content=text)]),
            config=RunConfig(configurable=Configurable(thread_id=conversation_id)),
        )


# Turn diagnostics.


class TurnState(str, Enum):
    """Lifecycle of a single request/response turn."""

    IDLE = "idle"
    SUBMITTING = "submitting"
    STREAMING = "streaming"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class TurnError(str, Enum):
    """Why a turn failed."""

    REQUEST_REJECTED = "request_rejected"
    TRANSPORT_FAULT = "transport_fault"
    UNEXPECTED = "unexpected"


class TurnResult(BaseModel):
    """Outcome of a settled turn.

    Attributes:
        state: Terminal state, ``succeeded`` or ``failed``.
        message_id: The assistant message the turn streamed into (None if the
            turn failed before the placeholder was appended).
        error: Failure category, if the turn failed.
        status_code: HTTP status of the response, when one arrived.
        reached_streaming: Whether the response body was ever read.
        events_applied: Number of non-malformed events applied.
        malformed_lines: Raw lines that failed to decode, in arrival order.
    """

    state: TurnState
    message_id: str | None = None
    error: TurnError | None = None
    status_code: int | None = None
    reached_streaming: bool = False
    events_applied: int = 0
    malformed_lines: list[str] = Field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.state is TurnState.SUCCEEDED
