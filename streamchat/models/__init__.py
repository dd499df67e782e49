"""Pydantic models for conversation state, stream events and wire payloads.

Provides type safety and validation at every boundary of the client.

Models:
    - Message / ConversationSession: The observable chat state
    - TextEvent / StatusEvent / DoneEvent / MalformedEvent: Decoded stream events
    - TextLine / StatusLine / DoneLine: NDJSON wire records
    - ChatPayload: Outgoing ``POST /chat`` body
    - TurnResult: Diagnostics for a settled turn
"""

from streamchat.models.schemas import (
    ChatPayload,
    ConversationSession,
    DoneEvent,
    Event,
    EventKind,
    MalformedEvent,
    Message,
    Role,
    SessionStatus,
    StatusEvent,
    TextEvent,
    TurnError,
    TurnResult,
    TurnState,
    generate_conversation_id,
)

__all__ = [
    "ChatPayload",
    "ConversationSession",
    "DoneEvent",
    "Event",
    "EventKind",
    "MalformedEvent",
    "Message",
    "Role",
    "SessionStatus",
    "StatusEvent",
    "TextEvent",
    "TurnError",
    "TurnResult",
    "TurnState",
    "generate_conversation_id",
]
