"""Conversation state and turn orchestration.

Responsibilities:
    - Owning the message log and the live-message pointer
    - Running one streamed request/response turn at a time
    - Mapping stream failures to a fixed user-facing error
    - Persisting the conversation id between runs

Maintains clean separation from the presentation layer: views only
subscribe to the store.
"""

from streamchat.chat.config import ClientConfig, get_client_config
from streamchat.chat.conversation_store import ConversationStore
from streamchat.chat.errors import (
    ChatClientError,
    RequestRejected,
    StreamIdleTimeout,
    TransportFault,
    TurnInProgressError,
)
from streamchat.chat.persistence import JsonFileStateStore, MappingStateStore, StateStore
from streamchat.chat.turn_controller import TurnController

__all__ = [
    "ChatClientError",
    "ClientConfig",
    "ConversationStore",
    "JsonFileStateStore",
    "MappingStateStore",
    "RequestRejected",
    "StateStore",
    "StreamIdleTimeout",
    "TransportFault",
    "TurnController",
    "TurnInProgressError",
    "get_client_config",
]
