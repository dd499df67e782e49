"""Streamchat - streaming chat client for NDJSON agent backends.

Combines httpx for response streaming, Pydantic for state and wire models,
NiceGUI for visualization, and FastAPI for a local development backend.

Components:
    - stream: Chunk-to-line framing and event classification
    - chat: Conversation store, turn controller, config and persistence
    - models: Message, session, event and payload schemas
    - api: Development backend speaking the streaming protocol
    - ui: Web interface observing the conversation store
"""

__version__ = "0.1.0"
