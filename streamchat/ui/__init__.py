"""NiceGUI interface - thin visualization layer for chat turns.

Responsibilities:
    - Message list rendering from the conversation store
    - Transient status capsule while a reply streams
    - Error styling for failed turns
    - "New chat" action that starts a fresh conversation id

Contains no stream handling. Delegates every turn to the TurnController
and re-renders whenever the store changes.
"""
