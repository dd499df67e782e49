"""Unit tests for individual components in isolation.

Coverage:
    - stream/: Chunk framing and event classification
    - chat/: Conversation store, configuration and persistence

No network. Leverages pytest-check for multiple assertions per test.
"""
