"""Test package for streamchat.

Unit tests for isolated stream and state logic, integration tests for
whole turns over HTTP.

Structure:
    - unit/: Framing, parsing, store, config and persistence tests
    - integration/: Turns against mocked transports and the dev backend

Leverages pytest with pytest-asyncio and pytest-check for soft assertions.
"""
