"""Integration tests for complete chat turns.

Coverage:
    - TurnController against httpx.MockTransport with exact chunk boundaries
    - Transport faults, rejected requests and idle timeouts
    - TurnController against the FastAPI dev backend over ASGITransport
"""
