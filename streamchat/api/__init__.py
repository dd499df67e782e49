"""Development backend for the chat client.

Implements the server side of the streaming protocol so the client can be
run and tested without a real agent.

Endpoints:
    - GET /health: Service health status
    - POST /chat: Streamed NDJSON reply (status, text deltas, done)
"""

from streamchat.api.app import app, create_app

__all__ = ["app", "create_app"]
