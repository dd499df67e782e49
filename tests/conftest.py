"""Pytest fixtures and shared test configuration.

Fixtures:
    - client_config: Deterministic ClientConfig (no environment lookups)
    - store: Empty ConversationStore with a fixed conversation id
    - mock_conversation_id: Consistent conversation id for tests
    - dev_client: HTTPX client bound to the FastAPI dev backend
    - ndjson: Helper encoding wire records as NDJSON bytes
"""

import json
from collections.abc import AsyncGenerator, Callable
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from streamchat.api import app
from streamchat.chat import ClientConfig, ConversationStore

ERROR_TEXT = "A connection error occurred."
THINKING_TEXT = "Thinking..."


@pytest.fixture
def mock_conversation_id() -> str:
    """Return a predictable conversation id for assertions."""
    return "thread_1700000000000_abc123xyz"


@pytest.fixture
def client_config() -> ClientConfig:
    """Create a config that does not depend on the environment.

    Returns:
        ClientConfig pointing at a fake backend with no idle timeout.
    """
    return ClientConfig(
        api_base_url="http://test",
        chat_path="/chat",
        connect_timeout=5.0,
        stream_idle_timeout=None,
        thinking_text=THINKING_TEXT,
        error_text=ERROR_TEXT,
        greeting_text="",
        state_file=None,
    )


@pytest.fixture
def store(mock_conversation_id: str) -> ConversationStore:
    """Return an empty store without a greeting message."""
    return ConversationStore(conversation_id=mock_conversation_id)


@pytest.fixture
def ndjson() -> Callable[..., bytes]:
    """Encode records as newline-terminated JSON lines."""

    def encode(*records: dict[str, Any]) -> bytes:
        return b"".join(json.dumps(r).encode("utf-8") + b"\n" for r in records)

    return encode


@pytest.fixture
async def dev_client() -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for the development backend.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
