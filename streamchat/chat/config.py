"""Client configuration with environment variable loading.

Pydantic-based configuration for the streaming chat client.
Points at any backend that speaks the NDJSON ``/chat`` protocol.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()


def _optional_float(name: str) -> float | None:
    value = os.getenv(name, "").strip()
    return float(value) if value else None


class ClientConfig(BaseModel):
    """Configuration for the chat client.

    Attributes:
        api_base_url: Base URL of the agent backend.
        chat_path: Path of the streaming chat endpoint.
        connect_timeout: Seconds allowed to establish the connection.
        stream_idle_timeout: Max seconds between two chunks (None disables).
        thinking_text: Transient status shown while waiting for the first event.
        error_text: Fixed text that replaces a failed assistant message.
        greeting_text: Assistant greeting seeded into a fresh conversation.
        state_file: JSON file persisting the conversation id (None = per-user
            browser storage).
    """

    api_base_url: str = Field(
        default_factory=lambda: os.getenv("API_BASE_URL", "http://localhost:8000"),
        description="Agent backend base URL",
    )
    chat_path: str = Field(
        default_factory=lambda: os.getenv("CHAT_PATH", "/chat"),
        description="Streaming chat endpoint path",
    )
    connect_timeout: float = Field(
        default_factory=lambda: float(os.getenv("CHAT_CONNECT_TIMEOUT", "10.0")),
        gt=0.0,
        description="Connection timeout in seconds",
    )
    stream_idle_timeout: float | None = Field(
        default_factory=lambda: _optional_float("CHAT_IDLE_TIMEOUT"),
        gt=0.0,
        description="Seconds without data before the turn fails (unset = wait forever)",
    )
    thinking_text: str = Field(
        default_factory=lambda: os.getenv("CHAT_THINKING_TEXT", "Thinking..."),
        description="Initial transient status for a new turn",
    )
    error_text: str = Field(
        default_factory=lambda: os.getenv("CHAT_ERROR_TEXT", "A connection error occurred."),
        description="User-facing text for a failed turn",
    )
    greeting_text: str = Field(
        default_factory=lambda: os.getenv(
            "CHAT_GREETING_TEXT", "Hello! I'm your AI assistant. Let's start chatting!"
        ),
        description="Greeting for a new conversation (empty disables)",
    )
    state_file: str | None = Field(
        default_factory=lambda: os.getenv("CHAT_STATE_FILE") or None,
        description="JSON file for the conversation id (unset = browser storage)",
    )

    @field_validator("api_base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Require an http(s) URL and drop any trailing slash."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("API_BASE_URL must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("chat_path")
    @classmethod
    def validate_chat_path(cls, v: str) -> str:
        """Ensure the path is absolute."""
        v = v.strip()
        return v if v.startswith("/") else f"/{v}"

    @field_validator("error_text")
    @classmethod
    def validate_error_text(cls, v: str) -> str:
        """A failed turn must always show something."""
        if not v.strip():
            raise ValueError("error_text must not be empty")
        return v

    @property
    def chat_url(self) -> str:
        return f"{self.api_base_url}{self.chat_path}"


def get_client_config() -> ClientConfig:
    """Create client configuration from environment.

    Returns:
        Configured ClientConfig instance.

    Raises:
        ValueError: If a setting is invalid.
    """
    return ClientConfig()
