"""Key-value persistence for the conversation id.

The chat surface reads the saved id once at startup and writes a new one
whenever a conversation is (re)started.
"""

import json
import logging
from collections.abc import MutableMapping
from pathlib import Path
from typing import Any, Protocol

logger = logging.getLogger(__name__)

CONVERSATION_ID_KEY = "chat_thread_id"


class StateStore(Protocol):
    """Minimal string key-value store."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class MappingStateStore:
    """State store backed by any mutable mapping.

    Works with a plain dict or NiceGUI's per-user ``app.storage.user``.
    """

    def __init__(self, mapping: MutableMapping[str, Any] | None = None) -> None:
        self._mapping: MutableMapping[str, Any] = {} if mapping is None else mapping

    def get(self, key: str) -> str | None:
        value = self._mapping.get(key)
        return value if isinstance(value, str) and value else None

    def set(self, key: str, value: str) -> None:
        self._mapping[key] = value


class JsonFileStateStore:
    """State store persisted as a small JSON object on disk."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    def _load(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable state file {self._path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str) -> str | None:
        value = self._load().get(key)
        return value if isinstance(value, str) and value else None

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(data, indent=2), encoding="utf-8")
