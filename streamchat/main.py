"""Command-line entry point for streamchat.

Two run modes, chosen with RUN_MODE:

    integrated  the echo dev backend and the chat UI share one uvicorn server
    client      the chat UI alone, talking to API_BASE_URL

Settings come from the environment, with a .env file loaded first.
"""

import logging
import os
import sys

from dotenv import load_dotenv

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)

PAGE_TITLE = "Agent Chat"


def _storage_secret() -> str:
    # Signs NiceGUI's per-browser storage, which holds the conversation id.
    return os.getenv("NICEGUI_STORAGE_SECRET", "streamchat-secret")


def _bind(default_port: int) -> tuple[str, int]:
    return os.getenv("HOST", "0.0.0.0"), int(os.getenv("PORT", str(default_port)))


def run_integrated() -> None:
    """Serve the echo backend and the chat page from one process.

    With the default API_BASE_URL the page posts back to this same server,
    so a turn can be tried end to end without an agent runtime.
    """
    import uvicorn
    from nicegui import ui

    from streamchat.api.app import create_app
    from streamchat.ui.chat_page import chat_page  # noqa: F401

    backend = create_app()
    ui.run_with(backend, title=PAGE_TITLE, storage_secret=_storage_secret())

    host, port = _bind(8000)
    logger.info(f"Echo backend and chat page listening on {host}:{port}")
    uvicorn.run(backend, host=host, port=port, log_level=os.getenv("LOG_LEVEL", "info").lower())


def run_client() -> None:
    """Serve only the chat page against an external agent backend."""
    from nicegui import ui

    from streamchat.chat.config import get_client_config
    from streamchat.ui.chat_page import chat_page  # noqa: F401

    config = get_client_config()
    host, port = _bind(8080)
    logger.info(f"Chat page on {host}:{port}, backend at {config.chat_url}")

    ui.run(
        title=PAGE_TITLE,
        host=host,
        port=port,
        storage_secret=_storage_secret(),
        reload=False,
    )


def main() -> None:
    """Start streamchat in the mode named by RUN_MODE (default ``integrated``)."""
    mode = os.getenv("RUN_MODE", "integrated").strip().lower()
    if mode not in ("integrated", "client"):
        logger.warning(f"Unknown RUN_MODE {mode!r}; falling back to integrated")
        mode = "integrated"

    logger.info(f"Starting streamchat in {mode} mode")
    if mode == "client":
        run_client()
    else:
        run_integrated()


if __name__ in {"__main__", "__mp_main__"}:
    main()
