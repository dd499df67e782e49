"""Development chat endpoint speaking the NDJSON streaming protocol.

Stands in for the real agent backend during local runs and tests. Replies
by echoing the user's message back, word by word.
"""

import asyncio
import json
import logging
import os
from collections.abc import AsyncGenerator

from fastapi import APIRouter
from fastapi.responses import StreamingResponse

from streamchat.models.schemas import ChatPayload

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])

NDJSON_MEDIA_TYPE = "application/x-ndjson"

# Pause between emitted lines, to make streaming visible in the UI
STREAM_DELAY = float(os.getenv("DEV_BACKEND_DELAY", "0"))


def _line(record: dict[str, str]) -> bytes:
    return (json.dumps(record, ensure_ascii=False) + "\n").encode("utf-8")


def _reply_for(content: str) -> list[str]:
    """Split the echo reply into text deltas, keeping whitespace attached."""
    words = f"You said: {content}".split(" ")
    return [word if i == len(words) - 1 else f"{word} " for i, word in enumerate(words)]


async def _generate(payload: ChatPayload) -> AsyncGenerator[bytes, None]:
    content = payload.input.messages[-1].content
    thread_id = payload.config.configurable.thread_id
    logger.info(f"Streaming reply for thread {thread_id}")

    yield _line({"type": "status", "content": "Thinking..."})
    for delta in _reply_for(content):
        if STREAM_DELAY:
            await asyncio.sleep(STREAM_DELAY)
        yield _line({"type": "text", "content": delta})
    yield _line({"type": "done"})


@router.post("/chat")
async def chat(payload: ChatPayload) -> StreamingResponse:
    """Stream a reply to the last input message.

    Args:
        payload: Input messages plus the thread id.

    Returns:
        NDJSON stream of ``status``, ``text`` and ``done`` records.

    Raises:
        422: Invalid body, empty or whitespace-only content.
    """
    return StreamingResponse(_generate(payload), media_type=NDJSON_MEDIA_TYPE)
