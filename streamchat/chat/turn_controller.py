"""Turn orchestration: one user submission through a settled assistant reply.

The controller posts the user's message, reads the NDJSON response body chunk
by chunk, and applies each decoded event to the conversation store:

    idle -> submitting -> streaming -> succeeded | failed

Every turn settles. Whatever happens, the store's live pointer and transient
status are cleared and the session returns to idle, so the next submission is
always accepted.
"""

import asyncio
import logging
from collections.abc import AsyncGenerator
from contextlib import aclosing

import httpx

from streamchat.chat.config import ClientConfig, get_client_config
from streamchat.chat.conversation_store import ConversationStore
from streamchat.chat.errors import RequestRejected, StreamIdleTimeout, TransportFault
from streamchat.chat.persistence import CONVERSATION_ID_KEY, StateStore
from streamchat.models.schemas import (
    ChatPayload,
    DoneEvent,
    Event,
    MalformedEvent,
    StatusEvent,
    TextEvent,
    TurnError,
    TurnResult,
    TurnState,
)
from streamchat.stream import EventParser, FrameDecoder

logger = logging.getLogger(__name__)

_SETTLED = (TurnState.SUCCEEDED, TurnState.FAILED)


class TurnController:
    """Drives request/response turns against the streaming chat endpoint.

    Holds at most one turn in flight. Submissions made while a turn is
    streaming are rejected, not queued.
    """

    def __init__(
        self,
        store: ConversationStore,
        config: ClientConfig | None = None,
        client: httpx.AsyncClient | None = None,
        state_store: StateStore | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            store: Conversation state to write into.
            config: Client configuration. Loads from environment if not provided.
            client: HTTP client to use. One is created (and owned) lazily
                    if not provided.
            state_store: Where the conversation id is persisted, if anywhere.
        """
        self._store = store
        self._config = config or get_client_config()
        self._client = client
        self._owns_client = client is None
        self._state_store = state_store
        self._state = TurnState.IDLE

    @property
    def state(self) -> TurnState:
        return self._state

    @property
    def in_flight(self) -> bool:
        return self._state in (TurnState.SUBMITTING, TurnState.STREAMING)

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            # No read timeout: idle detection is handled per chunk.
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(None, connect=self._config.connect_timeout)
            )
        return self._client

    async def aclose(self) -> None:
        """Close the HTTP client if this controller created it."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    def load_or_create_conversation(self) -> str:
        """Restore the persisted conversation id, or start a new one.

        Returns:
            The active conversation id.
        """
        saved = self._state_store.get(CONVERSATION_ID_KEY) if self._state_store else None
        if saved:
            logger.info(f"Restoring conversation {saved}")
            return self._store.reset(saved)
        return self.new_conversation()

    def new_conversation(self) -> str:
        """Clear the log and persist a freshly generated conversation id."""
        conversation_id = self._store.reset()
        if self._state_store is not None:
            self._state_store.set(CONVERSATION_ID_KEY, conversation_id)
        return conversation_id

    async def submit(self, text: str) -> TurnResult | None:
        """Run one turn for the user's text.

        Args:
            text: The user's message, sent as typed.

        Returns:
            The settled turn result, or None if the submission was ignored
            (blank input or a turn already in flight). Errors outside the
            request/transport taxonomy are logged and reported as a failed
            turn; cancellation still propagates once the turn has settled.
        """
        if not text or not text.strip():
            return None
        if self.in_flight or self._store.is_streaming:
            logger.info("Turn already in flight; ignoring submission")
            return None

        self._state = TurnState.SUBMITTING
        conversation_id = self._store.session.conversation_id
        result = TurnResult(state=TurnState.SUBMITTING)

        try:
            # Optimistic: the user message stays even if the request fails.
            self._store.append_user(text)
            result.message_id = self._store.append_assistant_placeholder()
            self._store.set_transient_status(self._config.thinking_text)

            logger.info(f"Starting turn {result.message_id} in conversation {conversation_id}")
            await self._run_turn(text, conversation_id, result.message_id, result)
        except Exception:
            logger.exception(f"Turn {result.message_id} failed unexpectedly")
            result.error = TurnError.UNEXPECTED
        finally:
            unsettled = result.state not in _SETTLED
            if unsettled:
                result.state = TurnState.FAILED
            try:
                if unsettled and result.message_id is not None:
                    self._store.replace_live(
                        result.message_id, self._config.error_text, failed=True
                    )
            finally:
                self._state = result.state
                self._store.settle()

        logger.info(
            f"Turn {result.message_id} {result.state.value}: "
            f"{result.events_applied} events, {len(result.malformed_lines)} malformed"
        )
        return result

    async def _run_turn(
        self,
        text: str,
        conversation_id: str,
        message_id: str,
        result: TurnResult,
    ) -> None:
        payload = ChatPayload.for_message(text, conversation_id)

        try:
            async with self._get_client().stream(
                "POST",
                self._config.chat_url,
                json=payload.model_dump(mode="json"),
                headers={"Accept": "application/x-ndjson"},
            ) as response:
                result.status_code = response.status_code
                if not response.is_success:
                    raise RequestRejected(response.status_code, response.reason_phrase)
                if response.status_code == httpx.codes.NO_CONTENT:
                    raise RequestRejected(response.status_code, "response has no body")

                self._state = TurnState.STREAMING
                result.reached_streaming = True
                await self._consume(response, message_id, result)

        except RequestRejected as e:
            logger.warning(f"Turn {message_id} rejected: {e}")
            self._fail(message_id, result, TurnError.REQUEST_REJECTED)
            return
        except (httpx.HTTPError, httpx.StreamError, UnicodeDecodeError, TransportFault) as e:
            logger.warning(f"Turn {message_id} transport fault: {type(e).__name__}: {e}")
            self._fail(message_id, result, TurnError.TRANSPORT_FAULT)
            return

        result.state = TurnState.SUCCEEDED

    async def _consume(
        self,
        response: httpx.Response,
        message_id: str,
        result: TurnResult,
    ) -> None:
        decoder = FrameDecoder()
        parser = EventParser()

        async with aclosing(self._iter_chunks(response)) as chunks:
            async for chunk in chunks:
                for line in decoder.feed(chunk):
                    event = parser.parse(line)
                    if event is not None:
                        self._apply(event, message_id, result)

        tail = decoder.flush()
        if tail is not None:
            logger.debug(f"Discarding unterminated frame at end of stream: {tail[:200]!r}")

    async def _iter_chunks(self, response: httpx.Response) -> AsyncGenerator[bytes, None]:
        """Yield body chunks, enforcing the idle timeout between them."""
        timeout = self._config.stream_idle_timeout

        async with aclosing(response.aiter_bytes()) as chunks:
            while True:
                try:
                    if timeout is None:
                        chunk = await anext(chunks)
                    else:
                        async with asyncio.timeout(timeout):
                            chunk = await anext(chunks)
                except StopAsyncIteration:
                    return
                except TimeoutError as e:
                    raise StreamIdleTimeout(timeout) from e
                yield chunk

    def _apply(self, event: Event, message_id: str, result: TurnResult) -> None:
        match event:
            case TextEvent(payload=delta):
                self._store.append_to_live(message_id, delta)
                self._store.set_transient_status(None)
            case StatusEvent(payload=status):
                self._store.set_transient_status(status)
            case DoneEvent():
                self._store.set_transient_status(None)
            case MalformedEvent(raw=raw):
                logger.warning(f"Skipping malformed stream line: {raw[:200]!r}")
                result.malformed_lines.append(raw)
                return
        result.events_applied += 1

    def _fail(self, message_id: str, result: TurnResult, error: TurnError) -> None:
        # Partial text is discarded so a truncated answer never looks complete.
        self._store.replace_live(message_id, self._config.error_text, failed=True)
        result.error = error
        result.state = TurnState.FAILED
