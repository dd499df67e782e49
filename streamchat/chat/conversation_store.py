"""Single-writer container for the observable conversation state.

The store owns the message log and the live-message pointer. Only the
turn controller (and the UI's "new chat" action) writes to it; views
subscribe and re-render on every change.
"""

import logging
from collections.abc import Callable

from streamchat.chat.errors import TurnInProgressError
from streamchat.models.schemas import (
    ConversationSession,
    Message,
    Role,
    SessionStatus,
    generate_conversation_id,
)

logger = logging.getLogger(__name__)

Listener = Callable[[ConversationSession], None]


class ConversationStore:
    """Ordered message log plus the live (in-progress) message pointer.

    Mutation is append/replace only. Messages are never reordered or
    removed individually; ``reset`` drops the whole log.
    """

    def __init__(
        self,
        conversation_id: str | None = None,
        greeting: str | None = None,
    ) -> None:
        self._session = ConversationSession(
            conversation_id=conversation_id or generate_conversation_id()
        )
        self._greeting = greeting or None
        self._listeners: list[Listener] = []
        self._seed_greeting()

    @property
    def session(self) -> ConversationSession:
        return self._session

    @property
    def is_streaming(self) -> bool:
        return self._session.status is SessionStatus.STREAMING

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener.

        Returns:
            A callable that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        # A failing view must not stop the writer or the other views.
        for listener in list(self._listeners):
            try:
                listener(self._session)
            except Exception:
                logger.exception(f"Store listener {listener!r} failed")

    def _seed_greeting(self) -> None:
        if self._greeting:
            self._session.messages.append(Message(role=Role.ASSISTANT, text=self._greeting))

    def append_user(self, text: str) -> Message:
        message = Message(role=Role.USER, text=text)
        self._session.messages.append(message)
        self._notify()
        return message

    def append_assistant_placeholder(self) -> str:
        """Append an empty assistant message and make it live.

        Returns:
            The id of the new live message.

        Raises:
            TurnInProgressError: If a live message already exists.
        """
        if self._session.live_message_id is not None:
            raise TurnInProgressError(
                f"Message {self._session.live_message_id} is still streaming"
            )

        message = Message(role=Role.ASSISTANT)
        self._session.messages.append(message)
        self._session.live_message_id = message.id
        self._session.status = SessionStatus.STREAMING
        self._notify()
        return message.id

    def _live(self, message_id: str) -> Message | None:
        if message_id != self._session.live_message_id:
            logger.debug(f"Ignoring update for stale message {message_id}")
            return None
        return self._session.live_message

    def append_to_live(self, message_id: str, delta: str) -> bool:
        """Append a streamed delta to the live message.

        Returns:
            False if ``message_id`` is no longer live (update dropped).
        """
        message = self._live(message_id)
        if message is None:
            return False
        message.text += delta
        self._notify()
        return True

    def replace_live(self, message_id: str, text: str, failed: bool = False) -> bool:
        """Replace the live message text wholesale.

        Returns:
            False if ``message_id`` is no longer live (update dropped).
        """
        message = self._live(message_id)
        if message is None:
            return False
        message.text = text
        message.failed = failed
        self._notify()
        return True

    def set_transient_status(self, text: str | None) -> None:
        """Set or clear the transient progress text.

        Only takes effect while a live message is streaming.
        """
        text = text or None
        if text is not None and self._session.live_message_id is None:
            return
        if self._session.transient_status == text:
            return
        self._session.transient_status = text
        self._notify()

    def settle(self) -> None:
        """End the current turn: release the live message, return to idle."""
        self._session.live_message_id = None
        self._session.transient_status = None
        self._session.status = SessionStatus.IDLE
        self._notify()

    def reset(self, conversation_id: str | None = None) -> str:
        """Discard the whole log and start a new conversation.

        A turn still in flight keeps the session ``streaming`` until it
        settles, but its remaining output no longer lands anywhere.

        Args:
            conversation_id: Adopt this id instead of generating one
                (used when restoring a persisted id).

        Returns:
            The new conversation id.
        """
        self._session.conversation_id = conversation_id or generate_conversation_id()
        self._session.messages = []
        self._session.live_message_id = None
        self._session.transient_status = None
        self._seed_greeting()
        logger.info(f"Started conversation {self._session.conversation_id}")
        self._notify()
        return self._session.conversation_id
