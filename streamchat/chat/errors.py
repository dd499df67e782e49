"""Error taxonomy for chat turns.

Every turn failure ends in one of these. They are terminal for the turn,
never for the session.
"""


class ChatClientError(Exception):
    """Base class for chat client errors."""

    pass


class RequestRejected(ChatClientError):
    """The backend answered with a non-2xx status or without a body."""

    def __init__(self, status_code: int, reason: str = "") -> None:
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"Request rejected with HTTP {status_code}{f': {reason}' if reason else ''}")


class TransportFault(ChatClientError):
    """The connection failed before or during streaming."""

    pass


class StreamIdleTimeout(TransportFault):
    """No chunk arrived within the configured idle timeout."""

    def __init__(self, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(f"No data received for {timeout:g}s")


class TurnInProgressError(ChatClientError):
    """A second live message was requested while one is still streaming."""

    pass
