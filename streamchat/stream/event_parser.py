"""Classify NDJSON lines into typed stream events.

Each line is validated against a discriminated union on its ``type`` field.
Anything that does not decode is returned as a ``MalformedEvent`` so a single
bad line never aborts the surrounding stream.
"""

from pydantic import ValidationError

from streamchat.models.schemas import (
    DoneEvent,
    DoneLine,
    Event,
    MalformedEvent,
    StatusEvent,
    StatusLine,
    TextEvent,
    TextLine,
    stream_line_adapter,
)


class EventParser:
    """Turn complete lines into events."""

    def parse(self, line: str) -> Event | None:
        """Parse one line.

        Args:
            line: A complete line as produced by ``FrameDecoder``.

        Returns:
            The decoded event, ``None`` for blank lines (ignored), or a
            ``MalformedEvent`` carrying the raw line.
        """
        if not line.strip():
            return None

        try:
            record = stream_line_adapter.validate_json(line)
        except ValidationError:
            return MalformedEvent(raw=line)

        match record:
            case TextLine(content=content):
                return TextEvent(payload=content)
            case StatusLine(content=content):
                return StatusEvent(payload=content)
            case DoneLine():
                return DoneEvent()
        return MalformedEvent(raw=line)
