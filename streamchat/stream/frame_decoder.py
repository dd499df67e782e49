"""Incremental line framing for chunked NDJSON response bodies.

Chunks arrive on arbitrary byte boundaries: a JSON object, a multi-byte
character, or a ``\\r\\n`` separator may be split between two reads.
"""

import codecs

LINE_SEPARATOR = "\n"


class FrameDecoder:
    """Reassemble complete text lines from a stream of byte chunks.

    Decoding is stateful, so a character split across chunks is decoded once
    both halves are present. The trailing fragment after the last separator is
    kept until a later separator (or ``flush``) closes it.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self._encoding = encoding
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="strict")
        self._buffer = ""

    @property
    def pending(self) -> str:
        """Text buffered but not yet emitted as a line."""
        return self._buffer

    def feed(self, chunk: bytes) -> list[str]:
        """Decode a chunk and return the lines it completes.

        Args:
            chunk: Raw bytes exactly as read from the response body.

        Returns:
            Complete lines in stream order, separators removed.

        Raises:
            UnicodeDecodeError: If the bytes are not valid for the encoding.
        """
        if not chunk:
            return []

        self._buffer += self._decoder.decode(chunk)
        if LINE_SEPARATOR not in self._buffer:
            return []

        *lines, self._buffer = self._buffer.split(LINE_SEPARATOR)
        return [line.removesuffix("\r") for line in lines]

    def flush(self) -> str | None:
        """Return the dangling partial line at end of stream, if any.

        Undecodable trailing bytes (an incomplete character) are replaced
        rather than raised: a dangling frame is never an error.
        Resets the decoder.
        """
        pending_bytes, _ = self._decoder.getstate()
        tail = self._buffer + pending_bytes.decode(self._encoding, errors="replace")

        self._decoder.reset()
        self._buffer = ""

        if not tail:
            return None
        return tail
