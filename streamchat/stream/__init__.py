"""Response stream decoding.

Turns a chunked HTTP response body into a sequence of typed events.

Responsibilities:
    - Reassembling newline-delimited frames across arbitrary chunk boundaries
    - Incremental, multi-byte safe text decoding
    - Classifying each frame as text, status, done or malformed

Pure and synchronous: no I/O, no state beyond the current partial frame.
"""

from streamchat.stream.event_parser import EventParser
from streamchat.stream.frame_decoder import FrameDecoder

__all__ = ["EventParser", "FrameDecoder"]
