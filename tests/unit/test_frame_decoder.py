"""Unit tests for FrameDecoder."""

import pytest
import pytest_check as check

from streamchat.stream import FrameDecoder

PAYLOAD = (
    '{"type":"status","content":"Searching"}\r\n'
    '{"type":"text","content":"Grüße, 世界 🌍"}\n'
    "\n"
    '{"type":"done"}\n'
).encode("utf-8")


def decode_all(chunks: list[bytes]) -> tuple[list[str], str | None]:
    decoder = FrameDecoder()
    lines: list[str] = []
    for chunk in chunks:
        lines.extend(decoder.feed(chunk))
    return lines, decoder.flush()


def split_at(data: bytes, *points: int) -> list[bytes]:
    bounds = [0, *points, len(data)]
    return [data[a:b] for a, b in zip(bounds, bounds[1:])]


class TestFrameDecoderLines:
    """Tests for line reassembly."""

    def test_single_chunk_emits_complete_lines(self) -> None:
        """Whole payload in one chunk yields every line, no trailing partial."""
        lines, tail = decode_all([PAYLOAD])

        check.equal(
            lines,
            [
                '{"type":"status","content":"Searching"}',
                '{"type":"text","content":"Grüße, 世界 🌍"}',
                "",
                '{"type":"done"}',
            ],
        )
        check.is_none(tail)

    def test_every_two_way_split_is_equivalent(self) -> None:
        """Splitting at any byte offset, mid-character included, changes nothing."""
        expected, _ = decode_all([PAYLOAD])

        for point in range(1, len(PAYLOAD)):
            lines, tail = decode_all(split_at(PAYLOAD, point))
            assert lines == expected, f"split at byte {point}"
            assert tail is None

    def test_byte_by_byte_feed_is_equivalent(self) -> None:
        """One byte per chunk yields the same lines."""
        expected, _ = decode_all([PAYLOAD])
        lines, _ = decode_all([PAYLOAD[i : i + 1] for i in range(len(PAYLOAD))])

        assert lines == expected

    def test_crlf_split_across_chunks(self) -> None:
        """A \\r\\n separator split between chunks yields one clean line."""
        lines, tail = decode_all([b"abc\r", b"\ndef\r\n"])

        check.equal(lines, ["abc", "def"])
        check.is_none(tail)

    def test_partial_line_is_not_emitted(self) -> None:
        """The fragment after the last separator is held back."""
        decoder = FrameDecoder()

        check.equal(decoder.feed(b'{"type":"text"}\n{"type":"te'), ['{"type":"text"}'])
        check.equal(decoder.pending, '{"type":"te')

    def test_partial_line_completes_on_next_chunk(self) -> None:
        decoder = FrameDecoder()
        decoder.feed(b'{"a":')

        assert decoder.feed(b"1}\n") == ['{"a":1}']

    def test_empty_chunk_is_noop(self) -> None:
        decoder = FrameDecoder()

        assert decoder.feed(b"") == []


class TestFrameDecoderFlush:
    """Tests for end-of-stream handling."""

    def test_flush_returns_dangling_partial(self) -> None:
        decoder = FrameDecoder()
        decoder.feed(b'{"type":"te')

        check.equal(decoder.flush(), '{"type":"te')
        check.equal(decoder.pending, "")

    def test_flush_without_partial_returns_none(self) -> None:
        decoder = FrameDecoder()
        decoder.feed(b"line\n")

        assert decoder.flush() is None

    def test_flush_tolerates_incomplete_character(self) -> None:
        """A truncated multi-byte character at end of stream is not an error."""
        decoder = FrameDecoder()
        decoder.feed("ab€".encode("utf-8")[:-1])

        assert decoder.flush() == "ab�"

    def test_flush_resets_state(self) -> None:
        decoder = FrameDecoder()
        decoder.feed(b"partial")
        decoder.flush()

        assert decoder.feed(b"next\n") == ["next"]


class TestFrameDecoderErrors:
    """Tests for undecodable input."""

    def test_invalid_utf8_raises(self) -> None:
        """Bytes that can never be valid UTF-8 surface as a decode error."""
        decoder = FrameDecoder()

        with pytest.raises(UnicodeDecodeError):
            decoder.feed(b'{"type":"text","content":"\xff\xfe"}\n')
