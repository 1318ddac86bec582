"""
Byte cursor over an in-memory buffer or a binary stream.

The reader needs one byte of lookahead (a bare token ends at the first byte
that is not a token character, and that byte belongs to whatever follows).
Lookahead never takes a byte away from the source:

- with ``peek()``, as on ``io.BufferedReader``, it is served from the
  source's own buffer
- on a seekable source, such as ``io.BytesIO`` or an unbuffered file, the
  byte is read and the source is seeked back over it

Only a source offering neither has its looked-ahead byte held here, and
sequence readers over such a source must keep the same ``ByteStream``
between reads.
"""

from __future__ import annotations

import io
from typing import BinaryIO, Optional, Union

from .charset import WHITESPACE

Source = Union[bytes, bytearray, memoryview, BinaryIO]

# Upper bound on a single read() from the source
CHUNK_SIZE = 64 * 1024


def _is_seekable(source) -> bool:
    seekable = getattr(source, "seekable", None)
    return bool(seekable is not None and seekable())


class ByteStream:
    """Pull-based byte cursor with single-byte lookahead."""

    def __init__(self, source: Source):
        if isinstance(source, (bytes, bytearray, memoryview)):
            source = io.BytesIO(bytes(source))
        self._source = source
        self._peek = getattr(source, "peek", None)
        self._seekable = self._peek is None and _is_seekable(source)
        self._pending: Optional[int] = None
        self.position = 0

    def peek_byte(self) -> Optional[int]:
        """Next byte without consuming it, or None at end of stream."""
        if self._pending is not None:
            return self._pending
        if self._peek is not None:
            data = self._peek(1)[:1]
            return data[0] if data else None
        data = self._source.read(1)
        if not data:
            return None
        if self._seekable:
            self._source.seek(-1, io.SEEK_CUR)
        else:
            self._pending = data[0]
        return data[0]

    def read_byte(self) -> Optional[int]:
        """Consume and return the next byte, or None at end of stream."""
        if self._pending is not None:
            c = self._pending
            self._pending = None
        else:
            data = self._source.read(1)
            if not data:
                return None
            c = data[0]
        self.position += 1
        return c

    def read_exact(self, n: int) -> bytes:
        """Read up to ``n`` bytes; fewer are returned only at end of stream."""
        chunks = []
        remaining = n
        if remaining and self._pending is not None:
            chunks.append(bytes([self._pending]))
            self._pending = None
            remaining -= 1
        while remaining:
            chunk = self._source.read(min(remaining, CHUNK_SIZE))
            if not chunk:
                break
            chunks.append(chunk)
            remaining -= len(chunk)
        data = b"".join(chunks)
        self.position += len(data)
        return data

    def read_until(self, delimiter: int) -> Optional[bytes]:
        """
        Consume bytes up to and including ``delimiter``.

        Returns the bytes before the delimiter, or None if the stream ended
        first (everything up to the end has then been consumed).
        """
        acc = bytearray()
        while True:
            c = self.read_byte()
            if c is None:
                return None
            if c == delimiter:
                return bytes(acc)
            acc.append(c)

    def skip_whitespace(self) -> None:
        while True:
            c = self.peek_byte()
            if c is None or c not in WHITESPACE:
                return
            self.read_byte()

    def at_end(self) -> bool:
        return self.peek_byte() is None

    def remainder(self) -> bytes:
        """Consume and return everything left in the stream."""
        head = b""
        if self._pending is not None:
            head = bytes([self._pending])
            self._pending = None
        rest = head + self._source.read()
        self.position += len(rest)
        return rest
