"""
Canonical S-expression reader.

Reads the canonical, advanced and transport representations into an
immutable tree of ``Atom`` and ``List`` nodes:

    (3:foo3:bar[3:bin]8:baz quux)                 canonical
    (foo bar [bin]"baz quux")                     advanced
    {KDM6Zm9vMzpiYXJbMzpiaW5dODpiYXogcXV1eCk=}    transport

Usage:
    from csexp import parse, read, Reader

    # One value from a buffer, plus whatever follows it
    value, rest = parse(b"(3:foo3:bar)trailing")

    # Values one at a time from a binary stream
    with open("keys.sexp", "rb") as f:
        for value in Reader(f):
            ...
"""

from __future__ import annotations

import logging
from typing import Iterator, Optional, Union

from ..exceptions import (
    ParseError,
    SyntaxError,
    UnexpectedEndOfStreamError,
    UnterminatedError,
)
from .charset import STRING_START, WHITESPACE, describe
from .nodes import Atom, List, Value
from .stream import ByteStream, Source
from .strings import decode_base64, read_simple_string

logger = logging.getLogger(__name__)

OPEN_PAREN = ord("(")
CLOSE_PAREN = ord(")")
OPEN_BRACKET = ord("[")
CLOSE_BRACKET = ord("]")
OPEN_BRACE = ord("{")
CLOSE_BRACE = ord("}")


class Parser:
    """
    Reader over a ``ByteStream``.

    Lists are parsed with an explicit stack of open lists rather than by
    recursion, so nesting depth is limited only by memory.
    """

    def __init__(self, stream: ByteStream):
        self.stream = stream

    def read(self) -> Optional[Value]:
        """
        Read the next top-level value.

        Leading whitespace is skipped. Returns None if the stream ends before
        a value starts; ending anywhere inside a value raises.
        """
        self.stream.skip_whitespace()
        if self.stream.at_end():
            return None
        return self._parse_expr()

    def _parse_expr(self) -> Value:
        """Parse a single S-expression starting at the next byte."""
        # (offset of the opening paren, members read so far) per open list
        open_lists: list[tuple[int, list]] = []

        while True:
            if open_lists:
                self.stream.skip_whitespace()
            c = self.stream.peek_byte()

            if c == OPEN_PAREN:
                open_lists.append((self.stream.position, []))
                self.stream.read_byte()
                continue

            if open_lists and c is None:
                raise UnterminatedError(
                    "unterminated list",
                    ")",
                    context={"list_start": open_lists[-1][0]},
                    offset=self.stream.position,
                )
            if open_lists and c == CLOSE_PAREN:
                self.stream.read_byte()
                _, items = open_lists.pop()
                value: Value = List(items)
            else:
                value = self._parse_element(c)

            if not open_lists:
                return value
            open_lists[-1][1].append(value)

    def _parse_element(self, c: Optional[int]) -> Value:
        """Parse a non-list value whose first byte is ``c``."""
        if c is None:
            raise UnexpectedEndOfStreamError(
                "expected an S-expression; stream ended", offset=self.stream.position
            )
        if c == OPEN_BRACE:
            return self._parse_transport()
        if c == OPEN_BRACKET:
            return self._parse_hinted_atom()
        if c in STRING_START:
            return Atom(read_simple_string(self.stream))
        raise SyntaxError(
            f"unrecognised character {describe(c)}", offset=self.stream.position
        )

    def _parse_hinted_atom(self) -> Atom:
        """Parse ``[`` hint ``]`` value."""
        self.stream.read_byte()
        self.stream.skip_whitespace()
        hint = read_simple_string(self.stream)
        self.stream.skip_whitespace()

        c = self.stream.read_byte()
        if c is None:
            raise UnterminatedError(
                "unterminated display hint", "]", offset=self.stream.position
            )
        if c != CLOSE_BRACKET:
            raise SyntaxError(
                f"']' expected to end display hint; {describe(c)} found",
                offset=self.stream.position - 1,
            )

        self.stream.skip_whitespace()
        value = read_simple_string(self.stream)
        return Atom(value, display_hint=hint)

    def _parse_transport(self) -> Value:
        """Parse ``{`` base64 of a canonical value ``}``."""
        start = self.stream.position
        self.stream.read_byte()
        body = self.stream.read_until(CLOSE_BRACE)
        if body is None:
            raise UnterminatedError(
                "unterminated transport encoding", "}", offset=self.stream.position
            )

        encoded = bytes(c for c in body if c not in WHITESPACE)
        decoded = decode_base64(encoded, start + 1)
        logger.debug("Decoding transport form: %d bytes at offset %d", len(decoded), start)

        try:
            value, rest = parse(decoded)
        except ParseError as err:
            # Report the outer position; keep the innermost decoded offset
            err.context.setdefault("decoded_offset", err.offset)
            err.context["offset"] = start
            err.offset = start
            raise
        if rest:
            raise SyntaxError(
                "expected exactly one transport-encoded value",
                context={"trailing_bytes": len(rest)},
                offset=start,
            )
        return value


def parse(data: Union[bytes, bytearray, memoryview, str]) -> tuple[Value, bytes]:
    """
    Parse the first S-expression in ``data``.

    Returns the value and the unconsumed bytes that follow it. Text input is
    encoded as UTF-8 first.

    Raises:
        ParseError: If the input is malformed or holds no value at all.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    stream = ByteStream(data)
    value = Parser(stream).read()
    if value is None:
        raise UnexpectedEndOfStreamError(
            "expected an S-expression; input is empty", offset=stream.position
        )
    return value, stream.remainder()


def read(stream: Union[ByteStream, Source]) -> Optional[Value]:
    """
    Read one S-expression from a byte stream.

    Returns None at a clean end of stream. Nothing past the value is
    consumed from a source that has ``peek()`` or is seekable, so ``read``
    can be called repeatedly on such a source. For other sources pass the
    same ``ByteStream`` each time; see ``Reader``.
    """
    if not isinstance(stream, ByteStream):
        stream = ByteStream(stream)
    return Parser(stream).read()


class Reader:
    """
    Iterator over the top-level S-expressions of a stream.

    Example::

        for value in Reader(io.BytesIO(b"(a b) 3:foo {KDM6Zm9vKQ==}")):
            print(value)
    """

    def __init__(self, source: Union[ByteStream, Source]):
        self.stream = source if isinstance(source, ByteStream) else ByteStream(source)
        self._parser = Parser(self.stream)

    def read(self) -> Optional[Value]:
        return self._parser.read()

    def __iter__(self) -> Iterator[Value]:
        while True:
            value = self._parser.read()
            if value is None:
                logger.debug("End of stream after %d bytes", self.stream.position)
                return
            yield value
