"""
Reader for simple strings, the byte strings that make up atom values and
display hints.

The first byte selects the encoding:

    3:foo          raw, length-prefixed
    3#666f6f#      hexadecimal with declared length
    #666f6f#       hexadecimal
    3|Zm9v|        base64 with declared length
    |Zm9v|         base64
    3"foo"         quoted with declared length
    "foo"          quoted, C-style escapes
    foo            bare token

Declared lengths are checked against the decoded byte count.
"""

from __future__ import annotations

import base64
import binascii
from enum import Enum, auto
from typing import Optional

from ..exceptions import (
    LengthMismatchError,
    SyntaxError,
    UnexpectedEndOfStreamError,
    UnterminatedError,
)
from .charset import (
    BASE64_CHAR,
    DECIMAL_DIGIT,
    ESCAPES,
    HEX_DIGIT,
    OCTAL_DIGIT,
    TOKEN_CHAR,
    WHITESPACE,
    describe,
)
from .stream import ByteStream

HASH = ord("#")
BAR = ord("|")
QUOTE = ord('"')
COLON = ord(":")
BACKSLASH = ord("\\")
NEWLINE = ord("\n")
RETURN = ord("\r")
ZERO = ord("0")

# Largest declared length accepted (signed 32-bit)
MAX_LENGTH = 2**31 - 1


class QuoteState(Enum):
    """States of the quoted-string decoder."""

    IN_QUOTE = auto()
    IN_ESCAPE = auto()
    IN_NEWLINE_ESCAPE = auto()
    IN_RETURN_ESCAPE = auto()
    IN_HEX1 = auto()
    IN_HEX2 = auto()
    IN_OCTAL2 = auto()
    IN_OCTAL3 = auto()


class QuotedStringDecoder:
    """
    Byte-at-a-time decoder for the body of a quoted string.

    The opening quote has already been consumed. Feed each following byte to
    ``feed``; it returns True once the closing quote has been seen, after
    which ``value`` holds the decoded bytes.

    An escaped line break (backslash followed by LF, CR, LF CR or CR LF)
    contributes nothing to the value.
    """

    def __init__(self, declared: Optional[int] = None, offset: int = 0):
        self.declared = declared
        self.state = QuoteState.IN_QUOTE
        self.done = False
        self._acc = bytearray()
        self._digits = bytearray()
        self._offset = offset

    @property
    def value(self) -> bytes:
        return bytes(self._acc)

    def feed(self, c: int) -> bool:
        """Advance the state machine by one byte."""
        self._offset += 1
        state = self.state

        if state is QuoteState.IN_NEWLINE_ESCAPE:
            self.state = QuoteState.IN_QUOTE
            if c == RETURN:
                return False
            return self._in_quote(c)

        if state is QuoteState.IN_RETURN_ESCAPE:
            self.state = QuoteState.IN_QUOTE
            if c == NEWLINE:
                return False
            return self._in_quote(c)

        if state is QuoteState.IN_QUOTE:
            return self._in_quote(c)

        if state is QuoteState.IN_ESCAPE:
            self._in_escape(c)
        elif state is QuoteState.IN_HEX1:
            self._expect(c, HEX_DIGIT, "hexadecimal")
            self._digits.append(c)
            self.state = QuoteState.IN_HEX2
        elif state is QuoteState.IN_HEX2:
            self._expect(c, HEX_DIGIT, "hexadecimal")
            self._digits.append(c)
            self._acc.append(int(self._digits, 16))
            self.state = QuoteState.IN_QUOTE
        elif state is QuoteState.IN_OCTAL2:
            self._expect(c, OCTAL_DIGIT, "octal")
            self._digits.append(c)
            self.state = QuoteState.IN_OCTAL3
        elif state is QuoteState.IN_OCTAL3:
            self._expect(c, OCTAL_DIGIT, "octal")
            self._digits.append(c)
            code = int(self._digits, 8)
            if code > 0xFF:
                raise SyntaxError(
                    f"octal escape \\{self._digits.decode()} is out of byte range",
                    offset=self._offset,
                )
            self._acc.append(code)
            self.state = QuoteState.IN_QUOTE
        return False

    def _in_quote(self, c: int) -> bool:
        if c == QUOTE:
            if self.declared is not None and len(self._acc) != self.declared:
                raise LengthMismatchError(
                    self.declared,
                    len(self._acc),
                    offset=self._offset,
                    suggestions=["Check the length prefix of the quoted string"],
                )
            self.done = True
            return True
        if c == BACKSLASH:
            self.state = QuoteState.IN_ESCAPE
        else:
            self._acc.append(c)
        return False

    def _in_escape(self, c: int) -> None:
        if c in ESCAPES:
            self._acc.append(ESCAPES[c])
            self.state = QuoteState.IN_QUOTE
        elif c == ord("x"):
            self._digits = bytearray()
            self.state = QuoteState.IN_HEX1
        elif c in OCTAL_DIGIT:
            self._digits = bytearray([c])
            self.state = QuoteState.IN_OCTAL2
        elif c == NEWLINE:
            self.state = QuoteState.IN_NEWLINE_ESCAPE
        elif c == RETURN:
            self.state = QuoteState.IN_RETURN_ESCAPE
        else:
            raise SyntaxError(
                f"unrecognised escape character {describe(c)}",
                offset=self._offset,
                suggestions=[
                    "Valid escapes are \\b \\t \\v \\n \\f \\r \\\" \\' \\\\, "
                    "\\xHH and \\OOO"
                ],
            )

    def _expect(self, c: int, allowed: frozenset, kind: str) -> None:
        if c not in allowed:
            raise SyntaxError(
                f"expected {kind} digit in escape; got {describe(c)}",
                offset=self._offset,
            )


def read_quoted(stream: ByteStream, declared: Optional[int] = None) -> bytes:
    """Read a quoted string whose opening quote has been consumed."""
    decoder = QuotedStringDecoder(declared, offset=stream.position)
    while True:
        c = stream.read_byte()
        if c is None:
            raise UnterminatedError(
                "unterminated string", '"', offset=stream.position
            )
        if decoder.feed(c):
            return decoder.value


def _strip_whitespace(data: bytes) -> bytes:
    return bytes(c for c in data if c not in WHITESPACE)


def read_hex(stream: ByteStream) -> bytes:
    """Read hex digit pairs up to the closing ``#``; whitespace is ignored."""
    start = stream.position
    body = stream.read_until(HASH)
    if body is None:
        raise UnterminatedError(
            "unterminated hexadecimal string", "#", offset=stream.position
        )
    digits = _strip_whitespace(body)
    for c in digits:
        if c not in HEX_DIGIT:
            raise SyntaxError(
                f"invalid hexadecimal digit {describe(c)}", offset=start
            )
    if len(digits) % 2:
        raise SyntaxError(
            "odd number of hexadecimal digits",
            context={"digits": len(digits)},
            offset=start,
        )
    return binascii.unhexlify(digits)


def read_base64(stream: ByteStream) -> bytes:
    """Read standard base64 up to the closing ``|``; whitespace is ignored."""
    start = stream.position
    body = stream.read_until(BAR)
    if body is None:
        raise UnterminatedError(
            "unterminated base64 string", "|", offset=stream.position
        )
    return decode_base64(_strip_whitespace(body), start)


def decode_base64(data: bytes, offset: int) -> bytes:
    """Strict standard-alphabet base64 decoding with padding."""
    for c in data:
        if c not in BASE64_CHAR:
            raise SyntaxError(f"invalid base64 character {describe(c)}", offset=offset)
    try:
        return base64.b64decode(data, validate=True)
    except binascii.Error as err:
        raise SyntaxError(f"malformed base64: {err}", offset=offset) from err


def _check_length(declared: int, data: bytes, offset: int) -> bytes:
    if len(data) != declared:
        raise LengthMismatchError(
            declared,
            len(data),
            offset=offset,
            suggestions=["Check the decimal length prefix of the string"],
        )
    return data


def read_length_prefixed(stream: ByteStream, first: int) -> bytes:
    """Read a string that starts with a decimal length prefix."""
    start = stream.position - 1
    declared = first - ZERO
    while True:
        c = stream.read_byte()
        if c is None:
            raise UnexpectedEndOfStreamError(
                "end of stream inside length prefix", offset=stream.position
            )
        if c not in DECIMAL_DIGIT:
            break
        declared = declared * 10 + (c - ZERO)
        if declared > MAX_LENGTH:
            raise SyntaxError(
                f"length prefix exceeds {MAX_LENGTH}",
                offset=start,
                suggestions=["A string cannot be longer than 2**31 - 1 bytes"],
            )

    if c == COLON:
        data = stream.read_exact(declared)
        if len(data) < declared:
            raise UnexpectedEndOfStreamError(
                f"expected {declared} bytes; stream ended after {len(data)}",
                context={"declared": declared, "actual": len(data)},
                offset=stream.position,
            )
        return data
    if c == HASH:
        return _check_length(declared, read_hex(stream), start)
    if c == BAR:
        return _check_length(declared, read_base64(stream), start)
    if c == QUOTE:
        return read_quoted(stream, declared)
    raise SyntaxError(
        f"expected integer terminator; found {describe(c)}",
        offset=stream.position - 1,
        suggestions=["A length prefix must be followed by ':', '#', '|' or '\"'"],
    )


def read_token(stream: ByteStream, first: int) -> bytes:
    """Read the maximal run of token characters starting with ``first``."""
    acc = bytearray([first])
    while True:
        c = stream.peek_byte()
        if c is None or c not in TOKEN_CHAR:
            return bytes(acc)
        acc.append(c)
        stream.read_byte()


def read_simple_string(stream: ByteStream) -> bytes:
    """Read one simple string in any of its encodings."""
    c = stream.read_byte()
    if c is None:
        raise UnexpectedEndOfStreamError(
            "expected a string; stream ended", offset=stream.position
        )
    if c in DECIMAL_DIGIT:
        return read_length_prefixed(stream, c)
    if c == HASH:
        return read_hex(stream)
    if c == BAR:
        return read_base64(stream)
    if c == QUOTE:
        return read_quoted(stream)
    if c in TOKEN_CHAR:
        return read_token(stream, c)
    raise SyntaxError(
        f"unrecognised character {describe(c)} at start of string",
        offset=stream.position - 1,
    )
