"""
Byte classes used by the reader and the advanced-form printer.

All tables are frozensets of byte values (ints), so membership tests work
directly on items of a ``bytes`` object.
"""

from __future__ import annotations

LOWER_CASE = frozenset(b"abcdefghijklmnopqrstuvwxyz")
UPPER_CASE = frozenset(b"ABCDEFGHIJKLMNOPQRSTUVWXYZ")
ALPHA = LOWER_CASE | UPPER_CASE
DECIMAL_DIGIT = frozenset(b"0123456789")
HEX_DIGIT = DECIMAL_DIGIT | frozenset(b"abcdefABCDEF")
OCTAL_DIGIT = frozenset(b"01234567")
SIMPLE_PUNC = frozenset(b"-./_:*+=")
WHITESPACE = frozenset(b" \t\r\n")

# Bytes allowed in a bare token
TOKEN_CHAR = ALPHA | DECIMAL_DIGIT | SIMPLE_PUNC

BASE64_CHAR = ALPHA | DECIMAL_DIGIT | frozenset(b"+/=")

# Bytes the printer may place inside a quoted string, either verbatim or
# through one of the escapes in QUOTED_ESCAPES
STRING_CHAR = TOKEN_CHAR | HEX_DIGIT | frozenset(b'"|#')
QUOTABLE_CHAR = STRING_CHAR | frozenset(b"\b\t\v\n\f\r\"'\\ ")

# Single-character escapes: escape letter -> decoded byte
ESCAPES = {
    ord("b"): ord("\b"),
    ord("t"): ord("\t"),
    ord("v"): ord("\v"),
    ord("n"): ord("\n"),
    ord("f"): ord("\f"),
    ord("r"): ord("\r"),
    ord('"'): ord('"'),
    ord("'"): ord("'"),
    ord("\\"): ord("\\"),
}

# Inverse used by the printer; "'" is printable and stays verbatim
QUOTED_ESCAPES = {
    ord("\b"): b"\\b",
    ord("\t"): b"\\t",
    ord("\v"): b"\\v",
    ord("\n"): b"\\n",
    ord("\f"): b"\\f",
    ord("\r"): b"\\r",
    ord('"'): b'\\"',
    ord("\\"): b"\\\\",
}

# First bytes that open a simple (length-governed) string
STRING_START = TOKEN_CHAR | frozenset(b'"#|')


def is_token(data: bytes) -> bool:
    """True if every byte of ``data`` may appear in a bare token."""
    return all(c in TOKEN_CHAR for c in data)


def describe(c: int | None) -> str:
    """Printable description of a byte for error messages."""
    if c is None:
        return "end of stream"
    if 0x20 <= c < 0x7F:
        return repr(chr(c))
    return f"0x{c:02x}"
