"""
Serializers for S-expression trees.

- ``pack``: canonical form, byte-exact and unique for a given tree
- ``render``: advanced form, for display; parses back to an equal tree
- ``to_transport``: canonical form in base64 between braces

Examples:
    >>> value = List.of(Atom(b"foo"), Atom(b"baz quux", display_hint=b"bin"))
    >>> pack(value)
    b'(3:foo[3:bin]8:baz quux)'
    >>> render(value)
    '(foo [bin]"baz quux")'
"""

from __future__ import annotations

import base64
import io

from .charset import DECIMAL_DIGIT, QUOTABLE_CHAR, QUOTED_ESCAPES, is_token
from .nodes import Atom, Value


def _pack_string(buf: io.BytesIO, data: bytes) -> None:
    buf.write(b"%d:" % len(data))
    buf.write(data)


def _pack_atom(buf: io.BytesIO, value: Atom) -> None:
    if value.display_hint:
        buf.write(b"[")
        _pack_string(buf, value.display_hint)
        buf.write(b"]")
    _pack_string(buf, value.value)


def pack_into(buf: io.BytesIO, value: Value) -> None:
    """Write the canonical form of ``value`` to ``buf``."""
    # One iterator per open list; the outermost wraps ``value`` itself
    pending = [iter((value,))]
    while pending:
        item = next(pending[-1], None)
        if item is None:
            pending.pop()
            if pending:
                buf.write(b")")
        elif isinstance(item, Atom):
            _pack_atom(buf, item)
        else:
            buf.write(b"(")
            pending.append(iter(item.items))


def pack(value: Value) -> bytes:
    """
    Canonical representation of ``value``.

    An atom packs as its decimal length, a colon and its bytes, preceded by
    the display hint in the same form inside brackets when there is one.
    A list packs as its members' packings, in order, inside parentheses.
    """
    buf = io.BytesIO()
    pack_into(buf, value)
    return buf.getvalue()


def _string_len(data: bytes) -> int:
    return len(str(len(data))) + 1 + len(data)


def packed_len(value: Value) -> int:
    """Length of ``pack(value)``, computed without building it."""
    if isinstance(value, Atom):
        size = _string_len(value.value)
        if value.display_hint:
            size += 2 + _string_len(value.display_hint)
        return size
    return sum(
        packed_len(node) if isinstance(node, Atom) else 2
        for node in value.iter_all()
    )


def to_transport(value: Value) -> str:
    """Transport encoding: ``{`` + base64 of the canonical form + ``}``."""
    return "{" + base64.b64encode(pack(value)).decode("ascii") + "}"


def _quote(data: bytes) -> bytes:
    out = bytearray(b'"')
    for c in data:
        escaped = QUOTED_ESCAPES.get(c)
        if escaped is None:
            out.append(c)
        else:
            out += escaped
    out.append(ord('"'))
    return bytes(out)


def format_string(data: bytes) -> str:
    """
    Most legible encoding of a byte string.

    A bare token when every byte is a token character (and the first is not
    a digit, which would read back as a length prefix), a quoted string when
    every byte is printable or has an escape, base64 otherwise.
    """
    if not data:
        return '""'
    if is_token(data) and data[0] not in DECIMAL_DIGIT:
        return data.decode("ascii")
    if all(c in QUOTABLE_CHAR for c in data):
        return _quote(data).decode("ascii")
    return "|" + base64.b64encode(data).decode("ascii") + "|"


def render(value: Value) -> str:
    """
    Advanced representation of ``value`` on a single line.

    Not unique, since several advanced forms denote the same tree, but always
    parseable back to a tree equal to ``value``.
    """
    parts = []
    # [iterator over members, members written so far] per open list
    pending = [[iter((value,)), 0]]
    while pending:
        frame = pending[-1]
        item = next(frame[0], None)
        if item is None:
            pending.pop()
            if pending:
                parts.append(")")
            continue
        if frame[1]:
            parts.append(" ")
        frame[1] += 1
        if isinstance(item, Atom):
            parts.append(_render_atom(item))
        else:
            parts.append("(")
            pending.append([iter(item.items), 0])
    return "".join(parts)


def _render_atom(value: Atom) -> str:
    text = format_string(value.value)
    if value.display_hint:
        return "[" + format_string(value.display_hint) + "]" + text
    return text
