"""
S-expression builders.

Convenience functions for building trees directly instead of parsing them.

Usage:
    from csexp.sexp.builders import atom, slist

    key = slist(
        "public-key",
        slist("rsa-pkcs1", slist("e", atom(b"\\x01\\x00\\x01")), slist("n", modulus)),
    )
    # (public-key (rsa-pkcs1 (e |AQAB|) (n |...|)))
"""

from __future__ import annotations

from typing import Optional, Union

from .nodes import Atom, BytesLike, List, Value

Buildable = Union[Value, BytesLike, str, int, list, tuple]


def _as_bytes(data: Union[BytesLike, str, int]) -> bytes:
    if isinstance(data, bool):
        raise TypeError("cannot build an atom from a bool")
    if isinstance(data, int):
        return str(data).encode("ascii")
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


def atom(value: Union[BytesLike, str, int], hint: Optional[Union[BytesLike, str]] = None) -> Atom:
    """Build an atom; text is UTF-8 encoded and integers become decimal text."""
    return Atom(_as_bytes(value), display_hint=None if hint is None else _as_bytes(hint))


def build(item: Buildable) -> Value:
    """Convert ``item`` to a node, turning Python lists and tuples into Lists."""
    if isinstance(item, (Atom, List)):
        return item
    if isinstance(item, (list, tuple)):
        return List(build(child) for child in item)
    return atom(item)


def slist(*items: Buildable) -> List:
    """Build a list node, e.g. ``slist("hash", "sha256", digest)``."""
    return List(build(item) for item in items)
