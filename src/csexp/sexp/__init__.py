"""
Canonical S-expressions (Rivest's draft) for csexp.

Provides:
- An immutable tree of ``Atom`` and ``List`` nodes
- A reader for the canonical, advanced and transport representations
- The canonical packer, the advanced-form printer and transport encoding
- Structural equality

Usage:
    from csexp.sexp import parse, pack, render

    value, rest = parse(b'(foo [bin]"baz quux")')
    pack(value)    # b'(3:foo[3:bin]8:baz quux)'
    render(value)  # '(foo [bin]"baz quux")'
"""

from .builders import atom, build, slist
from .nodes import Atom, List, Value, equal, is_list
from .parser import Parser, Reader, parse, read
from .serializer import format_string, pack, pack_into, packed_len, render, to_transport
from .stream import ByteStream

__all__ = [
    # Data model
    "Atom",
    "List",
    "Value",
    "equal",
    "is_list",
    # Reading
    "ByteStream",
    "Parser",
    "Reader",
    "parse",
    "read",
    # Writing
    "pack",
    "pack_into",
    "packed_len",
    "render",
    "format_string",
    "to_transport",
    # Construction
    "atom",
    "build",
    "slist",
]
