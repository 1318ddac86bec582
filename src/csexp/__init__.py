"""
csexp: canonical S-expressions for Python.

Canonical S-expressions are a compact, ordered, byte-exact representation
for structured data that must hash and sign deterministically. A value is
either an atom (a byte string with an optional display hint) or a list of
values.

Modules:
    sexp: Data model, reader, serializers and builders
    exceptions: Error hierarchy raised by the reader

Quick Start::

    from csexp import parse, pack, render, to_transport

    value, rest = parse(b"(3:foo3:bar[3:bin]8:baz quux)")
    render(value)        # '(foo bar [bin]"baz quux")'
    to_transport(value)  # '{KDM6Zm9vMzpiYXJbMzpiaW5dODpiYXogcXV1eCk=}'
    pack(value)          # b'(3:foo3:bar[3:bin]8:baz quux)'
"""

__version__ = "0.1.0"

from csexp.exceptions import (
    CSExpError,
    LengthMismatchError,
    ParseError,
    SyntaxError,
    UnexpectedEndOfStreamError,
    UnterminatedError,
)
from csexp.sexp import (
    Atom,
    ByteStream,
    List,
    Reader,
    Value,
    atom,
    equal,
    is_list,
    pack,
    packed_len,
    parse,
    read,
    render,
    slist,
    to_transport,
)

__all__ = [
    # Version
    "__version__",
    # Data model
    "Atom",
    "List",
    "Value",
    "atom",
    "slist",
    # Operations
    "parse",
    "read",
    "Reader",
    "ByteStream",
    "pack",
    "packed_len",
    "render",
    "to_transport",
    "equal",
    "is_list",
    # Errors
    "CSExpError",
    "ParseError",
    "SyntaxError",
    "LengthMismatchError",
    "UnterminatedError",
    "UnexpectedEndOfStreamError",
]
