"""
In-memory tree for canonical S-expressions.

A value is exactly one of:
- ``Atom``: a byte string with an optional display hint
- ``List``: an ordered sequence of values

Both are frozen dataclasses. Trees are never mutated after construction, so
they can be shared freely and used as dict keys.

Examples:
    (3:foo[10:text/plain]3:bar)
    → List((Atom(b"foo"), Atom(b"bar", display_hint=b"text/plain")))
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional, Union, overload

BytesLike = Union[bytes, bytearray, memoryview]


def _to_bytes(data: BytesLike | str, what: str) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise TypeError(f"{what} must be bytes or str, not {type(data).__name__}")


@dataclass(frozen=True)
class Atom:
    """
    Leaf value: an opaque byte string plus an optional display hint.

    There are no semantics attached to ``value``; it could be UTF-8 text, a
    big-endian integer or any other byte sequence. The display hint
    conventionally tells a user agent how to interpret it, e.g. a MIME type.

    An empty display hint is the same as no display hint; both are stored as
    ``None`` so that equality, hashing and packing agree.
    """

    value: bytes = b""
    display_hint: Optional[bytes] = None

    def __post_init__(self):
        object.__setattr__(self, "value", _to_bytes(self.value, "Atom value"))
        hint = self.display_hint
        if hint is not None:
            hint = _to_bytes(hint, "Atom display hint") or None
        object.__setattr__(self, "display_hint", hint)

    @property
    def is_atom(self) -> bool:
        return True

    @property
    def is_list(self) -> bool:
        return False

    def pack(self) -> bytes:
        """Canonical representation, e.g. ``[10:text/plain]3:bar``."""
        from .serializer import pack

        return pack(self)

    def packed_len(self) -> int:
        from .serializer import packed_len

        return packed_len(self)

    def to_transport(self) -> str:
        from .serializer import to_transport

        return to_transport(self)

    def render(self) -> str:
        from .serializer import render

        return render(self)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        if self.display_hint is None:
            return f"Atom({self.value!r})"
        return f"Atom({self.value!r}, display_hint={self.display_hint!r})"


@dataclass(frozen=True)
class List:
    """
    Ordered, possibly empty sequence of values.

    Order is significant for packing, rendering and equality. Items are
    stored as a tuple; any iterable of ``Atom``/``List`` is accepted.
    """

    items: tuple[Value, ...] = field(default_factory=tuple)

    def __post_init__(self):
        items = tuple(self.items)
        for item in items:
            if not isinstance(item, (Atom, List)):
                raise TypeError(
                    f"List items must be Atom or List, not {type(item).__name__}"
                )
        object.__setattr__(self, "items", items)

    @classmethod
    def of(cls, *items: Value) -> List:
        """Create a list from positional items."""
        return cls(items)

    @property
    def is_atom(self) -> bool:
        return False

    @property
    def is_list(self) -> bool:
        return True

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Value]:
        return iter(self.items)

    @overload
    def __getitem__(self, index: int) -> Value: ...

    @overload
    def __getitem__(self, index: slice) -> List: ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return List(self.items[index])
        return self.items[index]

    def iter_all(self) -> Iterator[Value]:
        """Iterate over this list and all descendants, depth first."""
        stack: list[Value] = [self]
        while stack:
            node = stack.pop()
            yield node
            if isinstance(node, List):
                stack.extend(reversed(node.items))

    def pack(self) -> bytes:
        """Canonical representation, e.g. ``(3:foo3:bar)``."""
        from .serializer import pack

        return pack(self)

    def packed_len(self) -> int:
        from .serializer import packed_len

        return packed_len(self)

    def to_transport(self) -> str:
        from .serializer import to_transport

        return to_transport(self)

    def render(self) -> str:
        from .serializer import render

        return render(self)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"List({list(self.items)!r})"


Value = Union[Atom, List]


def is_list(value: Value) -> bool:
    """True if ``value`` is a List."""
    return isinstance(value, List)


def equal(a: Value, b: Value) -> bool:
    """
    Structural equality of two trees.

    Atoms compare value and display hint byte for byte; lists compare length
    and then each member in order. An Atom never equals a List. Works at any
    nesting depth.
    """
    pending = [(a, b)]
    while pending:
        x, y = pending.pop()
        if isinstance(x, Atom):
            if not (
                isinstance(y, Atom)
                and x.value == y.value
                and x.display_hint == y.display_hint
            ):
                return False
        elif not isinstance(y, List) or len(x.items) != len(y.items):
            return False
        else:
            pending.extend(zip(x.items, y.items))
    return True
