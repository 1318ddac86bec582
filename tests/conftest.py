"""Pytest fixtures for csexp tests."""

import io

import pytest

from csexp import Atom, List

# (foo bar [bin]"baz quux") in its three representations
CANONICAL = b"(3:foo3:bar[3:bin]8:baz quux)"
ADVANCED = b'(foo bar [bin]"baz quux")'
TRANSPORT = b"{KDM6Zm9vMzpiYXJbMzpiaW5dODpiYXogcXV1eCk=}"

# Mixed advanced-form input covering every string encoding
MIXED = (
    b'([foo/bar]#7a # ["quux beam"]bar ([jim]|Zm9vYmFy YmF6|)'
    b'"foo bar\\r"{Zm9vYmFyYmF6})'
)


@pytest.fixture
def sample_value() -> List:
    """The tree all three sample representations denote."""
    return List.of(
        Atom(b"foo"),
        Atom(b"bar"),
        Atom(b"baz quux", display_hint=b"bin"),
    )


@pytest.fixture
def sequence_stream() -> io.BytesIO:
    """A stream holding several top-level values in different forms."""
    return io.BytesIO(b"(a b) 3:foo\n{KDM6Zm9vKQ==}  [text]plain")


@pytest.fixture
def canonical_text() -> bytes:
    return CANONICAL


@pytest.fixture
def advanced_text() -> bytes:
    return ADVANCED


@pytest.fixture
def transport_text() -> bytes:
    return TRANSPORT


@pytest.fixture
def mixed_text() -> bytes:
    return MIXED


class UnseekableSource(io.RawIOBase):
    """Readable binary source with neither peek() nor seek()."""

    def __init__(self, data: bytes):
        super().__init__()
        self._data = io.BytesIO(data)

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        chunk = self._data.read(len(buffer))
        buffer[: len(chunk)] = chunk
        return len(chunk)


@pytest.fixture
def unseekable_source():
    """Factory for sources that cannot push a byte back."""
    return UnseekableSource
