"""Tests for S-expression builders."""

import pytest

from csexp.sexp.builders import atom, build, slist
from csexp.sexp.nodes import Atom, List


class TestAtomBuilder:
    """Tests for the atom() builder."""

    def test_from_str(self):
        assert atom("foo") == Atom(b"foo")

    def test_from_bytes(self):
        assert atom(b"\x00\x01") == Atom(b"\x00\x01")

    def test_from_int(self):
        """Integers become their decimal text."""
        assert atom(65537) == Atom(b"65537")

    def test_with_hint(self):
        assert atom("x", hint="text/plain") == Atom(b"x", display_hint=b"text/plain")

    def test_rejects_bool(self):
        with pytest.raises(TypeError):
            atom(True)


class TestListBuilder:
    """Tests for slist() and build()."""

    def test_flat(self):
        assert slist("a", "b") == List.of(Atom(b"a"), Atom(b"b"))

    def test_nested_python_lists(self):
        node = slist("hash", ["sha256", b"\x01"], ("n", 3))
        assert node == List.of(
            Atom(b"hash"),
            List.of(Atom(b"sha256"), Atom(b"\x01")),
            List.of(Atom(b"n"), Atom(b"3")),
        )

    def test_nodes_pass_through(self):
        hinted = atom("x", hint="h")
        assert slist(hinted)[0] is hinted

    def test_build_list(self):
        assert build([]) == List()

    def test_render(self):
        node = slist("public-key", slist("e", atom(b"\x01\x00\x01")))
        assert node.render() == "(public-key (e |AQAB|))"
        assert node.pack() == b"(10:public-key(1:e3:\x01\x00\x01))"
