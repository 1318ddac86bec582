"""Tests for the Atom/List data model and structural equality."""

import dataclasses

import pytest

from csexp import Atom, List, equal, is_list


class TestAtom:
    """Tests for Atom construction and properties."""

    def test_atom_from_bytes(self):
        atom = Atom(b"hello")
        assert atom.is_atom is True
        assert atom.is_list is False
        assert atom.value == b"hello"
        assert atom.display_hint is None

    def test_atom_from_str(self):
        """Text values are stored as UTF-8."""
        assert Atom("héllo").value == "héllo".encode("utf-8")

    def test_atom_from_bytearray(self):
        atom = Atom(bytearray(b"abc"), display_hint=memoryview(b"t"))
        assert atom.value == b"abc"
        assert atom.display_hint == b"t"
        assert isinstance(atom.value, bytes)

    def test_empty_hint_is_no_hint(self):
        """An empty display hint is stored as None."""
        assert Atom(b"x", display_hint=b"").display_hint is None

    def test_empty_hint_equal_and_packs_identically(self):
        a = Atom(b"x", display_hint=None)
        b = Atom(b"x", display_hint=b"")
        assert equal(a, b)
        assert a == b
        assert a.pack() == b.pack() == b"1:x"
        assert hash(a) == hash(b)

    def test_hint_participates_in_equality(self):
        assert not equal(Atom(b"x", display_hint=b"a"), Atom(b"x"))
        assert not equal(Atom(b"x", display_hint=b"a"), Atom(b"x", display_hint=b"b"))

    def test_immutable(self):
        atom = Atom(b"x")
        with pytest.raises(dataclasses.FrozenInstanceError):
            atom.value = b"y"

    def test_rejects_other_types(self):
        with pytest.raises(TypeError, match="Atom value"):
            Atom(42)

    def test_repr(self):
        assert repr(Atom(b"x")) == "Atom(b'x')"
        assert repr(Atom(b"x", display_hint=b"h")) == "Atom(b'x', display_hint=b'h')"


class TestList:
    """Tests for List construction and sequence behaviour."""

    def test_empty(self):
        node = List()
        assert node.is_list is True
        assert node.is_atom is False
        assert len(node) == 0

    def test_items_become_tuple(self):
        node = List([Atom(b"a"), Atom(b"b")])
        assert isinstance(node.items, tuple)
        assert len(node) == 2

    def test_of(self):
        assert List.of(Atom(b"a")) == List([Atom(b"a")])

    def test_indexing_and_iteration(self):
        node = List.of(Atom(b"a"), Atom(b"b"), Atom(b"c"))
        assert node[0] == Atom(b"a")
        assert node[-1] == Atom(b"c")
        assert node[1:] == List.of(Atom(b"b"), Atom(b"c"))
        assert list(node) == [Atom(b"a"), Atom(b"b"), Atom(b"c")]

    def test_rejects_non_nodes(self):
        with pytest.raises(TypeError, match="List items must be Atom or List"):
            List([b"raw"])

    def test_immutable(self):
        node = List()
        with pytest.raises(dataclasses.FrozenInstanceError):
            node.items = ()

    def test_iter_all(self):
        inner = List.of(Atom(b"b"))
        node = List.of(Atom(b"a"), inner)
        assert list(node.iter_all()) == [node, Atom(b"a"), inner, Atom(b"b")]

    def test_hashable(self):
        assert len({List.of(Atom(b"a")), List.of(Atom(b"a"))}) == 1


class TestEqual:
    """Tests for structural equality."""

    def test_empty_lists_equal(self):
        assert equal(List(), List())
        assert equal(List(), List([]))

    def test_atom_never_equals_list(self):
        assert not equal(Atom(b""), List())
        assert not equal(List(), Atom(b""))
        assert Atom(b"") != List()

    def test_ordering_matters(self):
        ab = List.of(Atom(b"a"), Atom(b"b"))
        ba = List.of(Atom(b"b"), Atom(b"a"))
        assert not equal(ab, ba)

    def test_length_matters(self):
        assert not equal(List.of(Atom(b"a")), List.of(Atom(b"a"), Atom(b"a")))

    def test_nested(self):
        a = List.of(Atom(b"a"), List.of(Atom(b"b", display_hint=b"h")))
        b = List.of(Atom(b"a"), List.of(Atom(b"b", display_hint=b"h")))
        assert equal(a, b)

    def test_is_list(self):
        assert is_list(List())
        assert not is_list(Atom(b"abc"))
