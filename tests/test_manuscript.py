"""Tests for the ordered quire collection."""

from __future__ import annotations

import pytest

from quiremap.errors import OddBifoliaCount
from quiremap.leaves import Leaf
from quiremap.manuscript import Manuscript
from quiremap.quire import Quire

from .conftest import make_leaves


def _folios(quire: Quire) -> list[str | None]:
    return [leaf.folio_number for leaf in quire.leaves]


def test_generated_folios_continue_across_quires():
    ms = Manuscript("MS 1")
    first = ms.add_quire(Quire(leaf_count_input=4))
    second = ms.add_quire(Quire(leaf_count_input=4))
    assert _folios(first) == ["1", "2", "3", "4"]
    assert _folios(second) == ["5", "6", "7", "8"]


def test_generated_folios_follow_leading_number():
    ms = Manuscript("MS 1")
    ms.add_quire(Quire([Leaf(1, "11r"), Leaf(2, "12v")]))
    quire = ms.add_quire(Quire(leaf_count_input=2))
    assert _folios(quire) == ["13", "14"]


def test_generated_folios_after_unnumbered_quire():
    ms = Manuscript("MS 1")
    ms.add_quire(Quire([Leaf(1, "i"), Leaf(2, "ii")]))
    quire = ms.add_quire(Quire(leaf_count_input=2))
    assert _folios(quire) == ["1", "2"]


def test_generated_folios_after_empty_quire():
    ms = Manuscript("MS 1")
    ms.add_quire()
    quire = ms.add_quire(Quire(leaf_count_input=2))
    assert _folios(quire) == ["1", "2"]


def test_name_and_number():
    ms = Manuscript("Walters W.102", [Quire(make_leaves(2)), Quire(make_leaves(2))])
    assert ms.quire(2).number == 2
    assert ms.quire(2).name == "Walters W.102  Quire 2"


def test_previous_and_next():
    ms = Manuscript("MS", [Quire(), Quire(), Quire()])
    first, second, third = ms.quires
    assert first.previous is None
    assert first.next is second
    assert second.previous is first
    assert third.next is None


def test_invalid_quire_not_added():
    ms = Manuscript("MS")
    quire = Quire([Leaf(1)])
    with pytest.raises(OddBifoliaCount):
        ms.add_quire(quire)
    assert len(ms) == 0
    assert quire.manuscript is None


def test_odd_leaf_count_not_added():
    ms = Manuscript("MS")
    with pytest.raises(OddBifoliaCount):
        ms.add_quire(Quire(leaf_count_input=3))
    assert len(ms) == 0


def test_insert_quire_renumbers():
    ms = Manuscript("MS", [Quire(), Quire()])
    old_first = ms.quire(1)
    inserted = ms.insert_quire(1, Quire())
    assert inserted.number == 1
    assert old_first.number == 2
    assert len(ms) == 3


def test_insert_quire_out_of_range():
    with pytest.raises(IndexError):
        Manuscript("MS").insert_quire(2, Quire())


def test_quire_in_two_manuscripts():
    quire = Manuscript("A", [Quire()]).quire(1)
    with pytest.raises(ValueError):
        Manuscript("B").add_quire(quire)


def test_move_quire():
    ms = Manuscript("MS", [Quire(), Quire(), Quire()])
    first, second, third = ms.quires
    ms.move_quire(first, 3)
    assert list(ms) == [second, third, first]
    assert first.number == 3


def test_remove_quire_cascades():
    ms = Manuscript("MS", [Quire(make_leaves(4)), Quire(make_leaves(2))])
    first, second = ms.quires
    ms.remove_quire(first)
    assert first.leaves == ()
    assert first.manuscript is None
    assert second.number == 1
    assert len(ms) == 1


def test_missing_quire_number():
    with pytest.raises(IndexError):
        Manuscript("MS").quire(1)


def test_rejected_quire_can_be_corrected_and_re_added():
    ms = Manuscript("MS")
    quire = Quire(leaf_count_input=3)
    with pytest.raises(OddBifoliaCount):
        ms.add_quire(quire)
    assert quire.leaves == ()

    quire.leaf_count_input = 4
    ms.add_quire(quire)
    assert _folios(quire) == ["1", "2", "3", "4"]
    assert quire.number == 1


def test_failed_save_keeps_existing_leaves():
    quire = Quire([Leaf(1), Leaf(2)])
    quire.add_leaf("3")
    with pytest.raises(OddBifoliaCount):
        quire.save()
    assert len(quire.leaves) == 3
