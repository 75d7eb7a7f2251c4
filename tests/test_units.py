"""Tests for grouping leaves into units."""

from __future__ import annotations

import pytest

from quiremap.errors import OddBifoliaCount
from quiremap.leaves import Leaf, Unit
from quiremap.units import build_units, count_paired

from .conftest import make_leaves


def _positions(units: list[Unit]) -> list[tuple[int, ...]]:
    return [tuple(leaf.position for leaf in unit.leaves) for unit in units]


def test_regular_quire_pairs_from_outside_in():
    units = build_units(make_leaves(8))
    assert _positions(units) == [(1, 8), (2, 7), (3, 6), (4, 5)]
    assert all(unit.is_pair for unit in units)


def test_singles_do_not_consume_partners():
    units = build_units(make_leaves(8, singles={2, 6}))
    assert _positions(units) == [(1, 8), (2,), (3, 7), (4, 5), (6,)]


def test_trailing_singles_stand_alone():
    units = build_units(make_leaves(8, singles={7, 8}))
    assert _positions(units) == [(1, 6), (2, 5), (3, 4), (7,), (8,)]


def test_leading_singles_stand_alone():
    units = build_units(make_leaves(8, singles={1, 2}))
    assert _positions(units) == [(1,), (2,), (3, 8), (4, 7), (5, 6)]


def test_all_singles():
    units = build_units(make_leaves(3, singles={1, 2, 3}))
    assert _positions(units) == [(1,), (2,), (3,)]


def test_empty():
    assert build_units([]) == []


def test_lone_paired_leaf_raises():
    with pytest.raises(OddBifoliaCount) as exc:
        build_units([Leaf(1)])
    assert exc.value.count == 1


def test_unpartnered_leaf_after_singles_raises():
    leaves = [Leaf(1), Leaf(2, single=True), Leaf(3), Leaf(4)]
    with pytest.raises(OddBifoliaCount, match="found: 3"):
        build_units(leaves)


def test_count_paired():
    assert count_paired(make_leaves(6, singles={1, 4})) == 4


def test_unit_rejects_wrong_size():
    with pytest.raises(ValueError):
        Unit(())
