"""Tests for expanding units into conjoin-annotated leaves."""

from __future__ import annotations

from quiremap.expansion import expand_unit, expand_units
from quiremap.leaves import ExpandedLeaf, Leaf, Unit
from quiremap.units import build_units

from .conftest import make_leaves


def test_pair_expands_to_reciprocal_conjoins():
    first, second = Leaf(1, "1"), Leaf(8, "8")
    assert expand_unit(Unit((first, second))) == [
        ExpandedLeaf(1, "1", False, conjoin=8),
        ExpandedLeaf(8, "8", False, conjoin=1),
    ]


def test_single_expands_without_conjoin():
    leaf = Leaf(2, "2", single=True)
    assert expand_unit(Unit((leaf,))) == [ExpandedLeaf(2, "2", True, conjoin=None)]


def test_expanded_leaves_in_original_order():
    expanded = expand_units(build_units(make_leaves(8, singles={2, 6})))
    assert [leaf.position for leaf in expanded] == list(range(1, 9))
    assert [leaf.conjoin for leaf in expanded] == [8, None, 7, 5, 4, None, 3, 1]


def test_conjoins_are_reciprocal():
    expanded = expand_units(build_units(make_leaves(12, singles={1, 5})))
    by_position = {leaf.position: leaf for leaf in expanded}
    for leaf in expanded:
        if leaf.conjoin is not None:
            assert by_position[leaf.conjoin].conjoin == leaf.position
