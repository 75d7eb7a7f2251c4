"""Expansion of units back into a flat, conjoin-annotated leaf sequence."""

from __future__ import annotations

from collections.abc import Iterable

from quiremap.leaves import ExpandedLeaf, Unit


def expand_unit(unit: Unit) -> list[ExpandedLeaf]:
    """
    A bifolium expands to two leaves that name each other as conjoin; a
    lone leaf expands to one leaf with no conjoin.
    """
    if unit.is_pair:
        first, second = unit.leaves
        return [
            ExpandedLeaf.from_leaf(first, conjoin=second.position),
            ExpandedLeaf.from_leaf(second, conjoin=first.position),
        ]
    return [ExpandedLeaf.from_leaf(unit.first)]


def expand_units(units: Iterable[Unit]) -> list[ExpandedLeaf]:
    """Expand all units and restore original leaf order."""
    expanded = [leaf for unit in units for leaf in expand_unit(unit)]
    expanded.sort(key=lambda leaf: leaf.position)
    return expanded
