"""
Grouping of a quire's leaves into units (single leaves and bifolia).

Pairing works from both ends of the quire inward, outermost sheet first,
the way a quire is collated. A paired leaf at the front is joined to the
nearest paired leaf at the back; single leaves met at the back on the way
become units of their own and never consume a partner.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from quiremap.errors import OddBifoliaCount
from quiremap.leaves import Leaf, Unit

log = logging.getLogger(__name__)


def count_paired(leaves: Sequence[Leaf]) -> int:
    """Number of leaves not marked single."""
    return sum(1 for leaf in leaves if not leaf.single)


def build_units(leaves: Sequence[Leaf]) -> list[Unit]:
    """
    Group position-ordered `leaves` into units, sorted by the position of
    each unit's first leaf. Every leaf appears in exactly one unit.

    Raises `OddBifoliaCount` if a paired leaf is left without a partner.
    """
    log.debug("Building units from %d leaves", len(leaves))
    units: list[Unit] = []
    front = 0
    back = len(leaves) - 1
    while front <= back:
        leaf = leaves[front]
        front += 1
        if leaf.single:
            units.append(Unit((leaf,)))
            continue

        # Trailing singles stand alone until a partner is reached
        while back >= front and leaves[back].single:
            units.append(Unit((leaves[back],)))
            back -= 1
        if back < front:
            raise OddBifoliaCount(count_paired(leaves))

        units.append(Unit((leaf, leaves[back])))
        back -= 1

    units.sort(key=lambda unit: unit.first.position)
    log.debug("Built %d units (%d bifolia)", len(units), sum(1 for u in units if u.is_pair))
    return units
