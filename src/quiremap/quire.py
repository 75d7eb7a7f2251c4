"""
The quire: an ordered gathering of leaves, and the entry point for building
its filled diagram.

Usage:
    from quiremap.quire import Quire

    quire = Quire(leaf_count_input=8)
    quire.save()
    slots = quire.build_filled_diagram()
"""

from __future__ import annotations

import dataclasses
from collections.abc import Collection, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from quiremap.errors import OddBifoliaCount
from quiremap.expansion import expand_units
from quiremap.folios import generate_leaves, leading_folio_number
from quiremap.leaves import ExpandedLeaf, Leaf, Slot, Unit
from quiremap.placeholders import fill_placeholders
from quiremap.units import build_units, count_paired

if TYPE_CHECKING:
    from quiremap.manuscript import Manuscript


@dataclass(frozen=True)
class QuireSummary:
    """A quire's number and its units."""

    number: int | None
    units: tuple[Unit, ...]


class Quire:
    """
    A quire and its leaves, kept in position order with positions 1..n.

    `leaf_count_input` and `single_positions` request leaves to be generated
    on `save()` when the quire has none. `manuscript` is set by the owning
    `Manuscript`.
    """

    def __init__(
        self,
        leaves: Iterable[Leaf] = (),
        leaf_count_input: int | None = None,
        single_positions: Collection[int] = (),
    ) -> None:
        self._leaves: list[Leaf] = []
        self._set_leaves(leaves)
        self.leaf_count_input = leaf_count_input
        self.single_positions = frozenset(single_positions)
        self.manuscript: Manuscript | None = None

    def __repr__(self) -> str:
        return f"Quire(number={self.number!r}, leaves={len(self._leaves)})"

    @property
    def leaves(self) -> tuple[Leaf, ...]:
        """Snapshot of the leaves in position order."""
        return tuple(self._leaves)

    @property
    def number(self) -> int | None:
        """Position of this quire in its manuscript, or `None` if detached."""
        if self.manuscript is None:
            return None
        return self.manuscript.position_of(self)

    @property
    def name(self) -> str:
        title = self.manuscript.title if self.manuscript is not None else ""
        return f"{title}  Quire {self.number}"

    @property
    def previous(self) -> Quire | None:
        if self.manuscript is None:
            return None
        return self.manuscript.before(self)

    @property
    def next(self) -> Quire | None:
        if self.manuscript is None:
            return None
        return self.manuscript.after(self)

    # === Leaf management ===

    def _set_leaves(self, leaves: Iterable[Leaf]) -> None:
        ordered = sorted(leaves, key=lambda leaf: leaf.position)
        self._leaves = [
            dataclasses.replace(leaf, position=index)
            for index, leaf in enumerate(ordered, start=1)
        ]

    def add_leaf(
        self,
        folio_number: str | None = None,
        single: bool = False,
        position: int | None = None,
    ) -> Leaf:
        """
        Insert a leaf at `position` (1-based; default is the end) and shift
        the leaves after it down by one.
        """
        if position is None:
            position = len(self._leaves) + 1
        if not 1 <= position <= len(self._leaves) + 1:
            raise IndexError(f"Leaf position out of range: {position}")
        # Leaves at and after the new position move down; the new leaf sorts first
        shifted = [
            dataclasses.replace(leaf, position=leaf.position + 1)
            if leaf.position >= position
            else leaf
            for leaf in self._leaves
        ]
        leaf = Leaf(position=position, folio_number=folio_number, single=single)
        self._set_leaves([*shifted, leaf])
        return self._leaves[position - 1]

    def remove_leaf(self, position: int) -> Leaf:
        """Remove the leaf at `position` and close the gap."""
        leaf = self._leaf_at(position)
        self._set_leaves(lf for lf in self._leaves if lf is not leaf)
        return leaf

    def mark_single(self, position: int, single: bool = True) -> Leaf:
        leaf = dataclasses.replace(self._leaf_at(position), single=single)
        self._leaves[position - 1] = leaf
        return leaf

    def clear_leaves(self) -> None:
        self._leaves = []

    def _leaf_at(self, position: int) -> Leaf:
        if not 1 <= position <= len(self._leaves):
            raise IndexError(f"No leaf at position {position}")
        return self._leaves[position - 1]

    def previous_folio_number(self) -> int:
        """
        Folio number of the last leaf of the previous quire, or 0 when there
        is no previous quire or it has no leaves.
        """
        previous = self.previous
        if previous is None or not previous.leaves:
            return 0
        return leading_folio_number(previous.leaves[-1].folio_number)

    def generate_leaves(self, count: int, starting_folio: str | int | None = None) -> None:
        """
        Replace this quire's leaves with `count` new ones numbered from the
        folio after `starting_folio` (default: the previous quire's last folio).
        """
        if starting_folio is None:
            starting_folio = self.previous_folio_number()
        self._leaves = generate_leaves(count, starting_folio, self.single_positions)

    # === Validation and saving ===

    def validate(self) -> None:
        """Raise `OddBifoliaCount` if the number of paired leaves is odd."""
        paired = count_paired(self._leaves)
        if paired % 2:
            raise OddBifoliaCount(paired)

    @property
    def is_valid(self) -> bool:
        try:
            self.validate()
        except OddBifoliaCount:
            return False
        return True

    def create_leaves(self) -> None:
        """Generate the requested leaves if none exist yet."""
        if self.leaf_count_input and not self._leaves:
            self.generate_leaves(int(self.leaf_count_input))

    def save(self) -> None:
        """
        Generate any requested leaves, then validate. If validation fails the
        leaves are put back as they were, so a corrected `leaf_count_input`
        takes effect on the next save.
        """
        saved = list(self._leaves)
        self.create_leaves()
        try:
            self.validate()
        except OddBifoliaCount:
            self._leaves = saved
            raise

    # === Diagram ===

    def units(self) -> list[Unit]:
        return build_units(self.leaves)

    def expanded_leaves(self) -> list[ExpandedLeaf]:
        return expand_units(self.units())

    def build_filled_diagram(self) -> list[Slot]:
        """
        Return the leaves with conjoins, with a placeholder slot added for the
        partner of each single leaf. For example, with leaves 2 and 6 single
        in a quire of eight:

            1  n=1  conjoin=10
            2  n=2  single
            3  n=3  conjoin=8
            4  --   conjoin=7   (placeholder for n=6)
            5  n=4  conjoin=6
            6  n=5  conjoin=5
            7  n=6  single
            8  n=7  conjoin=3
            9  --   conjoin=2   (placeholder for n=2)
           10  n=8  conjoin=1

        Recomputed on every call from a snapshot of the leaves.
        """
        self.validate()
        return fill_placeholders(self.expanded_leaves())

    def to_summary(self) -> QuireSummary:
        return QuireSummary(number=self.number, units=tuple(self.units()))
