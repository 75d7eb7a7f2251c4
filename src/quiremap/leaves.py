"""
Value types for leaves, units, and the slots of a filled quire diagram.

All types here are frozen dataclasses. Building a diagram works on snapshots
of these values and never writes back to the leaves it reads, so a quire's
leaf tuple can be shared freely between callers.

Numbering conventions:
- `Leaf.position` is the leaf's 1-based place in its quire.
- `ExpandedLeaf.conjoin` and `Placeholder.conjoin` hold original leaf
  positions (used while placeholders are being inserted).
- `Slot.position` and `Slot.conjoin` hold final slot positions in the filled
  diagram; `Slot.number` keeps the original leaf position.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Leaf:
    """One leaf of a quire, as stored."""

    position: int
    folio_number: str | None = None
    single: bool = False


@dataclass(frozen=True)
class Unit:
    """
    One physical sheet: a lone leaf, or a bifolium of two leaves in
    sequence order (first occurring leaf, then its partner).
    """

    leaves: tuple[Leaf, ...]

    def __post_init__(self) -> None:
        if len(self.leaves) not in (1, 2):
            raise ValueError(f"A unit holds one or two leaves, not {len(self.leaves)}")

    @property
    def first(self) -> Leaf:
        return self.leaves[0]

    @property
    def is_pair(self) -> bool:
        return len(self.leaves) == 2


@dataclass(frozen=True)
class ExpandedLeaf:
    """A leaf snapshot annotated with the position of its conjoin, if any."""

    position: int
    folio_number: str | None
    single: bool
    conjoin: int | None = None

    @classmethod
    def from_leaf(cls, leaf: Leaf, conjoin: int | None = None) -> ExpandedLeaf:
        return cls(
            position=leaf.position,
            folio_number=leaf.folio_number,
            single=leaf.single,
            conjoin=conjoin,
        )


@dataclass(frozen=True)
class Placeholder:
    """A ghost slot balancing the single leaf at original position `conjoin`."""

    conjoin: int


# An element of the sequence while placeholders are being inserted.
WorkingSlot = ExpandedLeaf | Placeholder


@dataclass(frozen=True)
class Slot:
    """
    One position in a filled quire diagram.

    Real leaves carry their original `number` and folio label. Placeholders
    have `number=None` and `is_placeholder=True`. `conjoin` is the final
    position of the partner slot; it is `None` for a real single leaf.
    """

    position: int
    conjoin: int | None
    number: int | None = None
    folio_number: str | None = None
    single: bool = False
    is_placeholder: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Plain dict form, for JSON output."""
        if self.is_placeholder:
            return {"position": self.position, "conjoin": self.conjoin, "is_placeholder": True}
        return {
            "position": self.position,
            "number": self.number,
            "label": self.folio_number,
            "single": self.single,
            "conjoin": self.conjoin,
        }
