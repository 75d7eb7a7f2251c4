from __future__ import annotations

from collections.abc import Collection, Sequence

from quiremap.leaves import Leaf, Slot


def make_leaves(count: int, singles: Collection[int] = ()) -> list[Leaf]:
    """Leaves 1..count with folio numbers matching positions."""
    return [Leaf(n, folio_number=str(n), single=n in singles) for n in range(1, count + 1)]


def assert_balanced(slots: Sequence[Slot]) -> None:
    """Every slot is joined to its mirror slot; singles are mirrored by their placeholder."""
    size = len(slots)
    for slot in slots:
        mirror = slots[size - slot.position]
        if slot.conjoin is None:
            assert mirror.is_placeholder
            assert mirror.conjoin == slot.position
        else:
            assert slot.conjoin == mirror.position
