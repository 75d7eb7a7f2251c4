"""
Placeholder insertion: balancing single leaves with ghost slots.

In a regular quire the conjoin numbers step by one from one end to the
other:

    n=1 join=8, n=2 join=7, n=3 join=6, n=4 join=5, ..., n=8 join=1

A single leaf leaves a hole in that run. With leaf 2 single (and leaf 7 now
pairing with leaf 1), the joins read 7, -, 6, 5, 4, 3, 1 and skip from 3 to
1 exactly where leaf 2's missing partner belongs. Each single leaf gets one
placeholder, inserted at the first such skip found by scanning from the end
of the quire nearer the hole. When the singles sit at the very start or end
of the quire there is no skip, and the placeholder goes at the near end of
the scan.

Key behaviors:
- Singles are handled one at a time in leaf order; each pass sees the
  placeholders added by earlier passes, and placeholders take part in the
  scan (they carry the number of the leaf they balance).
- The scan direction is an explicit `reverse` flag. The working sequence is
  never reversed in place; every pass returns a new tuple.
- A quire with no bifolia at all is mirrored: the placeholders are appended
  in reverse leaf order.
- Final slots are numbered 1..L, and conjoins are translated from original
  leaf numbers to final slot positions.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from quiremap.leaves import ExpandedLeaf, Placeholder, Slot, WorkingSlot

log = logging.getLogger(__name__)


def has_any_conjoins(leaves: Iterable[WorkingSlot | Slot]) -> bool:
    """True if at least one element of `leaves` has a conjoin."""
    return any(leaf.conjoin is not None for leaf in leaves)


def index_of_leaf(working: Sequence[WorkingSlot], number: int) -> int:
    """Index of the real leaf at original position `number`."""
    for index, slot in enumerate(working):
        if isinstance(slot, ExpandedLeaf) and slot.position == number:
            return index
    raise ValueError(f"No leaf numbered {number} in sequence")


def find_insertion_index(working: Sequence[WorkingSlot], reverse: bool) -> int:
    """
    Find where a placeholder belongs in `working`, scanning back to front
    when `reverse` is set and front to back otherwise.

    The scan tracks the conjoin number of the last numbered slot and stops at
    the first numbered slot whose conjoin is more than one step away. If no
    such skip exists the placeholder goes at the near end of the scan.
    Returns an index into `working` (not into the scan order).
    """
    scan = reversed(working) if reverse else iter(working)
    numbered = [(k, slot.conjoin) for k, slot in enumerate(scan) if slot.conjoin is not None]

    found = 0
    if numbered:
        last_cj = numbered[0][1] + (-1 if reverse else 1)
        for k, conjoin in numbered:
            if abs(conjoin - last_cj) > 1:
                found = k
                break
            last_cj = conjoin

    return len(working) - found if reverse else found


def insert_placeholder(working: Sequence[WorkingSlot], number: int) -> tuple[WorkingSlot, ...]:
    """
    Return a copy of `working` with a placeholder for the single leaf at
    original position `number` inserted.
    """
    position = index_of_leaf(working, number) + 1
    # Before the midpoint the hole is nearer the back, so scan from there
    reverse = position < len(working) // 2
    index = find_insertion_index(working, reverse)
    log.debug(
        "Placeholder for leaf %d: slot %d of %d, reverse=%s, insert at %d",
        number,
        position,
        len(working),
        reverse,
        index,
    )
    return (*working[:index], Placeholder(conjoin=number), *working[index:])


def mirror_singles(expanded: Sequence[ExpandedLeaf]) -> tuple[WorkingSlot, ...]:
    """
    For a quire of only single leaves, append placeholders for every leaf in
    reverse order:

        n=1, n=2  ->  n=1, n=2, (join=2), (join=1)
    """
    return (*expanded, *(Placeholder(conjoin=leaf.position) for leaf in reversed(expanded)))


def number_slots(working: Sequence[WorkingSlot]) -> list[Slot]:
    """
    Number the slots 1..L and point each conjoin at the final position of
    the slot it refers to. Real single leaves keep a `None` conjoin.
    """
    final_positions = {
        slot.position: index
        for index, slot in enumerate(working, start=1)
        if isinstance(slot, ExpandedLeaf)
    }
    slots: list[Slot] = []
    for index, slot in enumerate(working, start=1):
        conjoin = final_positions[slot.conjoin] if slot.conjoin is not None else None
        if isinstance(slot, Placeholder):
            slots.append(Slot(position=index, conjoin=conjoin, is_placeholder=True))
        else:
            slots.append(
                Slot(
                    position=index,
                    conjoin=conjoin,
                    number=slot.position,
                    folio_number=slot.folio_number,
                    single=slot.single,
                )
            )
    return slots


def fill_placeholders(expanded: Sequence[ExpandedLeaf]) -> list[Slot]:
    """
    Insert a placeholder for every single leaf in the position-ordered
    `expanded` sequence and return the numbered slots.
    """
    working: tuple[WorkingSlot, ...] = tuple(expanded)
    if not has_any_conjoins(working):
        working = mirror_singles(expanded)
    else:
        for leaf in expanded:
            if leaf.conjoin is None:
                working = insert_placeholder(working, leaf.position)
    return number_slots(working)
