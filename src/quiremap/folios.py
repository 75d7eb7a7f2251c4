"""Folio label arithmetic and generation of new leaves."""

from __future__ import annotations

import re
from collections.abc import Collection

from quiremap.leaves import Leaf

_LEADING_INT_RE = re.compile(r"\s*([+-]?\d+)")


def inc_folio(number: str | int | None) -> str | None:
    """
    Increment a folio number. Returns `None` if `number` is missing or is
    not a plain integer (e.g. `"12v"`).
    """
    # TODO: Increment paginated labels like "1-2" to "3-4".
    if number is None:
        return None
    try:
        return str(int(number) + 1)
    except (TypeError, ValueError):
        return None


def leading_folio_number(label: str | None) -> int:
    """
    The integer a folio label starts with, or 0: `"12v"` gives 12,
    `"xii"` and `None` give 0.
    """
    if not label:
        return 0
    match = _LEADING_INT_RE.match(label)
    return int(match.group(1)) if match else 0


def generate_leaves(
    count: int,
    starting_folio: str | int | None = 0,
    singles: Collection[int] = (),
) -> list[Leaf]:
    """
    Create `count` leaves at positions 1..count, with folio numbers counting
    up from the one after `starting_folio`. Positions listed in `singles` are
    marked single.
    """
    if count < 0:
        raise ValueError(f"Leaf count cannot be negative: {count}")
    leaves: list[Leaf] = []
    folio: str | int | None = starting_folio
    for position in range(1, count + 1):
        folio = inc_folio(folio)
        leaves.append(Leaf(position=position, folio_number=folio, single=position in singles))
    return leaves
