"""An ordered collection of quires belonging to one manuscript."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from quiremap.quire import Quire

log = logging.getLogger(__name__)


class Manuscript:
    """
    A manuscript's quires, in order, with 1-based positions.

    Adding or inserting a quire saves it: requested leaves are generated
    (continuing the folio numbering of the quire before it) and the quire is
    validated. A quire that fails validation is not kept.
    """

    def __init__(self, title: str, quires: Iterable[Quire] = ()) -> None:
        self.title = title
        self._quires: list[Quire] = []
        for quire in quires:
            self.add_quire(quire)

    def __repr__(self) -> str:
        return f"Manuscript(title={self.title!r}, quires={len(self._quires)})"

    def __len__(self) -> int:
        return len(self._quires)

    def __iter__(self) -> Iterator[Quire]:
        return iter(self._quires)

    @property
    def quires(self) -> tuple[Quire, ...]:
        return tuple(self._quires)

    def quire(self, number: int) -> Quire:
        """The quire at 1-based position `number`."""
        if not 1 <= number <= len(self._quires):
            raise IndexError(f"No quire number {number} in {self.title!r}")
        return self._quires[number - 1]

    def position_of(self, quire: Quire) -> int:
        for index, candidate in enumerate(self._quires, start=1):
            if candidate is quire:
                return index
        raise ValueError(f"{quire!r} is not in {self.title!r}")

    def before(self, quire: Quire) -> Quire | None:
        position = self.position_of(quire)
        return self._quires[position - 2] if position > 1 else None

    def after(self, quire: Quire) -> Quire | None:
        position = self.position_of(quire)
        return self._quires[position] if position < len(self._quires) else None

    def add_quire(self, quire: Quire | None = None) -> Quire:
        """Append `quire` (or a new empty quire) and save it."""
        return self.insert_quire(len(self._quires) + 1, quire)

    def insert_quire(self, position: int, quire: Quire | None = None) -> Quire:
        """Insert `quire` at 1-based `position` and save it."""
        if not 1 <= position <= len(self._quires) + 1:
            raise IndexError(f"Quire position out of range: {position}")
        if quire is None:
            quire = Quire()
        if quire.manuscript is not None:
            raise ValueError(f"{quire!r} already belongs to {quire.manuscript.title!r}")

        self._quires.insert(position - 1, quire)
        quire.manuscript = self
        try:
            quire.save()
        except Exception:
            self._quires.pop(position - 1)
            quire.manuscript = None
            raise
        log.debug("Saved %s with %d leaves", quire.name, len(quire.leaves))
        return quire

    def move_quire(self, quire: Quire, position: int) -> None:
        """Move `quire` to 1-based `position`; the others close up around it."""
        if not 1 <= position <= len(self._quires):
            raise IndexError(f"Quire position out of range: {position}")
        self._quires.pop(self.position_of(quire) - 1)
        self._quires.insert(position - 1, quire)

    def remove_quire(self, quire: Quire) -> None:
        """Remove `quire` and destroy its leaves."""
        self._quires.pop(self.position_of(quire) - 1)
        quire.clear_leaves()
        quire.manuscript = None
