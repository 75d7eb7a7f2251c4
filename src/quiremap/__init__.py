"""
quiremap: quire structure and conjoin diagrams for manuscripts.

Usage:
    from quiremap import Leaf, Quire

    quire = Quire([Leaf(1), Leaf(2, single=True), Leaf(3)])
    slots = quire.build_filled_diagram()
"""

from quiremap.errors import (
    ManuscriptFormatError,
    OddBifoliaCount,
    QuiremapError,
    QuireValidationError,
)
from quiremap.leaves import ExpandedLeaf, Leaf, Placeholder, Slot, Unit
from quiremap.manuscript import Manuscript
from quiremap.placeholders import fill_placeholders, has_any_conjoins
from quiremap.quire import Quire

__all__ = [
    "ExpandedLeaf",
    "Leaf",
    "Manuscript",
    "ManuscriptFormatError",
    "OddBifoliaCount",
    "Placeholder",
    "Quire",
    "QuireValidationError",
    "QuiremapError",
    "Slot",
    "Unit",
    "fill_placeholders",
    "has_any_conjoins",
]
