"""Plain text and JSON listings of filled quire diagrams."""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

from quiremap.leaves import Slot
from quiremap.manuscript import Manuscript


def describe_slot(slot: Slot, show_labels: bool = True) -> str:
    """One line for a slot: position, leaf, and what it is joined to."""
    if slot.is_placeholder:
        leaf = "--"
        label = ""
        join = f"placeholder, conjoin {slot.conjoin}"
    else:
        leaf = f"n={slot.number}"
        label = f"f. {slot.folio_number}" if slot.folio_number else "f. ?"
        join = "single" if slot.conjoin is None else f"conjoin {slot.conjoin}"
    if not show_labels:
        return f"{slot.position:>4}  {leaf:<6} {join}"
    return f"{slot.position:>4}  {leaf:<6} {label:<10} {join}"


def format_slots(slots: Sequence[Slot], show_labels: bool = True) -> str:
    return "\n".join(describe_slot(slot, show_labels) for slot in slots)


def format_text(manuscript: Manuscript, show_labels: bool = True) -> str:
    """A listing of each quire's filled diagram, one slot per line."""
    sections: list[str] = []
    for quire in manuscript:
        slots = quire.build_filled_diagram()
        body = format_slots(slots, show_labels) if slots else "   (no leaves)"
        sections.append(f"{quire.name.strip()}\n{body}")
    return "\n\n".join(sections) + "\n"


def manuscript_data(manuscript: Manuscript) -> dict[str, Any]:
    return {
        "title": manuscript.title,
        "quires": [
            {
                "number": quire.number,
                "name": quire.name,
                "slots": [slot.to_dict() for slot in quire.build_filled_diagram()],
            }
            for quire in manuscript
        ],
    }


def format_json(manuscripts: Sequence[Manuscript]) -> str:
    data = [manuscript_data(manuscript) for manuscript in manuscripts]
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"
