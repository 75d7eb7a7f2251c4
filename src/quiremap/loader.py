"""
Loading manuscript descriptions from TOML files.

A manuscript file names the manuscript and lists its quires in order. Each
quire either requests generated leaves (`leaf-count`, optionally with the
positions of `singles`) or lists its leaves explicitly:

    title = "Walters Ms. W.102"

    [[quires]]
    leaf-count = 8
    singles = [2, 6]

    [[quires]]
    leaves = [
      { folio = "9" },
      { folio = "10", single = true },
    ]

Generated leaves continue the folio numbering of the quire before them.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, cast

from quiremap.errors import ManuscriptFormatError
from quiremap.leaves import Leaf
from quiremap.manuscript import Manuscript
from quiremap.quire import Quire

if sys.version_info >= (3, 11):
    import tomllib  # pyright: ignore[reportUnreachable]
else:
    import tomli as tomllib  # type: ignore[no-redef]  # pyright: ignore[reportUnreachable]

log = logging.getLogger(__name__)


def load_manuscript(path: Path) -> Manuscript:
    """Read and validate the manuscript described in the TOML file at `path`."""
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ManuscriptFormatError(f"{path}: invalid TOML: {e}") from e
    log.info("Loading manuscript from %s", path)
    return parse_manuscript(data, source=str(path))


def parse_manuscript(data: dict[str, Any], source: str = "<data>") -> Manuscript:
    """Build a `Manuscript` from parsed TOML data."""
    title = data.get("title", "")
    if not isinstance(title, str):
        raise ManuscriptFormatError(f"{source}: `title` must be a string")

    raw_quires = data.get("quires", [])
    if not isinstance(raw_quires, list):
        raise ManuscriptFormatError(f"{source}: `quires` must be an array of tables")

    manuscript = Manuscript(title)
    for index, raw in enumerate(cast(list[Any], raw_quires), start=1):
        if not isinstance(raw, dict):
            raise ManuscriptFormatError(f"{source}: quire {index} must be a table")
        quire = _parse_quire(cast(dict[str, Any], raw), f"{source}: quire {index}")
        manuscript.add_quire(quire)
    return manuscript


def _parse_quire(raw: dict[str, Any], where: str) -> Quire:
    leaf_count = raw.get("leaf-count", raw.get("leaf_count"))
    singles = raw.get("singles", [])
    raw_leaves = raw.get("leaves")

    if raw_leaves is not None and leaf_count is not None:
        raise ManuscriptFormatError(f"{where}: give either `leaves` or `leaf-count`, not both")
    if not isinstance(singles, list) or not all(isinstance(s, int) for s in singles):
        raise ManuscriptFormatError(f"{where}: `singles` must be a list of leaf positions")

    if raw_leaves is None:
        if leaf_count is None:
            leaf_count = 0
        if not isinstance(leaf_count, int) or isinstance(leaf_count, bool) or leaf_count < 0:
            raise ManuscriptFormatError(f"{where}: `leaf-count` must be a non-negative integer")
        out_of_range = [s for s in singles if not 1 <= s <= leaf_count]
        if out_of_range:
            raise ManuscriptFormatError(f"{where}: single positions out of range: {out_of_range}")
        return Quire(leaf_count_input=leaf_count, single_positions=singles)

    if singles:
        raise ManuscriptFormatError(f"{where}: mark explicit leaves with `single = true`")
    if not isinstance(raw_leaves, list):
        raise ManuscriptFormatError(f"{where}: `leaves` must be an array")
    leaves = [
        _parse_leaf(leaf, position, f"{where}, leaf {position}")
        for position, leaf in enumerate(cast(list[Any], raw_leaves), start=1)
    ]
    return Quire(leaves)


def _parse_leaf(raw: Any, position: int, where: str) -> Leaf:
    if not isinstance(raw, dict):
        raise ManuscriptFormatError(f"{where}: must be a table")
    leaf = cast(dict[str, Any], raw)
    folio = leaf.get("folio", leaf.get("folio-number"))
    if folio is not None and not isinstance(folio, (str, int)):
        raise ManuscriptFormatError(f"{where}: `folio` must be a string or integer")
    single = leaf.get("single", False)
    if not isinstance(single, bool):
        raise ManuscriptFormatError(f"{where}: `single` must be true or false")
    return Leaf(
        position=position,
        folio_number=str(folio) if folio is not None else None,
        single=single,
    )
