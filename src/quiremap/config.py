"""
TOML-based config file loading for quiremap.

Searches for `.quiremap.toml`, `quiremap.toml`, or `pyproject.toml [tool.quiremap]`
walking up from the current directory. Config values are merged with CLI flags
with precedence: explicit CLI flags > config file > built-in defaults.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, TypeVar, cast

if sys.version_info >= (3, 11):
    import tomllib  # pyright: ignore[reportUnreachable]
else:
    import tomli as tomllib  # type: ignore[no-redef]  # pyright: ignore[reportUnreachable]


@dataclass
class QuiremapConfig:
    """
    Settings read from a config file. A field is `None` when the file does
    not set it, so an explicit default value can be told apart from no value.
    """

    # Output
    format: str | None = None
    show_labels: bool | None = None
    # File discovery
    extend_include: list[str] | None = None
    exclude: list[str] | None = None
    extend_exclude: list[str] | None = None
    respect_gitignore: bool | None = None
    files_max_size: int | None = None


# Search order within each directory; first match wins
_CONFIG_FILENAMES = [".quiremap.toml", "quiremap.toml", "pyproject.toml"]

_VALID_FIELDS = {f.name for f in fields(QuiremapConfig)}


def find_config_file(start_dir: Path) -> Path | None:
    """
    Walk up from `start_dir` looking for a config file. Returns the first
    found, or `None`. A `pyproject.toml` only counts if it has a
    `[tool.quiremap]` table.
    """
    current = start_dir.resolve()
    while True:
        for filename in _CONFIG_FILENAMES:
            candidate = current / filename
            if not candidate.is_file():
                continue
            if filename != "pyproject.toml" or _pyproject_has_quiremap_section(candidate):
                return candidate
        parent = current.parent
        if parent == current:
            return None
        current = parent


def _pyproject_has_quiremap_section(path: Path) -> bool:
    try:
        data = tomllib.loads(path.read_text())
        return "quiremap" in data.get("tool", {})
    except (tomllib.TOMLDecodeError, OSError):
        return False


def load_config(config_path: Path) -> QuiremapConfig:
    """
    Load a `QuiremapConfig` from a TOML file, taking `[tool.quiremap]` when
    the file is a `pyproject.toml`.
    """
    data = tomllib.loads(config_path.read_text())

    if config_path.name == "pyproject.toml":
        data = data.get("tool", {}).get("quiremap", {})

    return parse_config_data(data)


def parse_config_data(data: dict[str, Any]) -> QuiremapConfig:
    """
    Parse a flat or sectioned dict into `QuiremapConfig`. Tables such as
    `[output]` and `[file-discovery]` are flattened, kebab-case keys become
    snake_case, and unknown keys are ignored.
    """
    flat: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, dict):
            flat.update(cast(dict[str, Any], value))
        else:
            flat[key] = value

    mapped = {
        key.replace("-", "_"): value
        for key, value in flat.items()
        if key.replace("-", "_") in _VALID_FIELDS
    }
    return QuiremapConfig(**mapped)


_T = TypeVar("_T")


def merge_cli_with_config(
    cli_opts: _T,
    config: QuiremapConfig | None,
    explicit_flags: set[str],
) -> _T:
    """
    Copy config values onto `cli_opts` for every option the user did not
    set explicitly on the command line.
    """
    if config is None:
        return cli_opts

    for cfg_field in fields(QuiremapConfig):
        cfg_value = getattr(config, cfg_field.name)
        if cfg_value is None or cfg_field.name in explicit_flags:
            continue
        if hasattr(cli_opts, cfg_field.name):
            setattr(cli_opts, cfg_field.name, cfg_value)

    return cli_opts
