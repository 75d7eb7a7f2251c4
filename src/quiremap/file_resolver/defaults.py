"""
Defaults and settings for finding manuscript description files.

Patterns use gitignore syntax; directory patterns end with `/`.
"""

from __future__ import annotations

from dataclasses import dataclass, field

# Manuscript descriptions are TOML files named `<shelfmark>.quires.toml`, so
# ordinary TOML files (pyproject.toml, quiremap.toml) are never read as one.
DEFAULT_INCLUDES: list[str] = ["*.quires.toml"]

# Directories pruned during traversal
DEFAULT_EXCLUDES: list[str] = [
    ".git/",
    ".hg/",
    ".svn/",
    ".venv/",
    "venv/",
    "__pycache__/",
    ".tox/",
    ".pytest_cache/",
    "*.egg-info/",
    "build/",
    "dist/",
    "node_modules/",
]


@dataclass
class FileResolverConfig:
    """
    Which manuscript files to pick up when a directory or glob is given.

    `include` names manuscript files (see `DEFAULT_INCLUDES`); use
    `extend_include` to also read, say, `*.collation.toml`. Leaving
    `exclude` as `None` keeps `DEFAULT_EXCLUDES`. Patterns may be nested
    (`archive/2020/`) and are matched from the directory being walked.
    Per-project exclusions can also go in a `.quiremapignore` found in or
    above that directory. `files_max_size=0` lifts the size cap; the default
    is far above any real quire list.
    """

    tool_name: str = "quiremap"
    include: list[str] = field(default_factory=lambda: list(DEFAULT_INCLUDES))
    extend_include: list[str] = field(default_factory=list)
    exclude: list[str] | None = None
    extend_exclude: list[str] = field(default_factory=list)
    respect_gitignore: bool = True
    files_max_size: int = 1_048_576

    @property
    def effective_include(self) -> list[str]:
        return [*self.include, *self.extend_include]

    @property
    def effective_exclude(self) -> list[str]:
        base = list(DEFAULT_EXCLUDES) if self.exclude is None else self.exclude
        return [*base, *self.extend_exclude]
