"""
FileResolver: turns files, directories, and globs into a sorted list of
manuscript files.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator, Sequence
from pathlib import Path

import pathspec

from quiremap.file_resolver.defaults import FileResolverConfig
from quiremap.file_resolver.gitignore import load_gitignore, load_tool_ignore

log = logging.getLogger(__name__)

_GLOB_CHARS = frozenset("*?[")


class FileResolver:
    """
    Finds files matching the include patterns, skipping excluded
    directories and anything matched by `.gitignore` or `.quiremapignore`.
    """

    def __init__(self, config: FileResolverConfig) -> None:
        self._config = config
        self._exclude_spec = pathspec.PathSpec.from_lines("gitignore", config.effective_exclude)
        self._include_spec = pathspec.PathSpec.from_lines("gitignore", config.effective_include)
        self._gitignore_cache: dict[Path, pathspec.PathSpec | None] = {}

    def resolve(self, paths: Sequence[str | Path]) -> list[Path]:
        """
        Resolve input paths into a sorted, deduplicated list of files.

        Files named directly are always kept (size limit aside); directories
        are walked with all filters; globs are expanded and matched against
        the include patterns. Anything else raises `FileNotFoundError`.
        """
        found: set[Path] = set()
        for raw_path in paths:
            p = Path(raw_path)
            if p.is_file():
                if not self._exceeds_max_size(p):
                    found.add(p.resolve())
            elif p.is_dir():
                found.update(f.resolve() for f in self._walk_directory(p))
            elif any(c in str(raw_path) for c in _GLOB_CHARS):
                found.update(f.resolve() for f in self._expand_glob(str(raw_path)))
            else:
                raise FileNotFoundError(f"Path not found: {raw_path}")
        log.debug("Resolved %d input paths to %d files", len(paths), len(found))
        return sorted(found)

    def _walk_directory(self, root: Path) -> Iterator[Path]:
        tool_ignore = load_tool_ignore(self._config.tool_name, root)

        for dirpath, dirnames, filenames in os.walk(root):
            current = Path(dirpath)
            rel_dir = current.relative_to(root)
            ignores = self._ignore_chain(current, root)

            # Prune in place so excluded directories are never entered
            dirnames[:] = [
                d
                for d in dirnames
                if not self._is_dir_excluded(d, rel_dir / d, ignores, tool_ignore)
            ]
            if tool_ignore is not None:
                ignores.append(tool_ignore)

            for filename in filenames:
                path = current / filename
                if not self._include_spec.match_file(filename):
                    continue
                if any(spec.match_file(filename) for spec in ignores):
                    continue
                if self._exceeds_max_size(path):
                    continue
                yield path

    def _is_dir_excluded(
        self,
        dirname: str,
        rel_path: Path,
        gitignores: list[pathspec.PathSpec],
        tool_ignore: pathspec.PathSpec | None,
    ) -> bool:
        """
        Check a directory by name and by its path from the walk root, so
        nested patterns like `archive/2020/` prune too.
        """
        candidates = (dirname + "/", rel_path.as_posix() + "/")
        if any(self._exclude_spec.match_file(c) for c in candidates):
            return True
        if tool_ignore is not None and any(tool_ignore.match_file(c) for c in candidates):
            return True
        return any(spec.match_file(dirname + "/") for spec in gitignores)

    def _ignore_chain(self, directory: Path, walk_root: Path) -> list[pathspec.PathSpec]:
        """Gitignore specs from `walk_root` down to `directory`, inclusive."""
        if not self._config.respect_gitignore:
            return []
        specs: list[pathspec.PathSpec] = []
        rel_parts = directory.resolve().relative_to(walk_root.resolve()).parts
        current = walk_root.resolve()
        for part in (None, *rel_parts):
            if part is not None:
                current = current / part
            if current not in self._gitignore_cache:
                self._gitignore_cache[current] = load_gitignore(current)
            spec = self._gitignore_cache[current]
            if spec is not None:
                specs.append(spec)
        return specs

    def _expand_glob(self, pattern: str) -> Iterator[Path]:
        parts = Path(pattern).parts
        root = Path(".")
        glob_part = pattern
        for i, part in enumerate(parts):
            if any(c in part for c in _GLOB_CHARS):
                root = Path(*parts[:i]) if i > 0 else Path(".")
                glob_part = str(Path(*parts[i:]))
                break

        for path in root.glob(glob_part):
            if path.is_file() and self._include_spec.match_file(path.name):
                if not self._exceeds_max_size(path):
                    yield path

    def _exceeds_max_size(self, path: Path) -> bool:
        """True if `path` is larger than the size limit. 0 means no limit."""
        if self._config.files_max_size == 0:
            return False
        try:
            return path.stat().st_size > self._config.files_max_size
        except OSError:
            return False
