"""
Discovery of manuscript description files, with gitignore-aware directory
walking and configurable exclusion patterns.

Usage::

    from quiremap.file_resolver import FileResolver, FileResolverConfig

    resolver = FileResolver(FileResolverConfig(extend_exclude=["drafts/"]))
    files = resolver.resolve(["collections/", "extra/ms-17.quires.toml"])
"""

from quiremap.file_resolver.defaults import (
    DEFAULT_EXCLUDES,
    DEFAULT_INCLUDES,
    FileResolverConfig,
)
from quiremap.file_resolver.resolver import FileResolver

__all__ = [
    "DEFAULT_EXCLUDES",
    "DEFAULT_INCLUDES",
    "FileResolver",
    "FileResolverConfig",
]
