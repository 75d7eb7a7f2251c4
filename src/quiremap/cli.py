#!/usr/bin/env python3
"""
quiremap: Conjoin diagrams for manuscript quires

Reads manuscript description files (`*.quires.toml`) and lists each quire's
filled diagram: every leaf with the slot it is conjoined to, plus a
placeholder slot balancing each single leaf.

Common usage:
  quiremap ms-102.quires.toml
  quiremap --format json collections/
  quiremap --validate-only .
  quiremap --list-files .
"""

from __future__ import annotations

import argparse
import importlib.metadata
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from strif import atomic_output_file

from quiremap.config import find_config_file, load_config, merge_cli_with_config
from quiremap.errors import QuiremapError
from quiremap.loader import load_manuscript
from quiremap.manuscript import Manuscript
from quiremap.render import format_json, format_text

log = logging.getLogger(__name__)


@dataclass
class Options:
    """Command-line options for the quiremap tool."""

    files: list[str]
    output: str
    format: str
    show_labels: bool
    validate_only: bool
    list_files: bool
    log_level: str
    version: bool
    # File discovery options
    extend_include: list[str]
    exclude: list[str] | None
    extend_exclude: list[str]
    respect_gitignore: bool
    files_max_size: int


def _build_parser() -> argparse.ArgumentParser:
    module_doc = __doc__ or ""
    doc_parts = module_doc.split("\n\n")
    parser = argparse.ArgumentParser(
        description=doc_parts[0],
        epilog="\n\n".join(doc_parts[1:]),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "files",
        nargs="*",
        type=str,
        default=[],
        help="Manuscript files or directories (use '.' for current directory)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default="-",
        help="Output file (use '-' for stdout)",
    )
    parser.add_argument(
        "-f",
        "--format",
        type=str,
        choices=["text", "json"],
        default="text",
        help="Output format (default: %(default)s)",
    )
    parser.add_argument(
        "--no-labels",
        action="store_false",
        dest="show_labels",
        help="Omit folio labels from text output",
    )
    parser.add_argument(
        "--validate-only",
        action="store_true",
        help="Check that each manuscript loads and validates, without listing diagrams",
    )
    parser.add_argument(
        "--list-files",
        action="store_true",
        help="Print resolved manuscript file paths and exit",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        help="Python logging level (default: %(default)s)",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version information and exit",
    )
    # File discovery options
    parser.add_argument(
        "--extend-include",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Additional file patterns to include. Can be repeated",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=None,
        metavar="PATTERN",
        help="Replace all default exclusion patterns. Can be repeated",
    )
    parser.add_argument(
        "--extend-exclude",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Add to default exclusion patterns (e.g., 'drafts/'). Can be repeated",
    )
    parser.add_argument(
        "--no-respect-gitignore",
        action="store_false",
        dest="respect_gitignore",
        help="Disable .gitignore integration",
    )
    parser.add_argument(
        "--files-max-size",
        type=int,
        default=1_048_576,
        metavar="BYTES",
        help="Skip files larger than this size in bytes (0 = no limit, default: %(default)s)",
    )
    return parser


# Options that a config file may set, keyed by argparse dest
_CONFIGURABLE = (
    "format",
    "show_labels",
    "extend_include",
    "exclude",
    "extend_exclude",
    "respect_gitignore",
    "files_max_size",
)


def _parse_args(args: list[str] | None = None) -> tuple[Options, set[str]]:
    """
    Parse command-line arguments. Returns the options and the set of
    configurable options the user explicitly passed.
    """
    parser = _build_parser()
    opts = parser.parse_args(args)

    # Parse again with every default suppressed: only flags actually given
    # show up as attributes
    sentinel_parser = _build_parser()
    sentinel_parser.set_defaults(**{dest: argparse.SUPPRESS for dest in _CONFIGURABLE})
    given, _ = sentinel_parser.parse_known_args(args)
    explicit_flags = {dest for dest in _CONFIGURABLE if hasattr(given, dest)}

    return (
        Options(
            files=opts.files,
            output=opts.output,
            format=opts.format,
            show_labels=opts.show_labels,
            validate_only=opts.validate_only,
            list_files=opts.list_files,
            log_level=opts.log_level,
            version=opts.version,
            extend_include=opts.extend_include,
            exclude=opts.exclude,
            extend_exclude=opts.extend_exclude,
            respect_gitignore=opts.respect_gitignore,
            files_max_size=opts.files_max_size,
        ),
        explicit_flags,
    )


def _resolve_files(options: Options) -> list[str]:
    """Expand directories and globs; plain file paths pass through."""
    from quiremap.file_resolver import FileResolver, FileResolverConfig

    config = FileResolverConfig(
        extend_include=options.extend_include,
        exclude=options.exclude,
        extend_exclude=options.extend_exclude,
        respect_gitignore=options.respect_gitignore,
        files_max_size=options.files_max_size,
    )
    return [str(p) for p in FileResolver(config).resolve(options.files)]


def _write_output(text: str, output: str) -> None:
    if output == "-":
        sys.stdout.write(text)
        return
    with atomic_output_file(output, make_parents=True) as tmp_path:
        Path(tmp_path).write_text(text, encoding="utf-8")


def main(args: list[str] | None = None) -> int:
    """
    Main entry point for the quiremap CLI.

    Args:
        args: Command-line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, 1 for invalid input, 2 for other errors)
    """
    options, explicit_flags = _parse_args(args)

    logging.basicConfig(
        level=getattr(logging, options.log_level.upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )

    if options.version:
        try:
            version = importlib.metadata.version("quiremap")
            print(f"v{version}")
        except importlib.metadata.PackageNotFoundError:
            print("unknown (package not installed)")
        return 0

    if not options.files:
        print(
            "Error: No input specified. Provide manuscript files or directories"
            " (use '.' for current directory). Use --help for more options.",
            file=sys.stderr,
        )
        return 1

    config_path = find_config_file(Path.cwd())
    if config_path:
        log.info("Using config file %s", config_path)
        merge_cli_with_config(options, load_config(config_path), explicit_flags)

    try:
        resolved_files = _resolve_files(options)

        if options.list_files:
            for f in resolved_files:
                print(f)
            return 0

        manuscripts: list[Manuscript] = []
        for path in resolved_files:
            manuscripts.append(load_manuscript(Path(path)))
            if options.validate_only:
                print(f"ok: {path}")
        if options.validate_only:
            return 0

        if options.format == "json":
            text = format_json(manuscripts)
        else:
            text = "\n".join(format_text(ms, options.show_labels) for ms in manuscripts)
        _write_output(text, options.output)
    except (QuiremapError, ValueError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    return 0


if __name__ == "__main__":
    sys.exit(main())
