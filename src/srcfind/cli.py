#!/usr/bin/env python3
"""
srcfind: Find the source files a set of paths and globs refers to

Common usage:
  srcfind .
  srcfind src/ test/
  srcfind 'lib/**/*.mjs' index.js
  srcfind --ignore-pattern 'dist/' .

Files named explicitly are always listed; ignored ones get a warning.
Directories are searched with the configured file patterns, skipping
ignored paths. Settings are read from `.srcfind.toml`, `srcfind.toml`,
or `[tool.srcfind]` in `pyproject.toml`.
"""

from __future__ import annotations

import argparse
import importlib.metadata
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from srcfind.config import find_config_file, load_config, merge_cli_with_config
from srcfind.file_resolver import (
    FileDiscoveryError,
    FileResolver,
    ResolverConfig,
    ignored_file_notice,
)
from srcfind.file_resolver.defaults import DEFAULT_FILES


@dataclass
class Options:
    """Command-line options for the srcfind tool."""

    patterns: list[str]
    files: list[str]
    extend_files: list[str]
    ignores: list[str] | None
    extend_ignores: list[str]
    use_ignores: bool
    respect_gitignore: bool
    glob_input_paths: bool
    error_on_unmatched_pattern: bool
    show_ignored: bool
    verbose: bool
    version: bool


# argparse dest name -> Options field name, for flags a config file may also set
_TRACKED_FLAGS: dict[str, str] = {
    "files": "files",
    "extend_files": "extend_files",
    "ignores": "ignores",
    "extend_ignores": "extend_ignores",
    "no_ignore": "use_ignores",
    "no_respect_gitignore": "respect_gitignore",
    "no_glob": "glob_input_paths",
    "no_error_on_unmatched_pattern": "error_on_unmatched_pattern",
}


def _parse_args(args: list[str] | None = None) -> tuple[Options, set[str]]:
    """
    Parse command-line arguments.

    Returns a tuple of (options, explicit_flags) where `explicit_flags` tracks
    which settings the user explicitly passed (for config merge precedence).
    """
    # Use the module's docstring as the description
    module_doc = __doc__ or ""
    doc_parts = module_doc.split("\n\n")
    description = doc_parts[0]
    epilog = "\n\n".join(doc_parts[1:])

    parser = argparse.ArgumentParser(
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "patterns",
        nargs="*",
        type=str,
        default=[],
        help="Files, directories, or glob patterns (default: '.')",
    )
    # Tracked flags default to None so that explicit use can be detected,
    # even when the user passes a value equal to the built-in default.
    parser.add_argument(
        "--files",
        action="append",
        default=None,
        metavar="PATTERN",
        help="Replace the file patterns used to search directories. Can be repeated",
    )
    parser.add_argument(
        "--extend-files",
        action="append",
        default=None,
        metavar="PATTERN",
        help="Additional file patterns (e.g., '**/*.ts'). Can be repeated",
    )
    parser.add_argument(
        "--ignores",
        action="append",
        default=None,
        metavar="PATTERN",
        help="Replace all default ignore patterns. Can be repeated",
    )
    parser.add_argument(
        "--ignore-pattern",
        action="append",
        dest="extend_ignores",
        default=None,
        metavar="PATTERN",
        help="Add to the ignore patterns (gitignore syntax, e.g. 'dist/'). Can be repeated",
    )
    parser.add_argument(
        "--no-ignore",
        action="store_true",
        default=None,
        dest="no_ignore",
        help="Disable all ignore patterns and ignore files",
    )
    parser.add_argument(
        "--no-respect-gitignore",
        action="store_true",
        default=None,
        dest="no_respect_gitignore",
        help="Disable .gitignore integration",
    )
    parser.add_argument(
        "--no-glob",
        action="store_true",
        default=None,
        dest="no_glob",
        help="Treat glob characters in arguments as literal file names",
    )
    parser.add_argument(
        "--no-error-on-unmatched-pattern",
        action="store_true",
        default=None,
        dest="no_error_on_unmatched_pattern",
        help="Do not fail when a pattern matches no files",
    )
    parser.add_argument(
        "--show-ignored",
        action="store_true",
        help="Also list explicitly named files that are ignored",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log discovery details")
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version information and exit",
    )
    opts = parser.parse_args(args)

    explicit_flags = {
        field_name
        for dest_name, field_name in _TRACKED_FLAGS.items()
        if getattr(opts, dest_name) is not None
    }

    return (
        Options(
            patterns=opts.patterns,
            files=opts.files if opts.files is not None else list(DEFAULT_FILES),
            extend_files=opts.extend_files or [],
            ignores=opts.ignores,
            extend_ignores=opts.extend_ignores or [],
            use_ignores=not opts.no_ignore,
            respect_gitignore=not opts.no_respect_gitignore,
            glob_input_paths=not opts.no_glob,
            error_on_unmatched_pattern=not opts.no_error_on_unmatched_pattern,
            show_ignored=opts.show_ignored,
            verbose=opts.verbose,
            version=opts.version,
        ),
        explicit_flags,
    )


def _resolver_config(options: Options) -> ResolverConfig:
    return ResolverConfig(
        files=list(options.files),
        extend_files=list(options.extend_files),
        ignores=options.ignores,
        extend_ignores=options.extend_ignores,
        use_ignores=options.use_ignores,
        respect_gitignore=options.respect_gitignore,
        glob_input_paths=options.glob_input_paths,
        error_on_unmatched_pattern=options.error_on_unmatched_pattern,
    )


def main(args: list[str] | None = None) -> int:
    """
    Main entry point for the srcfind CLI.

    Args:
        args: Command-line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    options, explicit_flags = _parse_args(args)

    if options.version:
        try:
            version = importlib.metadata.version("srcfind")
            print(f"v{version}")
        except importlib.metadata.PackageNotFoundError:
            print("unknown (package not installed)")
        return 0

    logging.basicConfig(
        level=logging.DEBUG if options.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    cwd = Path.cwd()
    config_path = find_config_file(cwd)
    if config_path:
        try:
            config = load_config(config_path)
        except ValueError as e:
            # TOMLDecodeError and ConfigError are both ValueErrors
            print(f"Error: invalid config file {config_path}: {e}", file=sys.stderr)
            return 1
        merge_cli_with_config(options, config, explicit_flags)

    resolver = FileResolver(_resolver_config(options), cwd)
    try:
        resolved = resolver.resolve(options.patterns or ["."])
    except (FileDiscoveryError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    for resolved_file in resolved:
        if resolved_file.ignored:
            notice = ignored_file_notice(resolved_file.file_path, resolver.policy.base_path)
            print(f"{resolved_file.file_path}: warning: {notice}", file=sys.stderr)
            if not options.show_ignored:
                continue
        print(resolved_file.file_path)

    return 0


if __name__ == "__main__":
    sys.exit(main())
