"""
PathSpecIgnorePolicy: an `IgnorePolicy` built from a `ResolverConfig`.

Ignore patterns use gitignore syntax and come from the config, from
`.gitignore` files below the base path, and from the nearest tool ignore file.
A file is also ignored when none of the configured file patterns applies to it.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Sequence
from pathlib import Path

import pathspec

from srcfind.file_resolver.gitignore import load_gitignore, load_tool_ignore
from srcfind.file_resolver.matcher import GlobMatcher
from srcfind.file_resolver.patterns import normalize_to_posix
from srcfind.file_resolver.types import FilePattern, ResolverConfig


class PathSpecIgnorePolicy:
    """
    Ignore rules for one base directory. Paths outside the base directory are
    always ignored.
    """

    def __init__(self, config: ResolverConfig, base_path: str | Path) -> None:
        self._base_path: str = os.path.abspath(base_path)
        self._file_patterns: tuple[FilePattern, ...] = tuple(config.effective_files)
        self._file_matchers: list[GlobMatcher | Callable[[str], bool]] = [
            GlobMatcher.compile(p) if isinstance(p, str) else p
            for p in self._file_patterns
            if not (isinstance(p, str) and p.startswith("!"))
        ]
        self._ignore_spec: pathspec.PathSpec = pathspec.PathSpec.from_lines(
            "gitignore", config.effective_ignores
        )
        self._tool_ignore: tuple[Path, pathspec.PathSpec] | None = (
            load_tool_ignore(config.tool_name, Path(self._base_path))
            if config.use_ignores
            else None
        )
        self._respect_gitignore: bool = config.respect_gitignore and config.use_ignores
        # Cache gitignore specs and directory verdicts to avoid repeated work.
        self._gitignore_cache: dict[Path, pathspec.PathSpec | None] = {}
        self._dir_cache: dict[str, bool] = {}

    @property
    def base_path(self) -> str:
        return self._base_path

    @property
    def file_patterns(self) -> Sequence[FilePattern]:
        return self._file_patterns

    def is_directory_ignored(self, path: str) -> bool:
        """Check if a directory should be pruned during traversal."""
        path = os.path.abspath(path)
        if path not in self._dir_cache:
            rel = self._relative(path)
            if rel is None:
                ignored = True
            elif rel == "":
                ignored = False
            else:
                ignored = self.is_directory_ignored(os.path.dirname(path)) or self._matches_ignore(
                    path, rel, is_dir=True
                )
            self._dir_cache[path] = ignored
        return self._dir_cache[path]

    def is_file_ignored(self, path: str) -> bool:
        """
        Check if a file is ignored: outside the base path, inside an ignored
        directory, matched by an ignore pattern, or not matched by any file pattern.
        """
        path = os.path.abspath(path)
        rel = self._relative(path)
        if rel is None or rel == "":
            return True
        if self.is_directory_ignored(os.path.dirname(path)):
            return True
        if self._matches_ignore(path, rel, is_dir=False):
            return True
        return not self._applies(path, rel)

    def _relative(self, path: str) -> str | None:
        """Path relative to the base path in POSIX form, or `None` if outside."""
        rel = os.path.relpath(path, self._base_path)
        if rel == os.curdir:
            return ""
        if rel == os.pardir or rel.startswith(os.pardir + os.sep):
            return None
        return normalize_to_posix(rel)

    def _applies(self, path: str, rel: str) -> bool:
        for matcher in self._file_matchers:
            if isinstance(matcher, GlobMatcher):
                if matcher.match(rel):
                    return True
            elif matcher(path):
                return True
        return False

    def _matches_ignore(self, path: str, rel: str, is_dir: bool) -> bool:
        suffix = "/" if is_dir else ""
        if self._ignore_spec.match_file(rel + suffix):
            return True

        if self._tool_ignore is not None:
            ignore_root, spec = self._tool_ignore
            if spec.match_file(_posix_relpath(path, ignore_root) + suffix):
                return True

        if self._respect_gitignore:
            for directory, spec in self._get_gitignore_chain(Path(path).parent):
                if spec.match_file(_posix_relpath(path, directory) + suffix):
                    return True

        return False

    def _get_gitignore(self, directory: Path) -> pathspec.PathSpec | None:
        """Load and cache gitignore for a directory."""
        if directory not in self._gitignore_cache:
            self._gitignore_cache[directory] = load_gitignore(directory)
        return self._gitignore_cache[directory]

    def _get_gitignore_chain(self, directory: Path) -> list[tuple[Path, pathspec.PathSpec]]:
        """Collect gitignore specs from the base path down to `directory` (inclusive)."""
        specs: list[tuple[Path, pathspec.PathSpec]] = []
        base = Path(self._base_path)
        try:
            parts = directory.relative_to(base).parts
        except ValueError:
            return specs
        current = base
        for part in (None, *parts):
            if part is not None:
                current = current / part
            spec = self._get_gitignore(current)
            if spec is not None:
                specs.append((current, spec))
        return specs


def _posix_relpath(path: str, start: Path) -> str:
    return normalize_to_posix(os.path.relpath(path, start))
