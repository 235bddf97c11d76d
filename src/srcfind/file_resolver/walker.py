"""
Filesystem traversal for glob patterns.

`walk()` is the single traversal primitive. `glob_search()` collects every
non-ignored match; `glob_match()` stops at the first match and exists only to
explain why a search came up empty.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from enum import Enum

from srcfind.file_resolver.matcher import GlobMatcher, MatchSet
from srcfind.file_resolver.patterns import normalize_to_posix
from srcfind.file_resolver.types import IgnorePolicy

log = logging.getLogger(__name__)


class EntryKind(Enum):
    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True)
class WalkEntry:
    path: str
    kind: EntryKind


class CancellationToken:
    """Set once to stop a traversal; checked between entries."""

    def __init__(self) -> None:
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


def _raise(error: OSError) -> None:
    raise error


def walk(
    root: str,
    *,
    enter_directory: Callable[[WalkEntry], bool],
    accept_file: Callable[[WalkEntry], bool],
    token: CancellationToken | None = None,
    on_error: Callable[[OSError], None] = _raise,
) -> Iterator[str]:
    """
    Walk `root`, yielding the absolute paths of accepted files.

    All entries of a directory are processed before any of its subdirectories
    is read, and each predicate runs at most once per entry. Once `token` is
    cancelled no further entries are looked at. `on_error` receives errors
    from reading directories and entries; the default re-raises.
    """
    pending = [os.path.abspath(root)]
    while pending:
        if token is not None and token.cancelled:
            return
        directory = pending.pop()
        try:
            with os.scandir(directory) as it:
                entries = list(it)
        except OSError as e:
            on_error(e)
            continue

        subdirs: list[str] = []
        for dir_entry in entries:
            if token is not None and token.cancelled:
                return
            try:
                is_dir = dir_entry.is_dir()
                if is_dir and dir_entry.is_symlink():
                    # Symlinked directories are not followed.
                    continue
            except OSError as e:
                on_error(e)
                continue
            entry = WalkEntry(dir_entry.path, EntryKind.DIRECTORY if is_dir else EntryKind.FILE)
            if is_dir:
                if enter_directory(entry):
                    subdirs.append(entry.path)
            elif accept_file(entry):
                yield entry.path

        # Reverse so that popping visits subdirectories in scan order.
        pending.extend(reversed(subdirs))


def _relative(root: str, path: str) -> str:
    return normalize_to_posix(os.path.relpath(path, root))


def glob_search(root: str, patterns: Sequence[str], policy: IgnorePolicy) -> list[str]:
    """
    Find all files under `root` matching any of `patterns` and not ignored by
    `policy`. Directories are pruned when no pattern could match below them
    or when the policy ignores them. Traversal errors propagate.
    """
    if not patterns:
        return []

    matchers = MatchSet.from_patterns(patterns, root)
    log.debug("Searching %s for %s", root, list(patterns))

    def enter_directory(entry: WalkEntry) -> bool:
        return matchers.match(_relative(root, entry.path), partial=True) and (
            not policy.is_directory_ignored(entry.path)
        )

    def accept_file(entry: WalkEntry) -> bool:
        return matchers.match(_relative(root, entry.path)) and not policy.is_file_ignored(
            entry.path
        )

    return list(walk(root, enter_directory=enter_directory, accept_file=accept_file))


def glob_match(root: str, pattern: str) -> bool:
    """
    Check whether `pattern` matches at least one file under `root`, ignoring
    the ignore policy. Stops at the first match.

    Traversal errors are swallowed, so an unreadable directory looks the same
    as one without matches.
    """
    if os.path.isabs(pattern):
        pattern = normalize_to_posix(os.path.relpath(pattern, root))
    matcher = GlobMatcher.compile(pattern)
    token = CancellationToken()

    def enter_directory(entry: WalkEntry) -> bool:
        return matcher.match(_relative(root, entry.path), partial=True)

    def accept_file(entry: WalkEntry) -> bool:
        if matcher.match(_relative(root, entry.path)):
            token.cancel()
            return True
        return False

    def on_error(error: OSError) -> None:
        log.debug("Ignoring error while probing %r: %s", pattern, error)

    for _ in walk(
        root,
        enter_directory=enter_directory,
        accept_file=accept_file,
        token=token,
        on_error=on_error,
    ):
        return True
    return False
