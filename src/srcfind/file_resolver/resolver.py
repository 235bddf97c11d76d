"""
find_files() and FileResolver: main entry points for file discovery.

Resolves a mix of files, directories, and glob patterns into a deduplicated
list of concrete files, consulting an ignore policy, and explains empty
results: either nothing matched, or everything that matched was ignored.
"""

from __future__ import annotations

import asyncio
import logging
import os
import stat
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from srcfind.file_resolver.errors import AllIgnored, FileDiscoveryError, FindError, NotFound
from srcfind.file_resolver.expander import expand_directory
from srcfind.file_resolver.patterns import is_glob_pattern, normalize_to_posix, stat_path
from srcfind.file_resolver.policy import PathSpecIgnorePolicy
from srcfind.file_resolver.types import IgnorePolicy, ResolvedFile, ResolverConfig
from srcfind.file_resolver.walker import glob_match, glob_search

log = logging.getLogger(__name__)


@dataclass
class FindResult:
    """Resolved files, or the diagnostic explaining why there are none."""

    files: list[ResolvedFile] = field(default_factory=list)
    error: FindError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> list[ResolvedFile]:
        """Return `files`, raising `FileDiscoveryError` if there is a diagnostic."""
        if self.error is not None:
            raise FileDiscoveryError(self.error)
        return self.files


async def _stat_all(paths: Sequence[str]) -> list[os.stat_result | None]:
    return list(await asyncio.gather(*(asyncio.to_thread(stat_path, p) for p in paths)))


async def find_files(
    patterns: Sequence[str],
    *,
    glob_input_paths: bool,
    cwd: str,
    policy: IgnorePolicy,
    error_on_unmatched_pattern: bool,
) -> FindResult:
    """
    Resolve `patterns` into files.

    Each pattern is handled as:
    - Existing file → included as given, flagged if the policy ignores it
    - Existing directory → searched with the policy's file patterns
    - Glob (when `glob_input_paths`) → searched, skipping ignored files
    - Otherwise → missing

    All searches share one traversal of `cwd`. If nothing at all was found,
    each glob is probed without the ignore policy so that "everything was
    ignored" can be told apart from "nothing matched".
    """
    results: list[ResolvedFile] = []
    glob_patterns: list[str] = []
    missing_patterns: list[str] = []

    file_paths = [os.path.abspath(os.path.join(cwd, p)) for p in patterns]
    stats = await _stat_all(file_paths)

    for raw_pattern, file_path, st in zip(patterns, file_paths, stats):
        pattern = normalize_to_posix(raw_pattern)

        if st is not None:
            if stat.S_ISREG(st.st_mode):
                results.append(ResolvedFile(file_path, policy.is_file_ignored(file_path)))
            elif stat.S_ISDIR(st.st_mode):
                expanded = expand_directory(file_path, pattern, cwd, policy)
                log.debug("Directory %s expands to %s", raw_pattern, expanded)
                glob_patterns.extend(expanded)
            continue

        if glob_input_paths and is_glob_pattern(file_path):
            glob_patterns.append(pattern)
        else:
            missing_patterns.append(pattern)

    glob_results = await asyncio.to_thread(glob_search, cwd, glob_patterns, policy)

    if not results and not glob_results:
        for glob_pattern in glob_patterns:
            if await asyncio.to_thread(glob_match, cwd, glob_pattern):
                return FindResult(error=AllIgnored(glob_pattern))
            if error_on_unmatched_pattern:
                return FindResult(error=NotFound(glob_pattern, glob_disabled=not glob_input_paths))

    if error_on_unmatched_pattern and missing_patterns:
        return FindResult(error=NotFound(missing_patterns[0], glob_disabled=not glob_input_paths))

    files: list[ResolvedFile] = []
    seen: set[str] = set()
    for resolved in results + [ResolvedFile(os.path.abspath(p), False) for p in glob_results]:
        if resolved.file_path not in seen:
            seen.add(resolved.file_path)
            files.append(resolved)
    return FindResult(files)


def find_files_sync(
    patterns: Sequence[str],
    *,
    glob_input_paths: bool,
    cwd: str,
    policy: IgnorePolicy,
    error_on_unmatched_pattern: bool,
) -> FindResult:
    """
    Run `find_files()` to completion from synchronous code. Code that already
    runs an event loop must `await find_files()` instead; calling this from
    inside a running loop raises `RuntimeError`.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        pass
    else:
        raise RuntimeError("find_files_sync() cannot be called from a running event loop")
    return asyncio.run(
        find_files(
            patterns,
            glob_input_paths=glob_input_paths,
            cwd=cwd,
            policy=policy,
            error_on_unmatched_pattern=error_on_unmatched_pattern,
        )
    )


class FileResolver:
    """
    Discovers files for a `ResolverConfig`, using a `PathSpecIgnorePolicy`
    rooted at `cwd` (default: the current directory). Its methods are
    synchronous; from async code use `find_files()` with `resolver.policy`.
    """

    def __init__(self, config: ResolverConfig, cwd: str | Path | None = None) -> None:
        self._config: ResolverConfig = config
        self._cwd: str = os.path.abspath(cwd if cwd is not None else os.getcwd())
        self.policy: PathSpecIgnorePolicy = PathSpecIgnorePolicy(config, self._cwd)

    def find(self, patterns: Sequence[str | Path]) -> FindResult:
        """Resolve `patterns`, returning files and any diagnostic."""
        return find_files_sync(
            [str(p) for p in patterns],
            glob_input_paths=self._config.glob_input_paths,
            cwd=self._cwd,
            policy=self.policy,
            error_on_unmatched_pattern=self._config.error_on_unmatched_pattern,
        )

    def resolve(self, patterns: Sequence[str | Path]) -> list[ResolvedFile]:
        """
        Resolve `patterns` into files.

        Raises `FileDiscoveryError` when a pattern matched nothing, or only
        ignored files.
        """
        return self.find(patterns).unwrap()
