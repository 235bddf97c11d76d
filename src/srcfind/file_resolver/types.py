"""Configuration and result types for file resolution."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Protocol

from srcfind.file_resolver.defaults import DEFAULT_FILES, DEFAULT_IGNORES

# An entry in a policy's `file_patterns`: a glob string, or a predicate over
# absolute paths that directory expansion cannot reason about.
FilePattern = str | Callable[[str], bool]


class IgnorePolicy(Protocol):
    """
    The ignore rules consulted while resolving files. Must not change during
    a resolution call.
    """

    @property
    def base_path(self) -> str:
        """Absolute directory that `file_patterns` are relative to."""
        ...

    @property
    def file_patterns(self) -> Sequence[FilePattern]:
        """Ordered patterns describing which files apply."""
        ...

    def is_file_ignored(self, path: str) -> bool: ...

    def is_directory_ignored(self, path: str) -> bool: ...


@dataclass(frozen=True)
class ResolvedFile:
    """
    A file to process. `file_path` is absolute. `ignored` is only ever true for
    files named explicitly that the ignore policy flags.
    """

    file_path: str
    ignored: bool = False


@dataclass
class ResolverConfig:
    """
    Configuration for file discovery and filtering.

    `tool_name` determines the ignore file name (e.g., `.srcfindignore`).
    `ignores=None` means use `DEFAULT_IGNORES`; providing a list replaces them entirely.
    `use_ignores=False` disables every ignore rule, defaults and ignore files included.
    """

    tool_name: str = "srcfind"
    files: list[FilePattern] = field(default_factory=lambda: list(DEFAULT_FILES))
    extend_files: list[FilePattern] = field(default_factory=list)
    ignores: list[str] | None = None
    extend_ignores: list[str] = field(default_factory=list)
    use_ignores: bool = True
    respect_gitignore: bool = True
    glob_input_paths: bool = True
    error_on_unmatched_pattern: bool = True

    @property
    def effective_files(self) -> list[FilePattern]:
        """Combined file patterns: `files + extend_files`."""
        return self.files + self.extend_files

    @property
    def effective_ignores(self) -> list[str]:
        """Combined ignore patterns: defaults (or `ignores`) + `extend_ignores`."""
        if not self.use_ignores:
            return []
        base = self.ignores if self.ignores is not None else list(DEFAULT_IGNORES)
        return base + self.extend_ignores
