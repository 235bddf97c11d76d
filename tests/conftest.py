"""Shared test helpers."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from srcfind.file_resolver.types import FilePattern


@dataclass
class NamePolicy:
    """
    A minimal ignore policy: files and directories are ignored when their name
    (or any directory name on their path) is in `ignored_names`.
    """

    base_path: str
    file_patterns: Sequence[FilePattern] = field(default_factory=lambda: ["**/*.js"])
    ignored_names: set[str] = field(default_factory=set)

    def is_file_ignored(self, path: str) -> bool:
        return any(part in self.ignored_names for part in Path(path).parts)

    def is_directory_ignored(self, path: str) -> bool:
        return any(part in self.ignored_names for part in Path(path).parts)


def write_files(root: Path, *names: str) -> None:
    """Create files (and parent directories) under `root`."""
    for name in names:
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"// {name}\n")
