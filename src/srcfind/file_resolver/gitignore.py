"""Gitignore and tool-specific ignore file handling using pathspec."""

from __future__ import annotations

from pathlib import Path

import pathspec


def _read_ignore_file(path: Path) -> pathspec.PathSpec | None:
    """
    Compile an ignore file into a `PathSpec`. Missing, unreadable, non-UTF-8
    and effectively empty files all give `None`.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None
    lines = [line for line in text.splitlines() if line.strip() and not line.startswith("#")]
    if not lines:
        return None
    return pathspec.PathSpec.from_lines("gitignore", lines)


def load_gitignore(directory: Path) -> pathspec.PathSpec | None:
    """Read `.gitignore` in the given directory, or `None` if there is none."""
    return _read_ignore_file(directory / ".gitignore")


def find_tool_ignore(tool_name: str, start_dir: Path) -> Path | None:
    """
    Walk up from `start_dir` looking for `.{tool_name}ignore` (e.g., `.srcfindignore`).
    """
    ignore_name = f".{tool_name}ignore"
    current = start_dir.resolve()
    while True:
        candidate = current / ignore_name
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            return None
        current = parent


def load_tool_ignore(tool_name: str, start_dir: Path) -> tuple[Path, pathspec.PathSpec] | None:
    """
    Load the nearest tool ignore file at or above `start_dir`. Returns the
    directory its patterns are relative to, with the compiled spec.
    """
    path = find_tool_ignore(tool_name, start_dir)
    if path is None:
        return None
    spec = _read_ignore_file(path)
    if spec is None:
        return None
    return path.parent, spec
