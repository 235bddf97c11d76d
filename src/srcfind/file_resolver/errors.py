"""
Diagnostics for patterns that resolve to nothing.

`NotFound` and `AllIgnored` are plain values returned from `find_files()`.
`FileDiscoveryError` wraps one of them for callers that want an exception.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class NotFound:
    """A pattern matched no file at all."""

    pattern: str
    glob_disabled: bool = False

    message_template = "file-not-found"

    @property
    def message(self) -> str:
        suffix = " (glob was disabled)" if self.glob_disabled else ""
        return f"No files matching '{self.pattern}' were found{suffix}."

    @property
    def message_data(self) -> dict[str, Any]:
        return {"pattern": self.pattern, "globDisabled": self.glob_disabled}


@dataclass(frozen=True)
class AllIgnored:
    """A pattern matched files, but every one of them is ignored."""

    pattern: str

    message_template = "all-files-ignored"

    @property
    def message(self) -> str:
        return f"All files matched by '{self.pattern}' are ignored."

    @property
    def message_data(self) -> dict[str, Any]:
        return {"pattern": self.pattern}


FindError = NotFound | AllIgnored


class FileDiscoveryError(Exception):
    """Raised by the synchronous facade when resolution produced a diagnostic."""

    def __init__(self, error: FindError) -> None:
        super().__init__(error.message)
        self.error: FindError = error

    @property
    def pattern(self) -> str:
        return self.error.pattern


def ignored_file_notice(file_path: str, base_dir: str | None = None) -> str:
    """
    Explain why an explicitly named file was ignored and how to include it.
    """
    is_hidden = any(segment.startswith(".") for segment in file_path.split(os.sep))
    in_node_modules = base_dir is not None and os.path.relpath(file_path, base_dir).startswith(
        "node_modules"
    )
    if is_hidden:
        return (
            "File ignored by default. Use a negated ignore pattern "
            "(like \"--ignore-pattern '!<relative/path/to/filename>'\") to override."
        )
    if in_node_modules:
        return "File ignored by default. Use \"--ignore-pattern '!node_modules/*'\" to override."
    return 'File ignored because of a matching ignore pattern. Use "--no-ignore" to override.'
