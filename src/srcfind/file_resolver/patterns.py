"""
Pattern classification and existence checks.

Every pattern is matched in POSIX form (`/` separators), whatever the host OS.
"""

from __future__ import annotations

import errno
import os
import re
import stat

from wcmatch import glob

# Syntax recognized as glob: wildcards, classes, braces, extglob groups and a
# `!` negation.
_GLOB_FLAGS = glob.BRACE | glob.EXTGLOB | glob.NEGATE

# Backslash escapes a glob character on POSIX.
_ESCAPED_RE = re.compile(r"\\.")

# `stat()` failures that just mean "nothing is there". Windows rejects glob
# characters in file names with EINVAL.
_MISSING_ERRNOS = frozenset(
    {errno.ENOENT, errno.ENOTDIR} | ({errno.EINVAL} if os.name == "nt" else set())
)


def normalize_to_posix(pattern: str) -> str:
    """Replace backslash separators with forward slashes."""
    return pattern.replace("\\", "/")


def is_glob_pattern(pattern: str) -> bool:
    """Check if a string uses glob syntax rather than naming a literal path."""
    if os.sep == "\\":
        pattern = normalize_to_posix(pattern)
    else:
        pattern = _ESCAPED_RE.sub("", pattern)
    return glob.is_magic(pattern, flags=_GLOB_FLAGS)


def stat_path(path: str) -> os.stat_result | None:
    """
    Stat `path`, returning `None` when it does not exist (or a parent is not a
    directory). Any other `OSError`, like a permission error, propagates.
    """
    try:
        return os.stat(path)
    except OSError as e:
        if e.errno in _MISSING_ERRNOS:
            return None
        raise


def file_exists(path: str) -> bool:
    """True if `path` is an existing regular file."""
    st = stat_path(path)
    return st is not None and stat.S_ISREG(st.st_mode)


def directory_exists(path: str) -> bool:
    """True if `path` is an existing directory."""
    st = stat_path(path)
    return st is not None and stat.S_ISDIR(st.st_mode)
