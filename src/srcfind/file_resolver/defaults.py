"""
Default file and ignore patterns for file discovery.

`DEFAULT_FILES` are globs relative to the policy base path. `DEFAULT_IGNORES`
use gitignore syntax; directory patterns end with `/`.
"""

from __future__ import annotations

DEFAULT_FILES: list[str] = ["**/*.js", "**/*.mjs", "**/*.cjs"]

# Directories that should almost never contain files worth analyzing.
# Applied during directory traversal (prune, don't enter).
DEFAULT_IGNORES: list[str] = [
    # Version control
    ".git/",
    ".hg/",
    ".svn/",
    # JavaScript/Node
    "node_modules/",
    ".next/",
    ".nuxt/",
    ".cache/",
    ".parcel-cache/",
    ".turbo/",
    # Build output
    "coverage/",
    # Python
    ".venv/",
    "__pycache__/",
    ".tox/",
]
