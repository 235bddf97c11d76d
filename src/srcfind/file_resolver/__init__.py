"""
Self-contained file discovery: resolves files, directories and glob patterns
into the files to analyze, consulting an ignore policy, and explains empty
results.

No imports from `srcfind` outside this package.

Usage::

    from srcfind.file_resolver import FileResolver, ResolverConfig

    config = ResolverConfig(
        files=["**/*.js"],
        extend_ignores=["vendor/"],
    )
    resolver = FileResolver(config)
    files = resolver.resolve([".", "extra/script.js", "lib/**/*.mjs"])
"""

from srcfind.file_resolver.defaults import DEFAULT_FILES, DEFAULT_IGNORES
from srcfind.file_resolver.errors import (
    AllIgnored,
    FileDiscoveryError,
    FindError,
    NotFound,
    ignored_file_notice,
)
from srcfind.file_resolver.patterns import (
    directory_exists,
    file_exists,
    is_glob_pattern,
    normalize_to_posix,
)
from srcfind.file_resolver.policy import PathSpecIgnorePolicy
from srcfind.file_resolver.resolver import FileResolver, FindResult, find_files, find_files_sync
from srcfind.file_resolver.types import IgnorePolicy, ResolvedFile, ResolverConfig

__all__ = [
    "DEFAULT_FILES",
    "DEFAULT_IGNORES",
    "AllIgnored",
    "FileDiscoveryError",
    "FileResolver",
    "FindError",
    "FindResult",
    "IgnorePolicy",
    "NotFound",
    "PathSpecIgnorePolicy",
    "ResolvedFile",
    "ResolverConfig",
    "directory_exists",
    "file_exists",
    "find_files",
    "find_files_sync",
    "ignored_file_notice",
    "is_glob_pattern",
    "normalize_to_posix",
]
