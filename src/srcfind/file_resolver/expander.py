"""
Directory expansion: turning a directory input into glob patterns.

A directory named on the command line is searched with the policy's file
patterns, but only with the ones that could apply inside it. The exclusion
rules are listed in `EXCLUSION_RULES` so each can be checked on its own.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from dataclasses import dataclass

from srcfind.file_resolver.matcher import GlobMatcher
from srcfind.file_resolver.patterns import normalize_to_posix
from srcfind.file_resolver.types import IgnorePolicy

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExpansionContext:
    """What an exclusion rule may look at besides the pattern itself."""

    directory: str
    cwd: str
    base_path: str


@dataclass(frozen=True)
class ExclusionRule:
    name: str
    applies: Callable[[str, ExpansionContext], bool]


def _escapes(relative: str) -> bool:
    return relative.startswith("..")


def ends_with_wildcard(pattern: str, context: ExpansionContext) -> bool:
    """Patterns like `src/*` describe directory contents, not a file search."""
    return pattern.endswith("*")


def is_negated(pattern: str, context: ExpansionContext) -> bool:
    """Negations are left to the ignore policy."""
    return pattern.startswith("!")


def is_outside_base_path(pattern: str, context: ExpansionContext) -> bool:
    """The pattern points outside the policy's base directory."""
    full_pattern = os.path.join(context.cwd, pattern)
    return _escapes(os.path.relpath(full_pattern, context.base_path))


def is_out_of_reach(pattern: str, context: ExpansionContext) -> bool:
    """
    Neither can the directory contain the pattern's directory, nor does the
    pattern lie inside the directory.
    """
    full_pattern = os.path.join(context.cwd, pattern)
    pattern_dir = normalize_to_posix(os.path.dirname(full_pattern))
    if GlobMatcher.compile(pattern_dir).match(normalize_to_posix(context.directory), partial=True):
        return False
    return _escapes(os.path.relpath(full_pattern, context.directory))


EXCLUSION_RULES: tuple[ExclusionRule, ...] = (
    ExclusionRule("trailing-wildcard", ends_with_wildcard),
    ExclusionRule("negated", is_negated),
    ExclusionRule("outside-base-path", is_outside_base_path),
    ExclusionRule("out-of-reach", is_out_of_reach),
)


def is_recursive(pattern: str) -> bool:
    """Patterns starting with `**` apply everywhere."""
    return pattern.startswith("**")


def excluded_by(pattern: str, context: ExpansionContext) -> str | None:
    """Name of the first exclusion rule that rejects `pattern`, or `None`."""
    for rule in EXCLUSION_RULES:
        if rule.applies(pattern, context):
            return rule.name
    return None


def expand_directory(directory: str, pattern: str, cwd: str, policy: IgnorePolicy) -> list[str]:
    """
    Glob patterns that search `directory` with the policy's file patterns.

    `directory` is the absolute directory path; `pattern` is the user's input
    that named it, used as the prefix for recursive patterns. Non-recursive
    patterns are rewritten relative to `cwd`.
    """
    context = ExpansionContext(directory=directory, cwd=cwd, base_path=policy.base_path)
    expanded: list[str] = []
    for file_pattern in policy.file_patterns:
        if not isinstance(file_pattern, str):
            continue
        if is_recursive(file_pattern):
            joined = os.path.normpath(os.path.join(pattern, file_pattern))
        else:
            rule = excluded_by(file_pattern, context)
            if rule is not None:
                log.debug("Not searching %s with %r (%s)", directory, file_pattern, rule)
                continue
            joined = os.path.relpath(os.path.join(policy.base_path, file_pattern), cwd)
        expanded.append(normalize_to_posix(joined))
    return expanded
