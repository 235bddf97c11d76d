"""
Glob matching over `/`-separated relative paths.

Patterns are brace-expanded into alternatives with bracex and split into
segments. A segment of exactly `**` matches any number of path segments; every
other segment is compiled with `wcmatch.fnmatch` and matched against one path
segment at a time. `DOTMATCH` is left off, so wildcards never match a leading
`.` and hidden files and directories have to be named explicitly.

`match(path, partial=True)` answers "could something below `path` still
match?", which is what directory pruning needs.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

import bracex
from wcmatch import fnmatch

from srcfind.file_resolver.patterns import normalize_to_posix


class _Globstar:
    def __repr__(self) -> str:
        return "GLOBSTAR"


GLOBSTAR = _Globstar()

# A compiled segment: `GLOBSTAR`, a literal name, or a matcher for one name.
Segment = _Globstar | str | Callable[[str], bool]

SEGMENT_FLAGS = fnmatch.EXTMATCH | fnmatch.BRACE


def expand_braces(pattern: str) -> list[str]:
    """
    Expand `{a,b}` lists and `{1..3}` / `{a..c}` ranges into separate patterns.
    Groups without a comma or range (like `{a}`) are left as literal text.
    Escapes are kept for the segment matchers.
    """
    expanded: list[str] = []
    for result in bracex.expand(pattern, keep_escapes=True):
        if result not in expanded:
            expanded.append(result)
    return expanded


def _compile_segment(segment: str) -> Segment:
    if segment == "**":
        return GLOBSTAR
    if not fnmatch.is_magic(segment, flags=SEGMENT_FLAGS):
        return segment
    return fnmatch.compile(segment, flags=SEGMENT_FLAGS).match


def _is_hidden(name: str) -> bool:
    return name.startswith(".")


def _segment_matches(segment: Segment, name: str) -> bool:
    if isinstance(segment, str):
        return segment == name
    assert callable(segment)
    return segment(name)


def _match_parts(
    parts: Sequence[str], segments: Sequence[Segment], partial: bool
) -> bool:
    pi = 0
    si = 0
    while pi < len(parts) and si < len(segments):
        segment = segments[si]
        if segment is GLOBSTAR:
            rest = si + 1
            if rest == len(segments):
                # Trailing `**` swallows the remainder, except hidden segments.
                return not any(_is_hidden(p) for p in parts[pi:])
            swallow = pi
            while swallow < len(parts):
                if _match_parts(parts[swallow:], segments[rest:], partial):
                    return True
                if _is_hidden(parts[swallow]):
                    break
                swallow += 1
            return partial and swallow == len(parts)
        if not _segment_matches(segment, parts[pi]):
            return False
        pi += 1
        si += 1

    if pi == len(parts) and si == len(segments):
        return True
    if pi == len(parts):
        return partial
    # Only a trailing slash (an empty last part) may be left over.
    return pi == len(parts) - 1 and parts[pi] == ""


@dataclass(frozen=True)
class GlobMatcher:
    """A compiled glob pattern."""

    pattern: str
    alternatives: tuple[tuple[Segment, ...], ...]

    @classmethod
    def compile(cls, pattern: str) -> GlobMatcher:
        alternatives: list[tuple[Segment, ...]] = []
        for expanded in expand_braces(normalize_to_posix(pattern)):
            while expanded.startswith("./"):
                expanded = expanded[2:]
            alternatives.append(tuple(_compile_segment(s) for s in expanded.split("/")))
        return cls(pattern, tuple(alternatives))

    def match(self, path: str, partial: bool = False) -> bool:
        """
        Match a `/`-separated path. With `partial=True`, also accept paths that
        are a prefix of some full match.
        """
        parts = normalize_to_posix(path).split("/")
        return any(_match_parts(parts, segments, partial) for segments in self.alternatives)


@dataclass(frozen=True)
class MatchSet:
    """Matchers for a batch of patterns, relative to one traversal root."""

    matchers: tuple[GlobMatcher, ...]

    @classmethod
    def from_patterns(cls, patterns: Iterable[str], root: str) -> MatchSet:
        matchers: list[GlobMatcher] = []
        for pattern in patterns:
            if os.path.isabs(pattern):
                pattern = normalize_to_posix(os.path.relpath(pattern, root))
            matchers.append(GlobMatcher.compile(pattern))
        return cls(tuple(matchers))

    def __bool__(self) -> bool:
        return bool(self.matchers)

    def match(self, path: str, partial: bool = False) -> bool:
        return any(m.match(path, partial) for m in self.matchers)
