"""
Shell-style glob matching of root-relative paths, built on wcmatch.

`*` and `?` stay within one path segment, `**` spans zero or more segments,
`{a,b}` expands to alternatives. Matching is always case-sensitive and always
uses `/` as separator, whatever the platform.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from wcmatch import glob

GLOB_FLAGS: int = glob.GLOBSTAR | glob.BRACE | glob.CASE | glob.FORCEUNIX

# For globbing the real filesystem rather than a list of paths.
FS_GLOB_FLAGS: int = glob.GLOBSTAR | glob.BRACE | glob.CASE

# Exclusions also reach dot-files, so `**/*` excludes everything.
EXCLUDE_FLAGS: int = GLOB_FLAGS | glob.DOTGLOB


def normalize_pattern(pattern: str) -> str:
    """Strip leading `./` and trailing `/`; the root itself becomes `""`."""
    while pattern.startswith("./"):
        pattern = pattern[2:]
    pattern = pattern.rstrip("/")
    return "" if pattern == "." else pattern


def match_paths(
    paths: Iterable[str], patterns: str | Sequence[str], *, exclude: bool = False
) -> list[str]:
    """Paths matching any of the patterns, in input order."""
    if isinstance(patterns, str):
        patterns = [patterns]
    patterns = [p for p in (normalize_pattern(p) for p in patterns) if p]
    if not patterns:
        return []
    flags = EXCLUDE_FLAGS if exclude else GLOB_FLAGS
    return glob.globfilter(list(paths), patterns, flags=flags)
