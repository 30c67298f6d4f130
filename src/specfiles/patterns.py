"""
File pattern variants accepted by specification attributes.

A pattern is either a `GlobPattern`, matched against the cached `PathList`
snapshot, or a legacy `ExplicitFileList`, expanded on its own against the
filesystem. Resolution code branches on `kind`, never on the Python type.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import ClassVar, cast

from wcmatch import glob

from specfiles.path_list.matching import FS_GLOB_FLAGS, match_paths, normalize_pattern


class PatternKind(Enum):
    GLOB = "glob"
    EXPLICIT_LIST = "explicit_list"


@dataclass(frozen=True)
class GlobPattern:
    """A glob pattern relative to the specification root."""

    kind: ClassVar[PatternKind] = PatternKind.GLOB

    pattern: str

    def __str__(self) -> str:
        return self.pattern


@dataclass(frozen=True)
class ExplicitFileList:
    """
    Deprecated pre-resolved list of paths (which may still contain globs),
    with its own exclusions. Use the specification's `exclude_files` instead.
    """

    kind: ClassVar[PatternKind] = PatternKind.EXPLICIT_LIST

    paths: tuple[str, ...]
    excludes: tuple[str, ...] = field(default=())

    def __str__(self) -> str:
        return f"ExplicitFileList({', '.join(self.paths)})"

    def expand(self, root: Path) -> list[Path]:
        """
        Expand the entries against the filesystem under `root`, minus this
        list's own exclusions. Returns absolute file paths in entry order.
        """
        matched: dict[str, None] = {}
        for entry in self.paths:
            entry = normalize_pattern(entry)
            if not entry:
                continue
            for rel in sorted(glob.glob(entry, flags=FS_GLOB_FLAGS, root_dir=root)):
                if (root / rel).is_file():
                    matched.setdefault(Path(rel).as_posix())
        excluded = set(match_paths(matched, self.excludes, exclude=True))
        return [root / rel for rel in matched if rel not in excluded]


FilePattern = GlobPattern | ExplicitFileList


def as_patterns(items: Iterable[str | FilePattern] | str | None) -> list[FilePattern]:
    """
    Tag raw collaborator values as patterns. Plain strings become `GlobPattern`s;
    a single string is treated as a one-element list; `None` is an empty list.
    """
    if items is None:
        return []
    if isinstance(items, str):
        items = [items]
    return [GlobPattern(item) if isinstance(item, str) else item for item in items]


def split_patterns(
    patterns: Iterable[FilePattern],
) -> tuple[list[str], list[ExplicitFileList]]:
    """Separate glob pattern strings from explicit file lists, preserving order."""
    globs: list[str] = []
    file_lists: list[ExplicitFileList] = []
    for pattern in patterns:
        if pattern.kind is PatternKind.GLOB:
            globs.append(cast(GlobPattern, pattern).pattern)
        else:
            file_lists.append(cast(ExplicitFileList, pattern))
    return globs, file_lists
