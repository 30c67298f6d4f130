"""Directory pruning for the snapshot walk using pathspec."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import PurePosixPath

import pathspec


def compile_walk_excludes(patterns: Iterable[str]) -> pathspec.PathSpec | None:
    """
    Compile gitignore-style prune patterns, skipping blanks and comments.
    Returns `None` when nothing is left to match.
    """
    lines = [line for line in patterns if line.strip() and not line.strip().startswith("#")]
    if not lines:
        return None
    return pathspec.GitIgnoreSpec.from_lines(lines)


def is_dir_pruned(spec: pathspec.PathSpec | None, rel_path: PurePosixPath) -> bool:
    """Check if a directory (relative to the walk root) should not be entered."""
    if spec is None:
        return False
    # Unanchored patterns already match at any depth; anchored ones only at the root.
    return spec.match_file(rel_path.as_posix() + "/")
