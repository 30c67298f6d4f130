"""
Default walk-prune patterns for the path list snapshot.

These patterns use gitignore syntax. Directory patterns end with `/`.
"""

from __future__ import annotations

# Metadata directories never part of a specification's files.
# Applied during the snapshot walk (prune, don't enter).
DEFAULT_WALK_EXCLUDES: list[str] = [
    ".git/",
    ".hg/",
    ".svn/",
    ".bzr/",
    "_darcs/",
    "CVS/",
]
