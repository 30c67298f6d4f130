"""
Rooted directory snapshot with shell-style glob queries.

No imports from `specfiles` outside this package except its errors.

Usage::

    from specfiles.path_list import PathList

    path_list = PathList("/path/to/pod")
    sources = path_list.glob(["Classes"], "*.{h,m}", ["**/Private/*"])
"""

from specfiles.path_list.defaults import DEFAULT_WALK_EXCLUDES
from specfiles.path_list.matching import match_paths, normalize_pattern
from specfiles.path_list.path_list import PathList

__all__ = [
    "DEFAULT_WALK_EXCLUDES",
    "PathList",
    "match_paths",
    "normalize_pattern",
]
