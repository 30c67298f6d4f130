"""
PathList: a rooted directory snapshot answering glob queries.

The tree under the root is walked once, on first use, and cached for the
lifetime of the instance. Later filesystem changes are not seen.
"""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Sequence
from pathlib import Path, PurePosixPath

from specfiles.errors import RootNotFoundError
from specfiles.path_list.defaults import DEFAULT_WALK_EXCLUDES
from specfiles.path_list.matching import match_paths, normalize_pattern
from specfiles.path_list.walk import compile_walk_excludes, is_dir_pruned

log = logging.getLogger(__name__)


def _raise_unless_missing(error: OSError) -> None:
    # A path removed while walking is not a match, not an error.
    if isinstance(error, FileNotFoundError):
        log.debug("Skipping vanished path: %s", error.filename)
        return
    raise error


class PathList:
    """
    The files and directories under `root`, read once and matched with
    shell-style globs.

    `walk_exclude` (gitignore syntax) lists directories never entered;
    `None` means use `DEFAULT_WALK_EXCLUDES`.
    """

    def __init__(self, root: str | Path, walk_exclude: Sequence[str] | None = None) -> None:
        self._root: Path = Path(root).absolute()
        patterns = DEFAULT_WALK_EXCLUDES if walk_exclude is None else walk_exclude
        self._walk_spec = compile_walk_excludes(patterns)
        self._load_lock = threading.Lock()
        self._files: tuple[str, ...] | None = None
        self._dirs: frozenset[str] = frozenset()

    def __repr__(self) -> str:
        return f"<PathList root={self._root} loaded={self.is_loaded}>"

    @property
    def root(self) -> Path:
        return self._root

    @property
    def is_loaded(self) -> bool:
        """Whether the snapshot has been read."""
        return self._files is not None

    @property
    def files(self) -> tuple[str, ...]:
        """Root-relative POSIX paths of all files, sorted."""
        self.read_file_system()
        assert self._files is not None
        return self._files

    @property
    def dirs(self) -> frozenset[str]:
        """Root-relative POSIX paths of all directories."""
        self.read_file_system()
        return self._dirs

    def read_file_system(self) -> None:
        """
        Walk the tree once. Concurrent first callers wait for the walk in
        progress and then share its result.
        """
        if self._files is not None:
            return
        with self._load_lock:
            if self._files is not None:
                return
            files, dirs = self._walk()
            # Publish dirs before files: `is_loaded` keys off `_files`.
            self._dirs = dirs
            self._files = files

    def is_directory(self, rel_path: str) -> bool:
        """Whether `rel_path` names a directory of the snapshot (`""` is the root)."""
        rel_path = normalize_pattern(rel_path)
        return rel_path == "" or rel_path in self.dirs

    def glob(
        self,
        patterns: str | Sequence[str],
        dir_pattern: str | None = None,
        exclude_patterns: Sequence[str] | None = None,
    ) -> list[Path]:
        """
        Absolute paths of the files matching any of `patterns`, minus those
        matching any of `exclude_patterns`.

        A pattern naming a directory is extended with `dir_pattern`; without
        one, it matches nothing since only files are ever returned. Results
        are deduplicated, in pattern order then snapshot order.
        """
        relative = self.relative_glob(patterns, dir_pattern, exclude_patterns)
        return [self._root / rel for rel in relative]

    def relative_glob(
        self,
        patterns: str | Sequence[str],
        dir_pattern: str | None = None,
        exclude_patterns: Sequence[str] | None = None,
    ) -> list[Path]:
        """Like `glob()` but returns paths relative to the root."""
        if isinstance(patterns, str):
            patterns = [patterns]
        if not patterns:
            return []

        matched: dict[str, None] = {}
        for raw in patterns:
            pattern = normalize_pattern(raw)
            if dir_pattern and self.is_directory(pattern):
                pattern = f"{pattern}/{dir_pattern}" if pattern else dir_pattern
            if not pattern:
                continue
            for rel in match_paths(self.files, pattern):
                matched.setdefault(rel)

        if exclude_patterns and matched:
            excluded = set(match_paths(matched, exclude_patterns, exclude=True))
            return [Path(rel) for rel in matched if rel not in excluded]
        return [Path(rel) for rel in matched]

    def find_first(self, patterns: Sequence[str]) -> Path | None:
        """
        The first file matching the patterns, trying them in priority order,
        or `None`. Used to detect single files such as a README.
        """
        for pattern in patterns:
            found = match_paths(self.files, pattern)
            if found:
                return self._root / found[0]
        return None

    def _walk(self) -> tuple[tuple[str, ...], frozenset[str]]:
        root = self._root
        if not root.is_dir() or not os.access(root, os.R_OK | os.X_OK):
            raise RootNotFoundError(root)

        log.debug("Reading file system under %s", root)
        files: list[str] = []
        dirs: set[str] = set()
        for dirpath, dirnames, filenames in os.walk(root, onerror=_raise_unless_missing):
            rel_dir = PurePosixPath(Path(dirpath).relative_to(root).as_posix())
            # Prune in place so pruned directories are never entered.
            dirnames[:] = sorted(
                d for d in dirnames if not is_dir_pruned(self._walk_spec, rel_dir / d)
            )
            dirs.update((rel_dir / d).as_posix() for d in dirnames)
            files.extend((rel_dir / f).as_posix() for f in filenames)

        files.sort()
        log.debug("Read %d files and %d directories under %s", len(files), len(dirs), root)
        return tuple(files), frozenset(dirs)
