"""Exceptions raised while resolving specification file patterns."""

from __future__ import annotations

from pathlib import Path


class SpecFilesError(Exception):
    """Base class for all specfiles errors."""


class RootNotFoundError(SpecFilesError):
    """
    The root of a `PathList` does not exist or is not a directory.

    Raised on first access to the snapshot, not at construction.
    """

    def __init__(self, root: Path) -> None:
        self.root: Path = root
        super().__init__(f"Attempt to read non existent folder `{root}`.")


class MissingConsumerError(SpecFilesError):
    """A `FileAccessor` was constructed without a specification consumer."""

    def __init__(self, root: Path | None = None) -> None:
        self.root: Path | None = root
        msg = "Attempt to initialize file accessor without a specification consumer."
        if root is not None:
            msg += f" (root: {root})"
        super().__init__(msg)


class ConfigError(SpecFilesError):
    """A config file could not be parsed or holds a badly typed value."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path: Path = path
        super().__init__(f"Invalid config file `{path}`: {reason}")
