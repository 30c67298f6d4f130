"""
File attributes of a specification and their directory defaults.

Each `AttributeKind` maps to an accessor for its patterns on the consumer and
to the glob appended when one of those patterns names a directory.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from specfiles.consumer import RawPatterns, SpecConsumer

# Extensions recognized as headers, with the leading dot.
DEFAULT_HEADER_EXTENSIONS: frozenset[str] = frozenset(
    [".h", ".hh", ".hpp", ".ipp", ".tpp", ".hxx", ".def"]
)

SOURCE_FILES_DIR_GLOB = "*.{h,hpp,hh,m,mm,c,cpp}"


class AttributeKind(Enum):
    SOURCE_FILES = "source_files"
    PUBLIC_HEADER_FILES = "public_header_files"
    PRIVATE_HEADER_FILES = "private_header_files"
    PRESERVE_PATHS = "preserve_paths"
    VENDORED_FRAMEWORKS = "vendored_frameworks"
    VENDORED_LIBRARIES = "vendored_libraries"


def header_dir_glob(header_extensions: Iterable[str]) -> str | None:
    """Directory glob selecting the given header extensions, e.g. `*.{h,hpp}`."""
    exts = sorted(ext.lstrip(".") for ext in header_extensions if ext.strip("."))
    if not exts:
        return None
    if len(exts) == 1:
        return f"*.{exts[0]}"
    return "*.{" + ",".join(exts) + "}"


def _source_files_dir_glob(_header_extensions: frozenset[str]) -> str | None:
    return SOURCE_FILES_DIR_GLOB


def _no_dir_glob(_header_extensions: frozenset[str]) -> str | None:
    return None


@dataclass(frozen=True)
class AttributeSpec:
    """How to resolve one attribute: where its patterns come from and its directory default."""

    patterns: Callable[[SpecConsumer], RawPatterns]
    dir_glob: Callable[[frozenset[str]], str | None]


ATTRIBUTES: dict[AttributeKind, AttributeSpec] = {
    AttributeKind.SOURCE_FILES: AttributeSpec(
        lambda consumer: consumer.source_files, _source_files_dir_glob
    ),
    AttributeKind.PUBLIC_HEADER_FILES: AttributeSpec(
        lambda consumer: consumer.public_header_files, header_dir_glob
    ),
    AttributeKind.PRIVATE_HEADER_FILES: AttributeSpec(
        lambda consumer: consumer.private_header_files, header_dir_glob
    ),
    AttributeKind.PRESERVE_PATHS: AttributeSpec(
        lambda consumer: consumer.preserve_paths, _no_dir_glob
    ),
    AttributeKind.VENDORED_FRAMEWORKS: AttributeSpec(
        lambda consumer: consumer.vendored_frameworks, _no_dir_glob
    ),
    AttributeKind.VENDORED_LIBRARIES: AttributeSpec(
        lambda consumer: consumer.vendored_libraries, _no_dir_glob
    ),
}


def dir_glob_for(kind: AttributeKind, header_extensions: frozenset[str]) -> str | None:
    """The directory glob for an attribute, or `None` if it has no default."""
    return ATTRIBUTES[kind].dir_glob(header_extensions)
