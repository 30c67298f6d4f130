"""
FileAccessor: resolves the file patterns of a specification against its root.

Takes into account the specification's exclude patterns and the default glob
used for patterns naming a directory.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path

from specfiles.attributes import (
    ATTRIBUTES,
    DEFAULT_HEADER_EXTENSIONS,
    AttributeKind,
    dir_glob_for,
)
from specfiles.consumer import RawPatterns, SpecConsumer
from specfiles.errors import MissingConsumerError
from specfiles.path_list import PathList
from specfiles.patterns import as_patterns, split_patterns

log = logging.getLogger(__name__)

# Tried in order; matching is case-sensitive.
README_PATTERNS: list[str] = ["README{*,.*}", "Readme{*,.*}", "readme{*,.*}"]
LICENSE_PATTERNS: list[str] = ["LICEN{C,S}E{*,.*}", "Licen{c,s}e{*,.*}", "licen{c,s}e{*,.*}"]


class FileAccessor:
    """
    Resolves the file attributes of one specification consumer against the
    files of a `PathList`.

    `header_extensions` decides which source files are
    headers and the directory default of the header attributes.
    """

    def __init__(
        self,
        path_list: PathList,
        spec_consumer: SpecConsumer | None,
        header_extensions: Iterable[str] = DEFAULT_HEADER_EXTENSIONS,
    ) -> None:
        if spec_consumer is None:
            raise MissingConsumerError(path_list.root)
        self.path_list: PathList = path_list
        self.spec_consumer: SpecConsumer = spec_consumer
        # Accept "h" as well as ".h".
        self.header_extensions: frozenset[str] = frozenset(
            ext if ext.startswith(".") else f".{ext}" for ext in header_extensions
        )

    def __repr__(self) -> str:
        return (
            f"<{type(self).__name__} spec={self.spec_name} "
            f"platform={self.platform} root={self.path_list.root}>"
        )

    @property
    def spec_name(self) -> str:
        return self.spec_consumer.name

    @property
    def platform(self) -> str | None:
        return self.spec_consumer.platform

    @property
    def root(self) -> Path:
        return self.path_list.root

    def source_files(self) -> list[Path]:
        return self.paths_for_attribute(AttributeKind.SOURCE_FILES)

    def headers(self) -> list[Path]:
        """The source files whose extension is a header extension."""
        return [path for path in self.source_files() if path.suffix in self.header_extensions]

    def public_headers(self) -> list[Path]:
        """The configured public headers, or all headers when none resolve."""
        public_headers = self.paths_for_attribute(AttributeKind.PUBLIC_HEADER_FILES)
        return public_headers or self.headers()

    def private_headers(self) -> list[Path]:
        return self.paths_for_attribute(AttributeKind.PRIVATE_HEADER_FILES)

    def preserve_paths(self) -> list[Path]:
        return self.paths_for_attribute(AttributeKind.PRESERVE_PATHS)

    def vendored_frameworks(self) -> list[Path]:
        return self.paths_for_attribute(AttributeKind.VENDORED_FRAMEWORKS)

    def vendored_libraries(self) -> list[Path]:
        return self.paths_for_attribute(AttributeKind.VENDORED_LIBRARIES)

    def resources(self) -> dict[str, list[Path]]:
        """The resources grouped by destination."""
        return self._expanded_mapping(self.spec_consumer.resources)

    def resource_bundles(self) -> dict[str, list[Path]]:
        """The resources grouped by bundle name."""
        return self._expanded_mapping(self.spec_consumer.resource_bundles)

    def prefix_header(self) -> Path | None:
        """The prefix header path, which may not exist, or `None` if none is configured."""
        prefix_header_file = self.spec_consumer.prefix_header_file
        if not prefix_header_file:
            return None
        return self.root / prefix_header_file

    def readme(self) -> Path | None:
        return self.path_list.find_first(README_PATTERNS)

    def license(self) -> Path | None:
        """The license file named by the specification, else an auto-detected one."""
        license_file = self.spec_consumer.license_file
        if license_file:
            return self.root / license_file
        return self.path_list.find_first(LICENSE_PATTERNS)

    def paths_for_attribute(self, kind: AttributeKind) -> list[Path]:
        """
        The paths found for an attribute, applying its directory default and
        the specification's exclude patterns.
        """
        patterns = ATTRIBUTES[kind].patterns(self.spec_consumer)
        dir_pattern = dir_glob_for(kind, self.header_extensions)
        return self.expanded_paths(
            patterns, dir_pattern, self.spec_consumer.exclude_files, attribute=kind.value
        )

    def expanded_paths(
        self,
        patterns: RawPatterns,
        dir_pattern: str | None = None,
        exclude_patterns: Iterable[str] | None = None,
        attribute: str | None = None,
    ) -> list[Path]:
        """
        Match the patterns against the files of the path list. Explicit file
        lists are expanded on their own, without the exclude patterns.
        """
        if not patterns:
            return []

        globs, file_lists = split_patterns(as_patterns(patterns))
        if isinstance(exclude_patterns, str):
            exclude_patterns = [exclude_patterns]
        excludes = list(exclude_patterns) if exclude_patterns else None

        result: dict[Path, None] = dict.fromkeys(self.path_list.glob(globs, dir_pattern, excludes))
        for file_list in file_lists:
            result.update(dict.fromkeys(file_list.expand(self.root)))

        if file_lists:
            log.warning(
                "[%s] The usage of explicit file lists is deprecated. Use `exclude_files`.%s",
                self.spec_name,
                f" (attribute: {attribute})" if attribute else "",
            )

        return list(result)

    def _expanded_mapping(self, mapping: Mapping[str, RawPatterns]) -> dict[str, list[Path]]:
        return {
            key: self.expanded_paths(patterns, None, self.spec_consumer.exclude_files)
            for key, patterns in mapping.items()
        }
