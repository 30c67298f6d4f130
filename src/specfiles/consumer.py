"""
The specification consumer: file attributes of one specification, for one platform.

Parsing a specification is not this package's job. Any object exposing these
attributes can be handed to a `FileAccessor`; `SpecConsumer` is the plain
in-memory form used by the CLI and tests.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from specfiles.patterns import FilePattern

RawPatterns = Sequence[str | FilePattern]


@dataclass
class SpecConsumer:
    """
    File patterns of a specification. Pattern fields accept plain glob strings
    or `FilePattern` values. `resources` is keyed by destination,
    `resource_bundles` by bundle name.
    """

    name: str = ""
    platform: str | None = None

    source_files: RawPatterns = field(default_factory=list)
    public_header_files: RawPatterns = field(default_factory=list)
    private_header_files: RawPatterns = field(default_factory=list)
    preserve_paths: RawPatterns = field(default_factory=list)
    vendored_frameworks: RawPatterns = field(default_factory=list)
    vendored_libraries: RawPatterns = field(default_factory=list)
    resources: Mapping[str, RawPatterns] = field(default_factory=dict)
    resource_bundles: Mapping[str, RawPatterns] = field(default_factory=dict)
    exclude_files: Sequence[str] = field(default_factory=list)

    prefix_header_file: str | None = None
    license_file: str | None = None
