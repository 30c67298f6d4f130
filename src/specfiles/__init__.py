"""
Resolve the file patterns of a package specification (source files, headers,
resources, ...) against its root directory.

Usage::

    from specfiles import FileAccessor, PathList, SpecConsumer

    consumer = SpecConsumer(name="MyPod", source_files=["Classes"], exclude_files=["**/Tests/*"])
    accessor = FileAccessor(PathList("/path/to/MyPod"), consumer)
    headers = accessor.public_headers()
"""

from specfiles.attributes import DEFAULT_HEADER_EXTENSIONS, AttributeKind
from specfiles.consumer import SpecConsumer
from specfiles.errors import (
    ConfigError,
    MissingConsumerError,
    RootNotFoundError,
    SpecFilesError,
)
from specfiles.file_accessor import FileAccessor
from specfiles.path_list import PathList
from specfiles.patterns import ExplicitFileList, FilePattern, GlobPattern, PatternKind

__all__ = [
    "DEFAULT_HEADER_EXTENSIONS",
    "AttributeKind",
    "ConfigError",
    "ExplicitFileList",
    "FileAccessor",
    "FilePattern",
    "GlobPattern",
    "MissingConsumerError",
    "PathList",
    "PatternKind",
    "RootNotFoundError",
    "SpecConsumer",
    "SpecFilesError",
]
