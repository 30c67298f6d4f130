#!/usr/bin/env python3
"""
specfiles: Resolve the file patterns of a package specification

Common usage:
  specfiles MyPod --source-files 'Classes' --show headers
  specfiles MyPod --source-files '**/*.{h,m}' --exclude-files 'Tests/**' --relative
  specfiles MyPod --resource 'Assets/*.png' --resource 'fonts=Fonts/*.ttf' --show resources
  specfiles MyPod --show license

Header extensions and walk exclusions can be set in `.specfiles.toml`,
`specfiles.toml` or `pyproject.toml [tool.specfiles]`.
"""

from __future__ import annotations

import argparse
import importlib.metadata
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from specfiles.attributes import DEFAULT_HEADER_EXTENSIONS
from specfiles.config import find_config_file, load_config, merge_cli_with_config
from specfiles.consumer import SpecConsumer
from specfiles.errors import SpecFilesError
from specfiles.file_accessor import FileAccessor
from specfiles.path_list import DEFAULT_WALK_EXCLUDES, PathList

log = logging.getLogger(__name__)

DEFAULT_RESOURCE_DESTINATION = "resources"

SHOW_CHOICES = [
    "source-files",
    "headers",
    "public-headers",
    "private-headers",
    "preserve-paths",
    "vendored-frameworks",
    "vendored-libraries",
    "resources",
    "resource-bundles",
    "prefix-header",
    "readme",
    "license",
]


@dataclass
class Options:
    """Command-line options for the specfiles tool."""

    root: str | None
    show: str
    name: str
    platform: str | None
    source_files: list[str]
    public_header_files: list[str]
    private_header_files: list[str]
    preserve_paths: list[str]
    vendored_frameworks: list[str]
    vendored_libraries: list[str]
    resources: list[str]
    resource_bundles: list[str]
    exclude_files: list[str]
    prefix_header_file: str | None
    license_file: str | None
    # Config-file backed options
    header_extensions: list[str] | None
    walk_exclude: list[str] | None
    extend_walk_exclude: list[str] | None
    relative: bool
    verbose: bool
    version: bool


# Append options whose value may also come from the config file.
_CONFIG_BACKED = ("header_extensions", "walk_exclude", "extend_walk_exclude")


def _parse_args(args: list[str] | None = None) -> tuple[Options, set[str]]:
    """
    Parse command-line arguments.

    Returns a tuple of (options, explicit_flags) where `explicit_flags` tracks
    which config-backed flags the user explicitly passed.
    """
    # Use the module's docstring as the description
    module_doc = __doc__ or ""
    doc_parts = module_doc.split("\n\n")
    description = doc_parts[0]
    epilog = "\n\n".join(doc_parts[1:])

    parser = argparse.ArgumentParser(
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "root",
        nargs="?",
        type=str,
        default=None,
        help="Root directory of the specification (the package sources)",
    )
    parser.add_argument(
        "--show",
        type=str,
        choices=SHOW_CHOICES,
        default="source-files",
        help="Which resolved files to print (default: %(default)s)",
    )
    parser.add_argument("--name", type=str, default="", help="Specification name for messages")
    parser.add_argument("--platform", type=str, default=None, help="Platform being consumed")
    # Attribute patterns
    for flag, help_text in [
        ("--source-files", "Source file pattern or directory"),
        ("--public-header-files", "Public header pattern or directory"),
        ("--private-header-files", "Private header pattern or directory"),
        ("--preserve-paths", "Pattern of paths to preserve"),
        ("--vendored-frameworks", "Pattern of vendored frameworks"),
        ("--vendored-libraries", "Pattern of vendored libraries"),
        ("--exclude-files", "Pattern of files excluded from all attributes"),
    ]:
        parser.add_argument(
            flag,
            action="append",
            default=[],
            metavar="PATTERN",
            help=f"{help_text}. Can be repeated",
        )
    parser.add_argument(
        "--resource",
        action="append",
        default=[],
        dest="resources",
        metavar="[DEST=]PATTERN",
        help=f"Resource pattern, optionally for a destination "
        f"(default destination: {DEFAULT_RESOURCE_DESTINATION}). Can be repeated",
    )
    parser.add_argument(
        "--resource-bundle",
        action="append",
        default=[],
        dest="resource_bundles",
        metavar="NAME=PATTERN",
        help="Resource bundle pattern. Can be repeated",
    )
    parser.add_argument(
        "--prefix-header-file", type=str, default=None, help="Prefix header, relative to root"
    )
    parser.add_argument(
        "--license-file", type=str, default=None, help="License file, relative to root"
    )
    # Config-backed options; None means not supplied
    parser.add_argument(
        "--header-extension",
        action="append",
        default=None,
        dest="header_extensions",
        metavar="EXT",
        help="Replace the recognized header extensions (e.g., '.h'). Can be repeated",
    )
    parser.add_argument(
        "--walk-exclude",
        action="append",
        default=None,
        metavar="PATTERN",
        help="Replace the default directories never walked (gitignore syntax). Can be repeated",
    )
    parser.add_argument(
        "--extend-walk-exclude",
        action="append",
        default=None,
        metavar="PATTERN",
        help="Add to the directories never walked (e.g., 'Carthage/'). Can be repeated",
    )
    parser.add_argument(
        "--relative", action="store_true", help="Print paths relative to the root"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version information and exit",
    )
    opts = parser.parse_args(args)

    # For append actions, None means not supplied; a list means supplied.
    explicit_flags = {name for name in _CONFIG_BACKED if getattr(opts, name) is not None}

    return (
        Options(
            root=opts.root,
            show=opts.show,
            name=opts.name,
            platform=opts.platform,
            source_files=opts.source_files,
            public_header_files=opts.public_header_files,
            private_header_files=opts.private_header_files,
            preserve_paths=opts.preserve_paths,
            vendored_frameworks=opts.vendored_frameworks,
            vendored_libraries=opts.vendored_libraries,
            resources=opts.resources,
            resource_bundles=opts.resource_bundles,
            exclude_files=opts.exclude_files,
            prefix_header_file=opts.prefix_header_file,
            license_file=opts.license_file,
            header_extensions=opts.header_extensions,
            walk_exclude=opts.walk_exclude,
            extend_walk_exclude=opts.extend_walk_exclude,
            relative=opts.relative,
            verbose=opts.verbose,
            version=opts.version,
        ),
        explicit_flags,
    )


def _split_keyed(values: list[str], default_key: str | None, flag: str) -> dict[str, list[str]]:
    """Group `KEY=PATTERN` values by key. Values without a key use `default_key`."""
    result: dict[str, list[str]] = {}
    for value in values:
        key, sep, pattern = value.partition("=")
        if not sep:
            if default_key is None:
                raise ValueError(f"{flag} expects NAME=PATTERN, got: {value}")
            key, pattern = default_key, value
        result.setdefault(key, []).append(pattern)
    return result


def _build_consumer(options: Options) -> SpecConsumer:
    return SpecConsumer(
        name=options.name or Path(options.root or ".").resolve().name,
        platform=options.platform,
        source_files=options.source_files,
        public_header_files=options.public_header_files,
        private_header_files=options.private_header_files,
        preserve_paths=options.preserve_paths,
        vendored_frameworks=options.vendored_frameworks,
        vendored_libraries=options.vendored_libraries,
        resources=_split_keyed(options.resources, DEFAULT_RESOURCE_DESTINATION, "--resource"),
        resource_bundles=_split_keyed(options.resource_bundles, None, "--resource-bundle"),
        exclude_files=options.exclude_files,
        prefix_header_file=options.prefix_header_file,
        license_file=options.license_file,
    )


def _build_accessor(options: Options) -> FileAccessor:
    walk_exclude = list(
        options.walk_exclude if options.walk_exclude is not None else DEFAULT_WALK_EXCLUDES
    )
    walk_exclude += options.extend_walk_exclude or []
    header_extensions = (
        options.header_extensions
        if options.header_extensions is not None
        else DEFAULT_HEADER_EXTENSIONS
    )
    path_list = PathList(options.root or ".", walk_exclude)
    return FileAccessor(path_list, _build_consumer(options), header_extensions)


def _resolve(accessor: FileAccessor, show: str) -> list[Path] | dict[str, list[Path]]:
    """Run the accessor operation selected by `--show`."""
    if show == "resources":
        return accessor.resources()
    if show == "resource-bundles":
        return accessor.resource_bundles()
    if show in ("prefix-header", "readme", "license"):
        single = {
            "prefix-header": accessor.prefix_header,
            "readme": accessor.readme,
            "license": accessor.license,
        }[show]()
        return [single] if single is not None else []
    paths = {
        "source-files": accessor.source_files,
        "headers": accessor.headers,
        "public-headers": accessor.public_headers,
        "private-headers": accessor.private_headers,
        "preserve-paths": accessor.preserve_paths,
        "vendored-frameworks": accessor.vendored_frameworks,
        "vendored-libraries": accessor.vendored_libraries,
    }[show]
    return paths()


def _format_path(path: Path, root: Path, relative: bool) -> str:
    if relative and path.is_relative_to(root):
        return path.relative_to(root).as_posix()
    return str(path)


def main(args: list[str] | None = None) -> int:
    """
    Main entry point for the specfiles CLI.

    Args:
        args: Command-line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    options, explicit_flags = _parse_args(args)

    logging.basicConfig(
        level=logging.DEBUG if options.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    if options.version:
        try:
            version = importlib.metadata.version("specfiles")
            print(f"v{version}")
        except importlib.metadata.PackageNotFoundError:
            print("unknown (package not installed)")
        return 0

    if not options.root:
        print(
            "Error: No root specified. Provide the specification root directory"
            " (use '.' for current directory). Use --help for more options.",
            file=sys.stderr,
        )
        return 1

    try:
        config_path = find_config_file(Path.cwd())
        if config_path:
            log.debug("Using config file %s", config_path)
            merge_cli_with_config(options, load_config(config_path), explicit_flags)

        accessor = _build_accessor(options)
        log.debug("Resolving %s for %r", options.show, accessor)
        resolved = _resolve(accessor, options.show)
    except (SpecFilesError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        # Permission and I/O errors from the walk.
        print(f"Error: {e} (root: {options.root})", file=sys.stderr)
        return 2

    root = accessor.root
    if isinstance(resolved, dict):
        for key, paths in resolved.items():
            for path in paths:
                print(f"{key}\t{_format_path(path, root, options.relative)}")
    else:
        for path in resolved:
            print(_format_path(path, root, options.relative))
    return 0


if __name__ == "__main__":
    sys.exit(main())
