"""Tests for FileAccessor attribute resolution."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from specfiles import (
    AttributeKind,
    ExplicitFileList,
    FileAccessor,
    MissingConsumerError,
    PathList,
    RootNotFoundError,
    SpecConsumer,
)
from specfiles.attributes import SOURCE_FILES_DIR_GLOB, dir_glob_for, header_dir_glob


def _make_tree(root: Path, *rel_paths: str) -> None:
    for rel in rel_paths:
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(rel)


def _rel(root: Path, paths: list[Path]) -> list[str]:
    return [p.relative_to(root).as_posix() for p in paths]


def _accessor(root: Path, **consumer_fields: object) -> FileAccessor:
    consumer = SpecConsumer(name="MyPod", **consumer_fields)  # pyright: ignore[reportArgumentType]
    return FileAccessor(PathList(root), consumer)


@pytest.fixture
def pod(tmp_path: Path) -> Path:
    _make_tree(tmp_path, "src/a.c", "src/a.h", "src/b.m", "docs/readme.md")
    return tmp_path


def test_missing_consumer(tmp_path: Path):
    with pytest.raises(MissingConsumerError) as excinfo:
        FileAccessor(PathList(tmp_path), None)
    assert excinfo.value.root == tmp_path


def test_repr(tmp_path: Path):
    accessor = FileAccessor(PathList(tmp_path), SpecConsumer(name="MyPod", platform="ios"))
    assert repr(accessor) == f"<FileAccessor spec=MyPod platform=ios root={tmp_path}>"
    assert accessor.spec_name == "MyPod"
    assert accessor.platform == "ios"


def test_dir_globs():
    assert dir_glob_for(AttributeKind.SOURCE_FILES, frozenset([".h"])) == SOURCE_FILES_DIR_GLOB
    assert dir_glob_for(AttributeKind.PUBLIC_HEADER_FILES, frozenset([".h", ".hpp"])) == (
        "*.{h,hpp}"
    )
    assert dir_glob_for(AttributeKind.PRESERVE_PATHS, frozenset([".h"])) is None
    assert header_dir_glob([".h"]) == "*.h"
    assert header_dir_glob([]) is None


def test_source_files_directory(pod: Path):
    accessor = _accessor(pod, source_files=["src"])
    assert _rel(pod, accessor.source_files()) == ["src/a.c", "src/a.h", "src/b.m"]
    assert _rel(pod, accessor.headers()) == ["src/a.h"]


def test_source_files_with_excludes(pod: Path):
    _make_tree(pod, "src/b.c", "src/b.h")
    accessor = _accessor(pod, source_files=["**/*.c", "**/*.h"], exclude_files=["**/b.*"])
    assert _rel(pod, accessor.source_files()) == ["src/a.c", "src/a.h"]


def test_no_source_files(pod: Path):
    accessor = _accessor(pod)
    assert accessor.source_files() == []
    assert accessor.headers() == []
    assert not accessor.path_list.is_loaded


def test_headers_subset_of_source_files(pod: Path):
    _make_tree(pod, "src/c.hpp", "src/d.cpp", "src/e.hh")
    accessor = _accessor(pod, source_files=["src"])
    sources = accessor.source_files()
    headers = accessor.headers()
    assert set(headers) <= set(sources)
    assert headers == [p for p in sources if p.suffix in accessor.header_extensions]
    assert _rel(pod, headers) == ["src/a.h", "src/c.hpp", "src/e.hh"]


def test_injected_header_extensions(pod: Path):
    _make_tree(pod, "src/c.hpp")
    consumer = SpecConsumer(source_files=["src"], public_header_files=["src"])
    accessor = FileAccessor(PathList(pod), consumer, header_extensions=["hpp"])
    assert accessor.header_extensions == frozenset([".hpp"])
    assert _rel(pod, accessor.headers()) == ["src/c.hpp"]
    assert _rel(pod, accessor.public_headers()) == ["src/c.hpp"]


def test_public_headers_fall_back_to_headers(pod: Path):
    accessor = _accessor(pod, source_files=["src"])
    assert _rel(pod, accessor.public_headers()) == ["src/a.h"]


def test_public_headers_matching_nothing_fall_back(pod: Path):
    accessor = _accessor(pod, source_files=["src"], public_header_files=["include/*.h"])
    assert accessor.public_headers() == accessor.headers()


def test_public_headers_configured(pod: Path):
    _make_tree(pod, "include/api.h", "include/api.hpp", "include/impl.c")
    accessor = _accessor(pod, source_files=["src"], public_header_files=["include"])
    assert _rel(pod, accessor.public_headers()) == ["include/api.h", "include/api.hpp"]


def test_private_headers(pod: Path):
    _make_tree(pod, "src/Private/p.h")
    accessor = _accessor(pod, private_header_files=["src/Private"])
    assert _rel(pod, accessor.private_headers()) == ["src/Private/p.h"]


def test_preserve_paths_and_vendored(pod: Path):
    _make_tree(pod, "scripts/build.sh", "libs/libfoo.a", "Frameworks/Foo.framework/Foo")
    accessor = _accessor(
        pod,
        preserve_paths=["scripts/*"],
        vendored_libraries=["libs/*.a"],
        vendored_frameworks=["Frameworks/*.framework/*"],
    )
    assert _rel(pod, accessor.preserve_paths()) == ["scripts/build.sh"]
    assert _rel(pod, accessor.vendored_libraries()) == ["libs/libfoo.a"]
    assert _rel(pod, accessor.vendored_frameworks()) == ["Frameworks/Foo.framework/Foo"]


def test_preserve_paths_directory_matches_nothing(pod: Path):
    accessor = _accessor(pod, preserve_paths=["src"])
    assert accessor.preserve_paths() == []


def test_resources_by_destination(pod: Path):
    _make_tree(pod, "Assets/a.png", "Assets/b.png", "Assets/old.png", "Fonts/f.ttf")
    accessor = _accessor(
        pod,
        resources={"resources": ["Assets/*.png"], "fonts": ["Fonts/*", "Assets"]},
        exclude_files=["**/old.*"],
    )
    resources = accessor.resources()
    assert list(resources) == ["resources", "fonts"]
    assert _rel(pod, resources["resources"]) == ["Assets/a.png", "Assets/b.png"]
    # Directories get no default glob for resources.
    assert _rel(pod, resources["fonts"]) == ["Fonts/f.ttf"]


def test_resource_bundles(pod: Path):
    _make_tree(pod, "Assets/a.png")
    accessor = _accessor(pod, resource_bundles={"MyPodAssets": ["Assets/*.png"]})
    assert {k: _rel(pod, v) for k, v in accessor.resource_bundles().items()} == {
        "MyPodAssets": ["Assets/a.png"]
    }


def test_prefix_header(pod: Path):
    accessor = _accessor(pod, prefix_header_file="Support/MyPod-Prefix.pch")
    assert accessor.prefix_header() == pod / "Support/MyPod-Prefix.pch"
    assert _accessor(pod).prefix_header() is None


def test_readme_and_license_detection(tmp_path: Path):
    _make_tree(tmp_path, "README.md", "LICENSE", "docs/readme.md")
    accessor = _accessor(tmp_path)
    assert accessor.readme() == tmp_path / "README.md"
    assert accessor.license() == tmp_path / "LICENSE"


def test_license_variants(tmp_path: Path):
    _make_tree(tmp_path, "Licence.txt")
    assert _accessor(tmp_path).license() == tmp_path / "Licence.txt"


def test_license_configured(tmp_path: Path):
    _make_tree(tmp_path, "LICENSE", "legal/COPYING")
    accessor = _accessor(tmp_path, license_file="legal/COPYING")
    assert accessor.license() == tmp_path / "legal/COPYING"


def test_readme_and_license_absent(pod: Path):
    # docs/readme.md is not at the root.
    accessor = _accessor(pod)
    assert accessor.readme() is None
    assert accessor.license() is None


def test_missing_root(tmp_path: Path):
    accessor = _accessor(tmp_path / "missing", source_files=["src"])
    with pytest.raises(RootNotFoundError):
        accessor.source_files()


def test_explicit_file_list_is_deprecated(pod: Path, caplog: pytest.LogCaptureFixture):
    _make_tree(pod, "vendor/x.c", "vendor/b.c")
    accessor = _accessor(
        pod,
        source_files=["src/*.c", ExplicitFileList(("vendor/*.c",)), "src/*.m"],
        exclude_files=["**/b.*"],
    )
    with caplog.at_level(logging.WARNING, logger="specfiles"):
        result = accessor.source_files()

    # Exclusions do not apply to the explicit file list.
    assert _rel(pod, result) == ["src/a.c", "vendor/b.c", "vendor/x.c"]
    warnings = [r for r in caplog.records if "deprecated" in r.getMessage()]
    assert len(warnings) == 1
    assert warnings[0].getMessage().startswith("[MyPod]")
    assert "source_files" in warnings[0].getMessage()


def test_no_deprecation_for_glob_patterns(pod: Path, caplog: pytest.LogCaptureFixture):
    accessor = _accessor(pod, source_files=["src"])
    with caplog.at_level(logging.WARNING, logger="specfiles"):
        accessor.source_files()
    assert not caplog.records


def test_exclude_files_as_single_string(tmp_path: Path):
    _make_tree(tmp_path, "a.c", "src/b.c")
    accessor = _accessor(tmp_path, source_files="**/*.c", exclude_files="src/b.c")
    assert _rel(tmp_path, accessor.source_files()) == ["a.c"]


def test_exclude_naming_a_directory_does_not_exclude_its_files(tmp_path: Path):
    _make_tree(tmp_path, "Classes/a.m", "Classes/Tests/t.m")
    accessor = _accessor(tmp_path, source_files=["Classes/**/*.m"], exclude_files=["Classes/Tests"])
    assert _rel(tmp_path, accessor.source_files()) == ["Classes/Tests/t.m", "Classes/a.m"]

    accessor = _accessor(
        tmp_path, source_files=["Classes/**/*.m"], exclude_files=["Classes/Tests/**"]
    )
    assert _rel(tmp_path, accessor.source_files()) == ["Classes/a.m"]
