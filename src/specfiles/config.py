"""
Config file support for specfiles.

The nearest of `.specfiles.toml`, `specfiles.toml` or a `pyproject.toml` with a
`[tool.specfiles]` table, searching up from the working directory, sets the
header extensions and the directories the snapshot walk never enters:

    header-extensions = [".h", ".hpp"]
    extend-walk-exclude = ["Carthage/"]

or, grouped:

    [headers]
    extensions = [".h", ".hpp"]

    [walk]
    extend-exclude = ["Carthage/"]

Explicit CLI flags override the file, which overrides the built-in defaults.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, TypeVar

if sys.version_info >= (3, 11):
    import tomllib  # pyright: ignore[reportUnreachable]
else:
    import tomli as tomllib  # type: ignore[no-redef]  # pyright: ignore[reportUnreachable]

from specfiles.errors import ConfigError

log = logging.getLogger(__name__)


@dataclass
class SpecFilesConfig:
    """
    Settings read from a config file. `None` means the file does not set the
    field, which is not the same as setting it to an empty list.
    """

    header_extensions: list[str] | None = None
    walk_exclude: list[str] | None = None
    extend_walk_exclude: list[str] | None = None


# Tried in this order within each directory.
CONFIG_FILENAMES = (".specfiles.toml", "specfiles.toml", "pyproject.toml")

_TOP_LEVEL_KEYS = {
    "header-extensions": "header_extensions",
    "walk-exclude": "walk_exclude",
    "extend-walk-exclude": "extend_walk_exclude",
}

_SECTION_KEYS = {
    "headers": {"extensions": "header_extensions"},
    "walk": {"exclude": "walk_exclude", "extend-exclude": "extend_walk_exclude"},
}


def find_config_file(start_dir: Path) -> Path | None:
    """
    The config file nearest to `start_dir`, or `None`. A `pyproject.toml`
    only counts when it has a `[tool.specfiles]` table.
    """
    start = start_dir.resolve()
    for directory in (start, *start.parents):
        for filename in CONFIG_FILENAMES:
            candidate = directory / filename
            if not candidate.is_file():
                continue
            if filename != "pyproject.toml" or _has_tool_table(candidate):
                return candidate
    return None


def _has_tool_table(pyproject: Path) -> bool:
    try:
        with pyproject.open("rb") as f:
            data = tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as e:
        log.debug("Ignoring unreadable %s: %s", pyproject, e)
        return False
    return "specfiles" in data.get("tool", {})


def load_config(config_path: Path) -> SpecFilesConfig:
    """
    Read a config file. Keys use kebab-case (snake_case is accepted too).
    Unknown keys and tables are ignored; badly typed values raise `ConfigError`.
    """
    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(config_path, str(e)) from e

    if config_path.name == "pyproject.toml":
        data = data.get("tool", {}).get("specfiles", {})

    return _parse_config_data(data, config_path)


def _parse_config_data(data: dict[str, Any], config_path: Path) -> SpecFilesConfig:
    values: dict[str, list[str]] = {}
    for key, value in data.items():
        key = key.replace("_", "-")
        section = _SECTION_KEYS.get(key)
        if section is not None and isinstance(value, dict):
            for sub_key, sub_value in value.items():
                field_name = section.get(sub_key.replace("_", "-"))
                if field_name is None:
                    log.debug("%s: ignoring unknown key %s.%s", config_path, key, sub_key)
                    continue
                values[field_name] = _as_string_list(sub_value, f"{key}.{sub_key}", config_path)
        elif key in _TOP_LEVEL_KEYS:
            values[_TOP_LEVEL_KEYS[key]] = _as_string_list(value, key, config_path)
        else:
            log.debug("%s: ignoring unknown key %s", config_path, key)

    return SpecFilesConfig(**values)


def _as_string_list(value: Any, key: str, config_path: Path) -> list[str]:
    if isinstance(value, str):
        return [value]
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return list(value)
    raise ConfigError(config_path, f"`{key}` must be a string or a list of strings")


_T = TypeVar("_T")


def merge_cli_with_config(
    cli_opts: _T,
    config: SpecFilesConfig | None,
    explicit_flags: set[str],
) -> _T:
    """
    Copy each field the config sets onto `cli_opts`, unless the user passed
    the matching flag (named in `explicit_flags`).
    """
    if config is None:
        return cli_opts

    for cfg_field in fields(SpecFilesConfig):
        value = getattr(config, cfg_field.name)
        if value is None or cfg_field.name in explicit_flags:
            continue
        if hasattr(cli_opts, cfg_field.name):
            setattr(cli_opts, cfg_field.name, value)

    return cli_opts
