"""
TOML config for srcfind.

The nearest `.srcfind.toml`, `srcfind.toml` or `pyproject.toml` with a
`[tool.srcfind]` table, looking upward from the working directory, supplies
defaults for the discovery flags. Keys may be kebab-case and may be grouped in
tables such as `[files]` or `[ignores]`. A flag given on the command line
always beats the config file.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, TypeVar, cast

if sys.version_info >= (3, 11):
    import tomllib  # pyright: ignore[reportUnreachable]
else:
    import tomli as tomllib  # type: ignore[no-redef]  # pyright: ignore[reportUnreachable]

log = logging.getLogger(__name__)

_PYPROJECT = "pyproject.toml"
_CONFIG_FILENAMES = (".srcfind.toml", "srcfind.toml", _PYPROJECT)


class ConfigError(ValueError):
    """A config file was found but holds a value of the wrong type."""


@dataclass
class SrcfindConfig:
    """
    Settings read from a config file. `None` means the file does not mention
    the setting, which is different from setting it to its default.
    """

    files: list[str] | None = None
    extend_files: list[str] | None = None
    ignores: list[str] | None = None
    extend_ignores: list[str] | None = None
    use_ignores: bool | None = None
    respect_gitignore: bool | None = None
    glob_input_paths: bool | None = None
    error_on_unmatched_pattern: bool | None = None

    def overrides(self) -> dict[str, Any]:
        """The settings this file actually sets."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }


_LIST_FIELDS = {"files", "extend_files", "ignores", "extend_ignores"}
_BOOL_FIELDS = {f.name for f in fields(SrcfindConfig)} - _LIST_FIELDS


def _candidates(directory: Path) -> Iterator[Path]:
    for name in _CONFIG_FILENAMES:
        candidate = directory / name
        if candidate.is_file() and (name != _PYPROJECT or _has_tool_table(candidate)):
            yield candidate


def find_config_file(start_dir: Path) -> Path | None:
    """
    Nearest config file at or above `start_dir`. Within one directory
    `.srcfind.toml` wins over `srcfind.toml`, which wins over `pyproject.toml`.
    """
    start = start_dir.resolve()
    for directory in (start, *start.parents):
        found = next(_candidates(directory), None)
        if found is not None:
            return found
    return None


def _has_tool_table(path: Path) -> bool:
    try:
        return "srcfind" in tomllib.loads(path.read_text()).get("tool", {})
    except (tomllib.TOMLDecodeError, OSError):
        return False


def load_config(config_path: Path) -> SrcfindConfig:
    """
    Read `config_path`. Raises `tomllib.TOMLDecodeError` for malformed TOML and
    `ConfigError` for values of the wrong type; both are `ValueError`s.
    """
    data = tomllib.loads(config_path.read_text())
    if config_path.name == _PYPROJECT:
        data = data.get("tool", {}).get("srcfind", {})

    return _parse_config_data(data)


def _flatten(data: dict[str, Any]) -> Iterator[tuple[str, Any]]:
    for key, value in data.items():
        if isinstance(value, dict):
            yield from cast(dict[str, Any], value).items()
        else:
            yield key, value


def _check_type(name: str, value: Any) -> None:
    if name in _BOOL_FIELDS and not isinstance(value, bool):
        raise ConfigError(f"'{name}' must be true or false, got {value!r}")
    if name in _LIST_FIELDS and not (
        isinstance(value, list) and all(isinstance(v, str) for v in cast(list[Any], value))
    ):
        raise ConfigError(f"'{name}' must be a list of strings, got {value!r}")


def _parse_config_data(data: dict[str, Any]) -> SrcfindConfig:
    settings: dict[str, Any] = {}
    for key, value in _flatten(data):
        name = key.replace("-", "_")
        if name not in _LIST_FIELDS and name not in _BOOL_FIELDS:
            log.warning("Ignoring unrecognized config key: %s", key)
            continue
        _check_type(name, value)
        settings[name] = value
    return SrcfindConfig(**settings)


_T = TypeVar("_T")


def merge_cli_with_config(
    cli_opts: _T,
    config: SrcfindConfig | None,
    explicit_flags: set[str],
) -> _T:
    """
    Copy config settings onto `cli_opts`, except those named in
    `explicit_flags`. Returns `cli_opts`.
    """
    if config is None:
        return cli_opts

    for name, value in config.overrides().items():
        if name in explicit_flags or not hasattr(cli_opts, name):
            continue
        log.debug("Using %s=%r from config", name, value)
        setattr(cli_opts, name, value)
    return cli_opts
