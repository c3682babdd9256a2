# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Hierarchical loading of ``multilint.toml`` files."""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .config import ConfigError, RootConfig
from .constants import CONFIG_FILE_NAME

LOGGER = logging.getLogger(__name__)


def discover_config_files(start: Path) -> list[Path]:
    """Return every configuration file between the filesystem root and ``start``.

    Files are ordered outermost first so that later entries take precedence
    when merged.

    Args:
        start: Directory from which the upward search begins.

    Returns:
        list[Path]: Existing ``multilint.toml`` files ordered root to leaf.
    """

    directory = start.resolve()
    found: list[Path] = []
    for candidate_dir in (directory, *directory.parents):
        candidate = candidate_dir / CONFIG_FILE_NAME
        if candidate.is_file():
            found.append(candidate)
    found.reverse()
    return found


def _deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    result: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], Mapping) and isinstance(value, Mapping):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _read_toml(path: Path) -> dict[str, Any]:
    """Parse ``path`` as TOML, mapping I/O and syntax failures to :class:`ConfigError`."""

    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except OSError as exc:
        raise ConfigError(f'Cannot read config "{path}": {exc}') from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f'Cannot parse config "{path}": {exc}') from exc


def _validate(document: Mapping[str, Any]) -> RootConfig:
    try:
        return RootConfig.model_validate(document)
    except ValidationError as exc:
        raise ConfigError(f"Cannot parse config: {exc}") from exc


def load_config_files(paths: list[Path]) -> RootConfig:
    """Merge ``paths`` in order and validate the combined document.

    Args:
        paths: Configuration files ordered from lowest to highest precedence.

    Returns:
        RootConfig: Validated configuration.

    Raises:
        ConfigError: If any file cannot be read or parsed, or the merged
            document fails validation.
    """

    merged: dict[str, Any] = {}
    for path in paths:
        LOGGER.debug("loading config %s", path)
        merged = _deep_merge(merged, _read_toml(path))
    return _validate(merged)


def load_config(location: Path) -> RootConfig:
    """Load configuration for ``location``.

    A directory triggers the hierarchical search performed by
    :func:`discover_config_files`; a file is loaded on its own.

    Args:
        location: Project directory or explicit configuration file.

    Returns:
        RootConfig: Validated configuration, empty when no file was found.

    Raises:
        ConfigError: If ``location`` does not exist or a file is invalid.
    """

    if location.is_file():
        return load_config_files([location])
    if not location.is_dir():
        raise ConfigError(f"{location} is neither a configuration file nor a directory")
    return load_config_files(discover_config_files(location))


__all__ = ["discover_config_files", "load_config", "load_config_files"]
