# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models for the multilint runner."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ConfigError(Exception):
    """Raised when configuration input is invalid."""


class GlobalConfig(BaseModel):
    """Settings applied to every configured linter."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    excludes: tuple[str, ...] = Field(default_factory=tuple)


class LinterConfig(BaseModel):
    """Description of a single external linter and the files it receives."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    command: str
    options: tuple[str, ...] = Field(default_factory=tuple)
    includes: tuple[str, ...] = Field(default_factory=tuple)
    excludes: tuple[str, ...] = Field(default_factory=tuple)
    work_dir: Path = Path()
    exclude_submodules: bool = True
    single_file: bool = False
    check_hash: bool = False
    formats: tuple[str, ...] = Field(default_factory=tuple)

    @field_validator("command")
    @classmethod
    def _require_command(cls, value: str) -> str:
        """Reject blank commands so a missing value is not mistaken for a missing tool."""

        if not value.strip():
            raise ValueError("command must not be empty")
        return value

    @field_validator("work_dir")
    @classmethod
    def _reject_absolute_work_dir(cls, value: Path) -> Path:
        """Ensure ``work_dir`` stays relative to the run root.

        Args:
            value: Working directory taken from the configuration file.

        Returns:
            Path: The unchanged relative path.

        Raises:
            ValueError: If the path is absolute.
        """

        if value.is_absolute():
            raise ValueError(f"work_dir must be relative to the project root, got {value}")
        return value

    @property
    def max_files_per_invocation(self) -> int | None:
        """Return the per-invocation file cap implied by ``single_file``."""

        return 1 if self.single_file else None


class RootConfig(BaseModel):
    """Top-level document merged from every ``multilint.toml`` in scope."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    global_: GlobalConfig = Field(default_factory=GlobalConfig, alias="global")
    linter: dict[str, LinterConfig] = Field(default_factory=dict)

    def iter_linters(self) -> list[tuple[str, LinterConfig]]:
        """Return configured linters ordered by name."""

        return sorted(self.linter.items())


__all__ = ["ConfigError", "GlobalConfig", "LinterConfig", "RootConfig"]
