# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Pydantic models describing cleaning configuration."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..core.constants import (
    ALWAYS_EXCLUDE_DIRS,
    ARTIFACT_DIR_NAME,
    CARGO_EXECUTABLE,
    CARGO_MANIFEST,
    MEMBER_SCAN_LINES,
)

DEFAULT_FALLBACK_FLAGS: tuple[tuple[str, ...], ...] = (("--offline",), ("--release",))


class CleanConfig(BaseModel):
    """Configuration for recursive Cargo cleaning."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    cargo: str = CARGO_EXECUTABLE
    manifest_name: str = CARGO_MANIFEST
    artifact_dir: str = ARTIFACT_DIR_NAME
    fallback_flags: list[list[str]] = Field(
        default_factory=lambda: [list(flags) for flags in DEFAULT_FALLBACK_FLAGS],
    )
    timeout: float | None = Field(default=None, gt=0)
    exclude_dirs: list[str] = Field(default_factory=list)
    member_scan_lines: int = Field(default=MEMBER_SCAN_LINES, ge=1)

    @field_validator("manifest_name", "artifact_dir")
    @classmethod
    def _single_component(cls, value: str) -> str:
        """Reject names that would escape the project directory.

        Args:
            value: Candidate file or directory name.

        Returns:
            str: The validated name.

        Raises:
            ValueError: If ``value`` is empty or contains path separators.
        """

        if not value or Path(value).name != value or value in {".", ".."}:
            raise ValueError(f"expected a plain file name, got {value!r}")
        return value

    def clean_command(self, *flags: str) -> tuple[str, ...]:
        """Return the ``cargo clean`` invocation extended with ``flags``.

        Args:
            *flags: Additional command-line flags.

        Returns:
            tuple[str, ...]: Command arguments ready for execution.
        """

        return (self.cargo, "clean", *flags)

    def excluded_directories(self) -> frozenset[str]:
        """Return every directory name the tree walk must not descend into.

        VCS metadata and the artifact directory are always excluded;
        ``exclude_dirs`` only adds to them.
        """

        return ALWAYS_EXCLUDE_DIRS | {self.artifact_dir} | frozenset(self.exclude_dirs)


__all__ = ["CleanConfig", "DEFAULT_FALLBACK_FLAGS"]
