# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Custom exceptions raised while cleaning Cargo trees."""

from __future__ import annotations

from pathlib import Path


class CleanError(RuntimeError):
    """Base class for errors raised by the cleaning orchestrator."""


class ManifestNotFoundError(CleanError, FileNotFoundError):
    """Raised when a directory does not contain a Cargo manifest."""

    def __init__(self, manifest: Path) -> None:
        """Create the error for the absent ``manifest`` path."""

        super().__init__(f"No manifest found at {manifest}")
        self.manifest = manifest


class DirectoryAccessError(CleanError):
    """Raised when a project directory cannot be entered; aborts the whole run."""

    def __init__(self, directory: Path, reason: str) -> None:
        """Create the error for ``directory`` with a human-readable ``reason``."""

        super().__init__(f"Failed to enter directory {directory}: {reason}")
        self.directory = directory
        self.reason = reason


class ArtifactRemovalError(CleanError):
    """Raised when an artifact directory exists but cannot be removed."""

    def __init__(self, path: Path, cause: OSError) -> None:
        """Create the error for ``path`` wrapping the underlying ``cause``."""

        super().__init__(f"Failed to remove {path}: {cause.strerror or cause}")
        self.path = path
        self.cause = cause


class ConfigError(CleanError):
    """Raised when configuration input is invalid."""


__all__ = (
    "ArtifactRemovalError",
    "CleanError",
    "ConfigError",
    "DirectoryAccessError",
    "ManifestNotFoundError",
)
