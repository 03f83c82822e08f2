# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Direct removal of Cargo build artifact directories."""

from __future__ import annotations

import shutil
from enum import Enum
from pathlib import Path

from .core.constants import ARTIFACT_DIR_NAME
from .errors import ArtifactRemovalError


class RemovalOutcome(str, Enum):
    """Result of attempting to delete an artifact directory."""

    REMOVED = "removed"
    ABSENT = "absent"


def artifact_path(directory: Path, artifact_dir: str = ARTIFACT_DIR_NAME) -> Path:
    """Return the conventional artifact directory for ``directory``."""

    return directory / artifact_dir


def has_artifacts(directory: Path, artifact_dir: str = ARTIFACT_DIR_NAME) -> bool:
    """Return ``True`` when ``directory`` has an artifact directory on disk."""

    path = artifact_path(directory, artifact_dir)
    return path.is_dir() or path.is_symlink()


def remove_artifacts(directory: Path, artifact_dir: str = ARTIFACT_DIR_NAME) -> RemovalOutcome:
    """Delete the artifact directory of ``directory`` recursively.

    Symlinked artifact directories are unlinked, never followed.

    Args:
        directory: Project directory owning the artifacts.
        artifact_dir: Name of the artifact directory.

    Returns:
        RemovalOutcome: ``REMOVED`` after a successful delete, ``ABSENT`` when
        there was nothing to delete.

    Raises:
        ArtifactRemovalError: If the directory exists but could not be removed.
    """

    path = artifact_path(directory, artifact_dir)
    if not has_artifacts(directory, artifact_dir):
        return RemovalOutcome.ABSENT
    try:
        if path.is_symlink():
            path.unlink()
        else:
            shutil.rmtree(path)
    except OSError as exc:
        raise ArtifactRemovalError(path, exc) from exc
    return RemovalOutcome.REMOVED


__all__ = [
    "RemovalOutcome",
    "artifact_path",
    "has_artifacts",
    "remove_artifacts",
]
