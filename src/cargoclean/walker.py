# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Walk a directory tree and clean every Cargo project found beneath it."""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path

from .cleaner import ProjectCleaner, ensure_enterable
from .core.logging import info
from .results import CleanOutcome, CleanResult, RunSummary
from .workspace import WorkspaceCoordinator


class TreeWalker:
    """Discover manifests under a root and dispatch each to the right cleaner.

    Workspace roots go to the :class:`WorkspaceCoordinator`; any other
    manifest below a workspace-marked ancestor is left to that workspace and
    skipped; everything else goes to the :class:`ProjectCleaner`.
    """

    def __init__(
        self,
        cleaner: ProjectCleaner,
        *,
        coordinator: WorkspaceCoordinator | None = None,
        exclude_dirs: Iterable[str] | None = None,
    ) -> None:
        """Create a walker.

        Args:
            cleaner: Cleaner used for standalone projects.
            coordinator: Workspace coordinator; built around ``cleaner`` when omitted.
            exclude_dirs: Directory names never descended into, in addition to
                those of the cleaner configuration.
        """

        self._cleaner = cleaner
        self._coordinator = coordinator or WorkspaceCoordinator(cleaner)
        self._classifier = cleaner.classifier
        self._exclude_dirs = cleaner.config.excluded_directories() | frozenset(exclude_dirs or ())
        self._use_emoji = cleaner.use_emoji
        self._workspace_roots: dict[Path, bool] = {}

    def discover(self, root: Path) -> list[Path]:
        """Return every directory beneath ``root`` holding a manifest file.

        Args:
            root: Directory acting as the search boundary.

        Returns:
            list[Path]: Project directories in deterministic top-down order.
        """

        manifest_name = self._classifier.manifest_name
        found: list[Path] = []
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames[:] = sorted(name for name in dirnames if name not in self._exclude_dirs)
            if manifest_name in filenames:
                found.append(Path(dirpath))
        return found

    def run(self, root: Path) -> RunSummary:
        """Clean every project beneath ``root`` and return the aggregate counts.

        Args:
            root: Directory the walk starts from.

        Returns:
            RunSummary: Counters and per-directory results.

        Raises:
            DirectoryAccessError: If a project directory cannot be entered.
        """

        root = root.resolve()
        self._workspace_roots.clear()
        info(f"Starting recursive cargo clean from: {root}", use_emoji=self._use_emoji)
        info(f"Searching for {self._classifier.manifest_name} files...", use_emoji=self._use_emoji)
        summary = RunSummary()
        for directory in self.discover(root):
            summary.register(self.visit(directory))
        return summary

    def visit(self, directory: Path) -> CleanResult:
        """Clean, delegate or skip a single manifest location.

        Args:
            directory: Directory containing a manifest.

        Returns:
            CleanResult: Outcome for ``directory``.

        Raises:
            DirectoryAccessError: If ``directory`` cannot be entered.
        """

        if os.path.isdir(directory):
            ensure_enterable(directory)
        if not self._classifier.has_manifest(directory):
            info(f"Manifest disappeared before cleaning, skipping: {directory}", use_emoji=self._use_emoji)
            return CleanResult(directory, CleanOutcome.SKIPPED_INVALID, "manifest no longer present")
        if self._is_workspace_root(directory):
            return self._coordinator.clean_workspace(directory)
        owner = self.owning_workspace(directory)
        if owner is not None:
            info(f"Skipping workspace member (already processed): {directory}", use_emoji=self._use_emoji)
            return CleanResult(directory, CleanOutcome.SKIPPED_ALREADY_HANDLED, f"handled by workspace {owner}")
        return self._cleaner.clean(directory)

    def owning_workspace(self, directory: Path) -> Path | None:
        """Return the nearest ancestor of ``directory`` that is a workspace root.

        The scan continues up to the filesystem root, beyond the walk's start
        directory.
        """

        for parent in directory.parents:
            if self._is_workspace_root(parent):
                return parent
        return None

    def _is_workspace_root(self, directory: Path) -> bool:
        cached = self._workspace_roots.get(directory)
        if cached is None:
            cached = self._classifier.is_workspace_root(directory)
            self._workspace_roots[directory] = cached
        return cached


def clean_tree(root: Path, cleaner: ProjectCleaner) -> RunSummary:
    """Clean every Cargo project beneath ``root`` using ``cleaner``."""

    return TreeWalker(cleaner).run(root)


__all__ = ["TreeWalker", "clean_tree"]
