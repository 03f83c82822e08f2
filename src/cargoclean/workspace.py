# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Coordinate cleaning of Cargo workspace roots and their members."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from .artifacts import RemovalOutcome, has_artifacts, remove_artifacts
from .cleaner import ProjectCleaner
from .core.logging import fail, info, ok, warn
from .errors import ArtifactRemovalError, ManifestNotFoundError
from .manifest import ProjectManifest
from .results import CleanResult

WORKSPACE_FLAG = "--workspace"


@dataclass(slots=True)
class MemberTally:
    """Per-member outcomes gathered while cleaning a workspace member by member."""

    cleaned: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    root_artifacts_removed: bool = False
    root_error: ArtifactRemovalError | None = None

    @property
    def any_cleaned(self) -> bool:
        """Return ``True`` when a member or the shared artifact directory was cleaned."""

        return bool(self.cleaned) or self.root_artifacts_removed

    @property
    def any_failed(self) -> bool:
        """Return ``True`` when a member or the shared artifact directory could not be cleaned."""

        return bool(self.failed) or self.root_error is not None


class WorkspaceCoordinator:
    """Clean workspace roots, degrading to member-by-member cleaning on trouble.

    A workspace whose members are partly missing is never failed outright:
    every present member is cleaned individually and the workspace counts as
    cleaned when at least one member was handled. Only an artifact removal
    error produces a failure. When ``cargo clean --workspace`` fails and the
    members cannot be cleaned either, the root goes through the plain
    project cascade.
    """

    def __init__(self, cleaner: ProjectCleaner) -> None:
        """Create a coordinator delegating per-project work to ``cleaner``.

        Args:
            cleaner: Cleaner used for members and as the plain-project fallback.
        """

        self._cleaner = cleaner
        self._use_emoji = cleaner.use_emoji

    def clean_workspace(self, root: Path) -> CleanResult:
        """Clean the workspace rooted at ``root``.

        Args:
            root: Directory whose manifest declares a ``[workspace]`` section.

        Returns:
            CleanResult: Aggregated outcome counted once for the whole workspace.

        Raises:
            DirectoryAccessError: If ``root`` or a member cannot be entered.
        """

        info(f"Cleaning workspace project in: {root}", use_emoji=self._use_emoji)
        classifier = self._cleaner.classifier
        try:
            manifest = classifier.classify(root)
        except (ManifestNotFoundError, OSError):
            return self._cleaner.clean(root)
        if not manifest.is_workspace:
            return self._cleaner.clean(root)

        info("Detected workspace root, validating dependencies...", use_emoji=self._use_emoji)
        validation = classifier.validate_members(manifest)
        if not validation.complete:
            for member in validation.missing:
                missing_manifest = classifier.manifest_path(manifest.member_directory(member))
                warn(f"Missing workspace member: {missing_manifest}", use_emoji=self._use_emoji)
            warn("Workspace has missing dependencies, attempting alternative cleaning...", use_emoji=self._use_emoji)
            tally = self._clean_members(manifest, validation.present)
            return self._aggregate(manifest, tally)

        info("Workspace dependencies validated, cleaning workspace members...", use_emoji=self._use_emoji)
        if self._cleaner.run_cargo(root, WORKSPACE_FLAG).returncode == 0:
            ok(f"Successfully cleaned workspace: {root}", use_emoji=self._use_emoji)
            return CleanResult.cleaned(root)

        if manifest.member_paths:
            warn("Workspace clean failed, trying individual members...", use_emoji=self._use_emoji)
            tally = self._clean_members(manifest, manifest.member_paths)
            if tally.any_cleaned or not tally.any_failed:
                return self._aggregate(manifest, tally)
        warn("Falling back to cleaning the workspace root as a single project...", use_emoji=self._use_emoji)
        return self._cleaner.clean(root)

    def _clean_members(self, manifest: ProjectManifest, members: Sequence[str]) -> MemberTally:
        """Clean each of ``members`` individually, removing artifacts directly on failure."""

        tally = MemberTally()
        for member in members:
            directory = manifest.member_directory(member)
            info(f"Cleaning workspace member: {member}", use_emoji=self._use_emoji)
            if self._cleaner.clean(directory).succeeded:
                tally.cleaned.append(member)
                continue
            warn(f"Failed to clean workspace member: {member}", use_emoji=self._use_emoji)
            info("This member may have dependency issues", use_emoji=self._use_emoji)
            if self._remove_member_artifacts(member, directory):
                tally.cleaned.append(member)
            else:
                tally.failed.append(member)
        self._remove_root_artifacts(manifest.directory, tally)
        return tally

    def _remove_member_artifacts(self, member: str, directory: Path) -> bool:
        """Return ``True`` when ``member`` has no artifacts left afterwards."""

        artifact_dir = self._cleaner.config.artifact_dir
        if not has_artifacts(directory, artifact_dir):
            info(f"No {artifact_dir} directory found for: {member} (may already be clean)", use_emoji=self._use_emoji)
            return True
        info(f"Attempting direct {artifact_dir} removal for: {member}", use_emoji=self._use_emoji)
        try:
            remove_artifacts(directory, artifact_dir)
        except ArtifactRemovalError as exc:
            fail(f"Failed to remove {artifact_dir} directory for: {member} ({exc})", use_emoji=self._use_emoji)
            return False
        ok(f"Successfully removed {artifact_dir} directory for: {member}", use_emoji=self._use_emoji)
        return True

    def _remove_root_artifacts(self, root: Path, tally: MemberTally) -> None:
        """Remove the shared workspace artifact directory, recording the outcome on ``tally``."""

        artifact_dir = self._cleaner.config.artifact_dir
        if not has_artifacts(root, artifact_dir):
            return
        info(f"Removing workspace {artifact_dir} directory directly...", use_emoji=self._use_emoji)
        try:
            outcome = remove_artifacts(root, artifact_dir)
        except ArtifactRemovalError as exc:
            fail(f"Failed to remove workspace {artifact_dir} directory: {root}", use_emoji=self._use_emoji)
            tally.root_error = exc
            return
        tally.root_artifacts_removed = outcome is RemovalOutcome.REMOVED
        ok(f"Successfully removed workspace {artifact_dir} directory: {root}", use_emoji=self._use_emoji)

    def _aggregate(self, manifest: ProjectManifest, tally: MemberTally) -> CleanResult:
        """Fold member outcomes into one result for the workspace root."""

        root = manifest.directory
        if tally.cleaned:
            ok(f"Cleaned {len(tally.cleaned)} workspace members", use_emoji=self._use_emoji)
        if tally.failed:
            warn(f"Failed to clean {len(tally.failed)} workspace members", use_emoji=self._use_emoji)

        if tally.any_cleaned:
            message = None
            if tally.failed:
                message = f"failed members: {', '.join(tally.failed)}"
            return CleanResult.cleaned(root, message)
        if tally.any_failed:
            reasons = [f"failed members: {', '.join(tally.failed)}"] if tally.failed else []
            if tally.root_error is not None:
                reasons.append(str(tally.root_error))
            return CleanResult.failed(root, "; ".join(reasons))
        ok(f"Workspace appears to be clean (no build artifacts): {root}", use_emoji=self._use_emoji)
        return CleanResult.cleaned(root, "nothing to clean")


__all__ = ["MemberTally", "WorkspaceCoordinator"]
