# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Classify Cargo manifests and enumerate workspace members."""

from __future__ import annotations

import glob
import os
import re
import tomllib
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Any, Final

from .config import CleanConfig
from .core.constants import CARGO_MANIFEST, MEMBER_SCAN_LINES, PACKAGE_SECTION, WORKSPACE_SECTION
from .errors import ManifestNotFoundError

_PACKAGE_MARKER: Final[re.Pattern[str]] = re.compile(rf"^\[{PACKAGE_SECTION}\]", re.MULTILINE)
_WORKSPACE_MARKER: Final[re.Pattern[str]] = re.compile(rf"^\[{WORKSPACE_SECTION}\]", re.MULTILINE)
_QUOTED_ENTRY: Final[re.Pattern[str]] = re.compile(r'^\s*"([^"]+)"')
_GLOB_CHARS: Final[frozenset[str]] = frozenset("*?[")


@dataclass(slots=True, frozen=True)
class ProjectManifest:
    """Describe the Cargo manifest found in ``directory``."""

    directory: Path
    has_package_section: bool
    has_workspace_section: bool
    member_paths: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_valid(self) -> bool:
        """Return ``True`` when the manifest declares a package or a workspace."""

        return self.has_package_section or self.has_workspace_section

    @property
    def is_workspace(self) -> bool:
        """Return ``True`` when the manifest declares a ``[workspace]`` section."""

        return self.has_workspace_section

    def member_directory(self, member: str) -> Path:
        """Return the directory a workspace ``member`` entry resolves to."""

        return self.directory / member


@dataclass(slots=True, frozen=True)
class MemberValidation:
    """Partition of declared workspace members into present and missing entries."""

    present: tuple[str, ...] = ()
    missing: tuple[str, ...] = ()

    @property
    def complete(self) -> bool:
        """Return ``True`` when every declared member has its own manifest."""

        return not self.missing


class ManifestClassifier:
    """Read manifests as semi-structured text and classify them."""

    def __init__(
        self,
        *,
        manifest_name: str = CARGO_MANIFEST,
        member_scan_lines: int = MEMBER_SCAN_LINES,
    ) -> None:
        """Create a classifier.

        Args:
            manifest_name: File name of the per-project manifest.
            member_scan_lines: Number of lines after ``[workspace]`` searched
                for member entries when the manifest is not parseable TOML.
        """

        self._manifest_name = manifest_name
        self._member_scan_lines = member_scan_lines

    @classmethod
    def from_config(cls, config: CleanConfig) -> ManifestClassifier:
        """Return a classifier configured from ``config``."""

        return cls(manifest_name=config.manifest_name, member_scan_lines=config.member_scan_lines)

    @property
    def manifest_name(self) -> str:
        """Return the manifest file name the classifier looks for."""

        return self._manifest_name

    def manifest_path(self, directory: Path) -> Path:
        """Return the manifest location inside ``directory``."""

        return directory / self._manifest_name

    def has_manifest(self, directory: Path) -> bool:
        """Return ``True`` when ``directory`` contains a manifest file.

        A manifest that cannot be stat-ed, for example inside a directory
        without search permission, counts as absent.
        """

        return os.path.isfile(self.manifest_path(directory))

    def classify(self, directory: Path) -> ProjectManifest:
        """Classify the manifest stored in ``directory``.

        Args:
            directory: Project directory expected to hold a manifest.

        Returns:
            ProjectManifest: Classification; check :attr:`ProjectManifest.is_valid`
            before treating the directory as a Cargo project.

        Raises:
            ManifestNotFoundError: If the manifest file is absent.
            OSError: If the manifest exists but cannot be read.
        """

        path = self.manifest_path(directory)
        if not os.path.isfile(path):
            raise ManifestNotFoundError(path)
        text = path.read_text(encoding="utf-8", errors="replace")
        has_package = bool(_PACKAGE_MARKER.search(text))
        has_workspace = bool(_WORKSPACE_MARKER.search(text))
        members: tuple[str, ...] = ()
        if has_workspace:
            members = self._extract_members(directory, text)
        return ProjectManifest(
            directory=directory,
            has_package_section=has_package,
            has_workspace_section=has_workspace,
            member_paths=members,
        )

    def is_workspace_root(self, directory: Path) -> bool:
        """Return ``True`` when ``directory`` holds a workspace-marked manifest.

        Unreadable manifests count as non-workspace.
        """

        path = self.manifest_path(directory)
        try:
            text = path.read_text(encoding="utf-8", errors="replace")
        except OSError:
            return False
        return bool(_WORKSPACE_MARKER.search(text))

    def validate_members(self, workspace: ProjectManifest) -> MemberValidation:
        """Check every declared member of ``workspace`` for its own manifest.

        All members are examined; missing entries are collected rather than
        reported one at a time.

        Args:
            workspace: Classified workspace manifest.

        Returns:
            MemberValidation: Present and missing members in declaration order.
        """

        present: list[str] = []
        missing: list[str] = []
        for member in workspace.member_paths:
            if self.has_manifest(workspace.member_directory(member)):
                present.append(member)
            else:
                missing.append(member)
        return MemberValidation(present=tuple(present), missing=tuple(missing))

    def _extract_members(self, directory: Path, text: str) -> tuple[str, ...]:
        """Return member paths declared by the workspace manifest ``text``."""

        try:
            document = tomllib.loads(text)
        except tomllib.TOMLDecodeError:
            return tuple(_scan_member_lines(text, self._member_scan_lines))
        workspace = document.get(WORKSPACE_SECTION)
        if not isinstance(workspace, dict):
            return ()
        declared = _string_entries(workspace.get("members"))
        excluded = {_normalise_member(entry) for entry in _string_entries(workspace.get("exclude"))}
        members: list[str] = []
        for entry in declared:
            for member in _expand_member(directory, entry):
                if member in excluded or member in members:
                    continue
                members.append(member)
        return tuple(members)


def _string_entries(value: Any) -> list[str]:
    """Return the string items of a TOML array, ignoring anything else."""

    if not isinstance(value, list):
        return []
    return [entry for entry in value if isinstance(entry, str) and entry.strip()]


def _normalise_member(entry: str) -> str:
    """Return ``entry`` as a normalised POSIX-style relative path."""

    return str(PurePosixPath(entry.strip()))


def _expand_member(directory: Path, entry: str) -> Iterable[str]:
    """Expand glob member entries relative to the workspace ``directory``.

    Literal entries are returned unchanged so absent members can be reported.
    Absolute patterns expand to absolute paths.
    """

    normalised = _normalise_member(entry)
    if not _GLOB_CHARS.intersection(normalised):
        return [normalised]
    absolute = PurePosixPath(normalised).is_absolute()
    pattern = normalised if absolute else os.path.join(glob.escape(str(directory)), normalised)
    matches = sorted(Path(match) for match in glob.glob(pattern) if os.path.isdir(match))
    if absolute:
        return [path.as_posix() for path in matches]
    return [path.relative_to(directory).as_posix() for path in matches]


def _scan_member_lines(text: str, limit: int) -> Sequence[str]:
    """Collect quoted entries within ``limit`` lines after the workspace marker.

    Used only for manifests that are not valid TOML, so the result is a best
    effort that may include ``exclude`` entries or miss members beyond the
    scan window.
    """

    lines = text.splitlines()
    for index, line in enumerate(lines):
        if _WORKSPACE_MARKER.match(line):
            window = lines[index + 1 : index + 1 + limit]
            break
    else:
        return []
    members: list[str] = []
    for line in window:
        match = _QUOTED_ENTRY.match(line)
        if match:
            members.append(match.group(1))
    return members[:limit]


__all__ = [
    "ManifestClassifier",
    "MemberValidation",
    "ProjectManifest",
]
