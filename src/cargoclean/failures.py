# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Classify ``cargo clean`` diagnostics into recoverable workspace issues."""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Final

from .core.constants import CARGO_MANIFEST


class FailureFamily(str, Enum):
    """Broad groups of recoverable failures, each with its own explanation."""

    MISSING_FILE = "missing-file"
    MALFORMED_MANIFEST = "malformed-manifest"
    MISSING_DEPENDENCY = "missing-dependency"
    WORKSPACE = "workspace"


# Explanations are chosen by family priority, independent of signature order.
_FAMILY_PRIORITY: Final[tuple[FailureFamily, ...]] = (
    FailureFamily.MISSING_FILE,
    FailureFamily.MALFORMED_MANIFEST,
    FailureFamily.MISSING_DEPENDENCY,
    FailureFamily.WORKSPACE,
)

_FAMILY_HINTS: Final[dict[FailureFamily, tuple[str, ...]]] = {
    FailureFamily.MISSING_FILE: ("This is likely due to missing dependency files in the workspace",),
    FailureFamily.MALFORMED_MANIFEST: (
        "This is due to a malformed {manifest} file",
        "The manifest is missing required [package] or [workspace] sections",
    ),
    FailureFamily.MISSING_DEPENDENCY: (
        "This is due to a missing workspace dependency",
        "The project depends on a workspace member that is missing or has issues",
    ),
    FailureFamily.WORKSPACE: ("This is likely due to missing dependencies in workspace root",),
}

_MISSING_FILE_PATH: Final[re.Pattern[str]] = re.compile(r"failed to read [`']([^`']+)[`']")


@dataclass(slots=True, frozen=True)
class FailureSignature:
    """Map a diagnostic pattern to a workspace-issue verdict and cause."""

    pattern: re.Pattern[str]
    cause: str
    family: FailureFamily
    workspace_issue: bool = True

    def matches(self, text: str) -> bool:
        """Return ``True`` when ``text`` contains this signature."""

        return self.pattern.search(text) is not None


@dataclass(slots=True, frozen=True)
class FailureVerdict:
    """Outcome of classifying a failed invocation's diagnostic text."""

    workspace_issue: bool
    cause: str | None = None
    family: FailureFamily | None = None
    missing_file: str | None = None
    hints: tuple[str, ...] = field(default_factory=tuple)


def default_signatures(manifest_name: str = CARGO_MANIFEST) -> tuple[FailureSignature, ...]:
    """Return the built-in signature table for ``manifest_name``.

    Args:
        manifest_name: Manifest file name referenced by missing-file signatures.

    Returns:
        tuple[FailureSignature, ...]: Ordered signature table.
    """

    manifest = re.escape(manifest_name)
    table: Sequence[tuple[str, str, FailureFamily]] = (
        (r"workspace.dependencies", "workspace issue", FailureFamily.WORKSPACE),
        (
            r"dependency.*was not found in.*workspace.dependencies",
            "missing workspace dependency",
            FailureFamily.WORKSPACE,
        ),
        (
            r"error inheriting.*from workspace root manifest",
            "workspace inheritance error",
            FailureFamily.WORKSPACE,
        ),
        (rf"failed to read.*{manifest}", "missing dependency file", FailureFamily.MISSING_FILE),
        (rf"No such file or directory.*{manifest}", "missing dependency file", FailureFamily.MISSING_FILE),
        (
            r"failed to load manifest for dependency",
            "missing dependency manifest",
            FailureFamily.MISSING_DEPENDENCY,
        ),
        (
            r"failed to load manifest for workspace member",
            "workspace member manifest issue",
            FailureFamily.WORKSPACE,
        ),
        (
            r"manifest is missing either a.*package.*or a.*workspace",
            "malformed manifest",
            FailureFamily.MALFORMED_MANIFEST,
        ),
        (r"failed to parse manifest", "manifest parsing error", FailureFamily.MALFORMED_MANIFEST),
    )
    return tuple(
        FailureSignature(pattern=re.compile(pattern), cause=cause, family=family) for pattern, cause, family in table
    )


class FailureClassifier:
    """Evaluate diagnostic text against an ordered :class:`FailureSignature` table."""

    def __init__(
        self,
        signatures: Iterable[FailureSignature] | None = None,
        *,
        manifest_name: str = CARGO_MANIFEST,
    ) -> None:
        """Create a classifier.

        Args:
            signatures: Signature table; defaults to :func:`default_signatures`.
            manifest_name: Manifest file name substituted into explanations.
        """

        self._signatures = tuple(signatures) if signatures is not None else default_signatures(manifest_name)
        self._manifest_name = manifest_name

    @property
    def signatures(self) -> tuple[FailureSignature, ...]:
        """Return the signature table in evaluation order."""

        return self._signatures

    def classify(self, text: str) -> FailureVerdict:
        """Classify ``text`` produced by a failed invocation.

        The verdict is the logical OR over all matching workspace-issue
        signatures; the cause reported is that of the first such match.

        Args:
            text: Combined stdout/stderr of the failed command.

        Returns:
            FailureVerdict: Classification result; ``workspace_issue`` is
            ``False`` when no signature matches.
        """

        matched = [
            signature for signature in self._signatures if signature.workspace_issue and signature.matches(text)
        ]
        if not matched:
            return FailureVerdict(workspace_issue=False)
        families = {signature.family for signature in matched}
        family = next(candidate for candidate in _FAMILY_PRIORITY if candidate in families)
        missing_file = None
        if family is FailureFamily.MISSING_FILE:
            found = _MISSING_FILE_PATH.search(text)
            missing_file = found.group(1) if found else None
        hints = tuple(hint.format(manifest=self._manifest_name) for hint in _FAMILY_HINTS[family])
        return FailureVerdict(
            workspace_issue=True,
            cause=matched[0].cause,
            family=family,
            missing_file=missing_file,
            hints=hints,
        )


def classify_failure(text: str, *, manifest_name: str = CARGO_MANIFEST) -> FailureVerdict:
    """Classify ``text`` with the built-in signature table."""

    return FailureClassifier(manifest_name=manifest_name).classify(text)


__all__ = [
    "FailureClassifier",
    "FailureFamily",
    "FailureSignature",
    "FailureVerdict",
    "classify_failure",
    "default_signatures",
]
