# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Result types shared by the cleaner, workspace coordinator and tree walker."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class CleanOutcome(str, Enum):
    """Outcome of attempting to clean one directory."""

    CLEANED = "cleaned"
    SKIPPED_INVALID = "skipped-invalid"
    SKIPPED_ALREADY_HANDLED = "skipped-already-handled"
    FAILED = "failed"


@dataclass(slots=True, frozen=True)
class CleanResult:
    """Capture the outcome for ``directory`` with an optional diagnostic message."""

    directory: Path
    outcome: CleanOutcome
    message: str | None = None

    @property
    def succeeded(self) -> bool:
        """Return ``True`` unless the outcome is :attr:`CleanOutcome.FAILED`."""

        return self.outcome is not CleanOutcome.FAILED

    @classmethod
    def cleaned(cls, directory: Path, message: str | None = None) -> CleanResult:
        """Return a :attr:`CleanOutcome.CLEANED` result for ``directory``."""

        return cls(directory=directory, outcome=CleanOutcome.CLEANED, message=message)

    @classmethod
    def failed(cls, directory: Path, message: str | None = None) -> CleanResult:
        """Return a :attr:`CleanOutcome.FAILED` result for ``directory``."""

        return cls(directory=directory, outcome=CleanOutcome.FAILED, message=message)


@dataclass(slots=True)
class RunSummary:
    """Aggregate counters accumulated across a tree walk.

    Invalid manifests count as cleaned ("nothing to do"); directories owned by
    an enclosing workspace are recorded as skipped and counted in neither
    total.
    """

    cleaned_count: int = 0
    failed_count: int = 0
    skipped: list[Path] = field(default_factory=list)
    results: list[CleanResult] = field(default_factory=list)

    def register(self, result: CleanResult) -> None:
        """Record ``result`` and update the counters."""

        self.results.append(result)
        if result.outcome is CleanOutcome.SKIPPED_ALREADY_HANDLED:
            self.skipped.append(result.directory)
        elif result.succeeded:
            self.cleaned_count += 1
        else:
            self.failed_count += 1

    @property
    def failures(self) -> list[CleanResult]:
        """Return the failed results in visit order."""

        return [result for result in self.results if not result.succeeded]

    @property
    def exit_code(self) -> int:
        """Return ``1`` when any project failed, ``0`` otherwise."""

        return 1 if self.failed_count > 0 else 0


__all__ = ["CleanOutcome", "CleanResult", "RunSummary"]
