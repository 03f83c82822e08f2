# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Clean a single Cargo project through an ordered fallback cascade."""

from __future__ import annotations

import os
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path
from subprocess import CompletedProcess

from .artifacts import has_artifacts, remove_artifacts
from .config import CleanConfig
from .core.logging import fail, info, ok, warn
from .core.process import CommandOptions, launch_failure_result, run_command
from .errors import ArtifactRemovalError, DirectoryAccessError, ManifestNotFoundError
from .failures import FailureClassifier
from .manifest import ManifestClassifier
from .results import CleanOutcome, CleanResult

CommandRunner = Callable[[Sequence[str], Path | None], CompletedProcess[str]]


class SubprocessRunner:
    """Default :data:`CommandRunner` executing commands with merged output."""

    def __init__(self, *, timeout: float | None = None) -> None:
        """Create a runner.

        Args:
            timeout: Optional per-invocation timeout in seconds.
        """

        self._options = CommandOptions(timeout=timeout)

    def __call__(self, args: Sequence[str], cwd: Path | None) -> CompletedProcess[str]:
        """Run ``args`` inside ``cwd`` and return the completed process.

        Args:
            args: Command to execute.
            cwd: Working directory for the child process.

        Returns:
            CompletedProcess[str]: Completed process whose ``stdout`` holds the
            combined output. Launch failures yield exit status ``127``.

        Raises:
            DirectoryAccessError: If ``cwd`` cannot be entered.
        """

        try:
            return run_command(args, options=self._options.with_cwd(cwd))
        except OSError as exc:
            if cwd is not None and not is_enterable(cwd):
                raise DirectoryAccessError(cwd, exc.strerror or str(exc)) from exc
            return launch_failure_result(args, exc)


def is_enterable(directory: Path) -> bool:
    """Return ``True`` when ``directory`` can be used as a working directory."""

    return directory.is_dir() and os.access(directory, os.R_OK | os.X_OK)


def ensure_enterable(directory: Path) -> None:
    """Raise :class:`DirectoryAccessError` unless ``directory`` can be entered."""

    if not directory.is_dir():
        raise DirectoryAccessError(directory, "not a directory")
    if not os.access(directory, os.R_OK | os.X_OK):
        raise DirectoryAccessError(directory, "permission denied")


def combined_output(completed: CompletedProcess[str]) -> str:
    """Return stdout and stderr of ``completed`` joined as a single text block."""

    parts = [part for part in (completed.stdout, completed.stderr) if isinstance(part, str) and part]
    return "\n".join(dict.fromkeys(parts)).strip()


@dataclass(slots=True)
class _CascadeState:
    """Mutable state threaded through the fallback steps for one directory."""

    directory: Path
    removal_error: ArtifactRemovalError | None = None


CascadeStep = Callable[[_CascadeState], CleanResult | None]


class ProjectCleaner:
    """Clean one project directory, trying each fallback until one succeeds.

    The cascade is: validate the manifest, ``cargo clean``, direct artifact
    removal, ``cargo clean`` with each alternate flag set, and finally a
    diagnostic run whose output decides whether the failure is a recoverable
    workspace issue.
    """

    def __init__(
        self,
        *,
        config: CleanConfig | None = None,
        runner: CommandRunner | None = None,
        classifier: ManifestClassifier | None = None,
        failure_classifier: FailureClassifier | None = None,
        use_emoji: bool = True,
    ) -> None:
        """Create a cleaner.

        Args:
            config: Cleaning configuration; defaults to :class:`CleanConfig`.
            runner: Callable executing external commands.
            classifier: Manifest classifier; derived from ``config`` when omitted.
            failure_classifier: Diagnostic classifier; derived from ``config``
                when omitted.
            use_emoji: When ``True`` log output includes emoji markers.
        """

        self._config = config or CleanConfig()
        self._runner = runner or SubprocessRunner(timeout=self._config.timeout)
        self._classifier = classifier or ManifestClassifier.from_config(self._config)
        self._failures = failure_classifier or FailureClassifier(manifest_name=self._config.manifest_name)
        self._use_emoji = use_emoji
        self._steps: tuple[CascadeStep, ...] = (
            self._try_default_clean,
            self._try_direct_removal,
            self._try_alternate_flags,
            self._diagnose,
        )

    @property
    def config(self) -> CleanConfig:
        """Return the configuration the cleaner operates with."""

        return self._config

    @property
    def classifier(self) -> ManifestClassifier:
        """Return the manifest classifier shared with collaborators."""

        return self._classifier

    @property
    def use_emoji(self) -> bool:
        """Return whether log output includes emoji markers."""

        return self._use_emoji

    def run_cargo(self, directory: Path, *flags: str) -> CompletedProcess[str]:
        """Run ``cargo clean`` with ``flags`` inside ``directory``.

        Args:
            directory: Project directory used as the working directory.
            *flags: Additional ``cargo clean`` flags.

        Returns:
            CompletedProcess[str]: Completed invocation.

        Raises:
            DirectoryAccessError: If ``directory`` cannot be entered.
        """

        ensure_enterable(directory)
        return self._runner(self._config.clean_command(*flags), directory)

    def clean(self, directory: Path) -> CleanResult:
        """Clean ``directory`` and return the outcome.

        Args:
            directory: Project directory containing a manifest.

        Returns:
            CleanResult: ``SKIPPED_INVALID`` for absent or invalid manifests,
            ``CLEANED`` when any cascade step succeeds, ``FAILED`` otherwise.

        Raises:
            DirectoryAccessError: If ``directory`` cannot be entered.
        """

        info(f"Cleaning Cargo project in: {directory}", use_emoji=self._use_emoji)
        skipped = self._check_manifest(directory)
        if skipped is not None:
            return skipped
        state = _CascadeState(directory=directory)
        for step in self._steps:
            result = step(state)
            if result is not None:
                return result
        raise AssertionError("diagnostic step must produce a result")  # pragma: no cover

    def _check_manifest(self, directory: Path) -> CleanResult | None:
        """Return a skip result when ``directory`` has nothing cargo can clean."""

        try:
            manifest = self._classifier.classify(directory)
        except ManifestNotFoundError as exc:
            warn(f"No {self._config.manifest_name} found in: {directory}", use_emoji=self._use_emoji)
            return CleanResult(directory, CleanOutcome.SKIPPED_INVALID, str(exc))
        except OSError as exc:
            warn(f"Unable to read manifest in {directory}: {exc}", use_emoji=self._use_emoji)
            return CleanResult(directory, CleanOutcome.SKIPPED_INVALID, str(exc))
        if manifest.is_valid:
            return None
        warn(f"Invalid {self._config.manifest_name} file detected in: {directory}", use_emoji=self._use_emoji)
        info("Manifest is missing either [package] or [workspace] section", use_emoji=self._use_emoji)
        info("Skipping this project as it cannot be cleaned with cargo", use_emoji=self._use_emoji)
        return CleanResult(directory, CleanOutcome.SKIPPED_INVALID, "manifest has no [package] or [workspace] section")

    def _try_default_clean(self, state: _CascadeState) -> CleanResult | None:
        completed = self.run_cargo(state.directory)
        if completed.returncode == 0:
            ok(f"Successfully cleaned: {state.directory}", use_emoji=self._use_emoji)
            return CleanResult.cleaned(state.directory)
        warn(f"Standard cargo clean failed for: {state.directory}", use_emoji=self._use_emoji)
        info("Attempting alternative cleaning methods...", use_emoji=self._use_emoji)
        return None

    def _try_direct_removal(self, state: _CascadeState) -> CleanResult | None:
        if not has_artifacts(state.directory, self._config.artifact_dir):
            return None
        info(f"Removing {self._config.artifact_dir} directory directly...", use_emoji=self._use_emoji)
        try:
            remove_artifacts(state.directory, self._config.artifact_dir)
        except ArtifactRemovalError as exc:
            fail(
                f"Failed to remove {self._config.artifact_dir} directory: {state.directory}",
                use_emoji=self._use_emoji,
            )
            state.removal_error = exc
            return None
        ok(
            f"Successfully removed {self._config.artifact_dir} directory: {state.directory}",
            use_emoji=self._use_emoji,
        )
        return CleanResult.cleaned(state.directory, "removed artifact directory directly")

    def _try_alternate_flags(self, state: _CascadeState) -> CleanResult | None:
        for flags in self._config.fallback_flags:
            rendered = " ".join(flags)
            info(f"Trying cargo clean with {rendered} flag...", use_emoji=self._use_emoji)
            if self.run_cargo(state.directory, *flags).returncode == 0:
                ok(f"Successfully cleaned with {rendered}: {state.directory}", use_emoji=self._use_emoji)
                return CleanResult.cleaned(state.directory, f"cleaned with {rendered}")
        return None

    def _diagnose(self, state: _CascadeState) -> CleanResult:
        completed = self.run_cargo(state.directory)
        output = combined_output(completed)
        if completed.returncode == 0:
            ok(f"Successfully cleaned: {state.directory}", use_emoji=self._use_emoji)
            return CleanResult.cleaned(state.directory)
        verdict = self._failures.classify(output)
        if not verdict.workspace_issue:
            return self._report_failure(state, output or f"exit status {completed.returncode}")

        warn(f"Workspace dependency issue detected in: {state.directory}", use_emoji=self._use_emoji)
        if verdict.missing_file:
            info(f"Missing dependency file: {verdict.missing_file}", use_emoji=self._use_emoji)
        for hint in verdict.hints:
            info(hint, use_emoji=self._use_emoji)

        caveat = f"cleaned despite {verdict.cause}"
        if not has_artifacts(state.directory, self._config.artifact_dir):
            info(
                f"No {self._config.artifact_dir} directory found - project may already be clean",
                use_emoji=self._use_emoji,
            )
            ok(f"Project appears to be clean (no build artifacts): {state.directory}", use_emoji=self._use_emoji)
            return CleanResult.cleaned(state.directory, caveat)
        info(
            f"Found {self._config.artifact_dir} directory, attempting to remove it...",
            use_emoji=self._use_emoji,
        )
        try:
            remove_artifacts(state.directory, self._config.artifact_dir)
        except ArtifactRemovalError as exc:
            fail(
                f"Failed to remove {self._config.artifact_dir} directory: {state.directory}",
                use_emoji=self._use_emoji,
            )
            return CleanResult.failed(state.directory, str(exc))
        ok(f"Successfully cleaned despite workspace issues: {state.directory}", use_emoji=self._use_emoji)
        return CleanResult.cleaned(state.directory, caveat)

    def _report_failure(self, state: _CascadeState, output: str) -> CleanResult:
        fail(f"Failed to clean: {state.directory}", use_emoji=self._use_emoji)
        info(f"Error details: {output}", use_emoji=self._use_emoji)
        message = output
        if state.removal_error is not None:
            message = f"{output}\n{state.removal_error}"
        return CleanResult.failed(state.directory, message)


__all__ = [
    "CommandRunner",
    "ProjectCleaner",
    "SubprocessRunner",
    "combined_output",
    "ensure_enterable",
    "is_enterable",
]
