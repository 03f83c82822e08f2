# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run external commands with captured, merged output."""

from __future__ import annotations

import shutil

# Bandit: subprocess usage is intentional; commands are argument lists built
# from configuration and never routed through a shell.
import subprocess  # nosec B404
from collections.abc import Sequence
from dataclasses import dataclass, replace
from pathlib import Path
from subprocess import CompletedProcess

from .constants import MISSING_EXECUTABLE_EXIT_STATUS, TIMEOUT_EXIT_STATUS


@dataclass(slots=True, frozen=True)
class CommandOptions:
    """Where and for how long a command may run.

    Attributes:
        cwd: Working directory handed to the child process. The parent's
            working directory is never changed.
        timeout: Seconds to wait before the process is killed; ``None`` waits forever.
    """

    cwd: Path | None = None
    timeout: float | None = None

    def __post_init__(self) -> None:
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be positive")

    def with_cwd(self, cwd: Path | None) -> CommandOptions:
        """Return a copy of the options bound to ``cwd``."""

        return replace(self, cwd=cwd)


def _as_text(value: str | bytes | None) -> str:
    """Return captured stream output as text."""

    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode(errors="ignore")
    return value


def _resolve_executable(args: Sequence[str]) -> list[str]:
    """Return ``args`` with its executable resolved against ``PATH``.

    Raises:
        ValueError: If ``args`` is empty.
        FileNotFoundError: If the executable cannot be found.
    """

    if not args:
        raise ValueError("subprocess command requires at least one argument")
    head, *rest = args
    if Path(head).is_absolute():
        return [head, *rest]
    resolved = shutil.which(head)
    if resolved is None:
        raise FileNotFoundError(f"Executable '{head}' was not found on PATH")
    return [resolved, *rest]


def run_command(args: Sequence[str], *, options: CommandOptions | None = None) -> CompletedProcess[str]:
    """Run ``args`` and return the completed process.

    Standard error is folded into standard output so diagnostics keep their
    order, and a non-zero exit never raises. A timeout is reported as exit
    status ``124`` with a note appended to the output.

    Args:
        args: Command and argument sequence to execute.
        options: Working directory and timeout.

    Returns:
        CompletedProcess[str]: Result whose ``stdout`` holds the combined output.

    Raises:
        FileNotFoundError: If the executable cannot be resolved on ``PATH``.
        OSError: If the process cannot be started, for example because
            ``cwd`` does not exist.
    """

    command = _resolve_executable(args)
    resolved = options or CommandOptions()
    try:
        return subprocess.run(  # nosec B603 - argument list, no shell
            command,
            cwd=str(resolved.cwd) if resolved.cwd is not None else None,
            check=False,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            stdin=subprocess.DEVNULL,
            text=True,
            timeout=resolved.timeout,
        )
    except subprocess.TimeoutExpired as exc:
        note = f"Command timed out after {resolved.timeout:.1f}s"
        partial = _as_text(exc.stdout)
        return CompletedProcess(
            args=command,
            returncode=TIMEOUT_EXIT_STATUS,
            stdout=f"{partial}\n{note}" if partial else note,
            stderr="",
        )


def launch_failure_result(args: Sequence[str], error: OSError) -> CompletedProcess[str]:
    """Return a synthetic failed process for a command that could not start.

    Args:
        args: Command that could not be launched.
        error: Launch failure, typically the ``PATH`` lookup error raised by
            :func:`run_command`.

    Returns:
        CompletedProcess[str]: Result with exit status ``127`` and the error
        message as its output.
    """

    return CompletedProcess(
        args=list(args),
        returncode=MISSING_EXECUTABLE_EXIT_STATUS,
        stdout=str(error),
        stderr="",
    )


__all__ = [
    "CommandOptions",
    "launch_failure_result",
    "run_command",
]
