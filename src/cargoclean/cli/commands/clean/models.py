# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared data structures for the clean CLI."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import typer

DIRECTORY_ARGUMENT = Annotated[
    Path,
    typer.Argument(
        exists=True,
        file_okay=False,
        dir_okay=True,
        help="Starting directory (default: current directory).",
        show_default=False,
    ),
]
CONFIG_OPTION = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        exists=True,
        dir_okay=False,
        help="TOML configuration file (default: <directory>/.cargo-clean.toml when present).",
    ),
]
CARGO_OPTION = Annotated[
    str | None,
    typer.Option("--cargo", help="Cargo executable to invoke."),
]
TIMEOUT_OPTION = Annotated[
    float | None,
    typer.Option("--timeout", min=0, help="Seconds to wait for each cargo invocation (must be positive)."),
]
EMOJI_OPTION = Annotated[
    bool,
    typer.Option("--emoji/--no-emoji", help="Toggle emoji output."),
]
DEBUG_OPTION = Annotated[
    bool,
    typer.Option("--debug", help="Show resolved configuration details."),
]


@dataclass(slots=True)
class CleanCLIOptions:
    """Capture CLI arguments supplied to the clean command."""

    root: Path
    config_path: Path | None
    cargo: str | None
    timeout: float | None
    emoji: bool
    debug: bool = False

    def overrides(self) -> dict[str, object]:
        """Return configuration overrides supplied on the command line."""

        return {"cargo": self.cargo, "timeout": self.timeout}


def build_clean_options(
    directory: Path,
    config_path: Path | None,
    cargo: str | None,
    timeout: float | None,
    emoji: bool,
    debug: bool = False,
) -> CleanCLIOptions:
    """Construct ``CleanCLIOptions`` from Typer callback parameters."""

    stripped = cargo.strip() if cargo else None
    return CleanCLIOptions(
        root=directory.resolve(),
        config_path=config_path.resolve() if config_path is not None else None,
        cargo=stripped or None,
        timeout=timeout,
        emoji=emoji,
        debug=debug,
    )


__all__ = [
    "CARGO_OPTION",
    "CONFIG_OPTION",
    "DEBUG_OPTION",
    "DIRECTORY_ARGUMENT",
    "EMOJI_OPTION",
    "TIMEOUT_OPTION",
    "CleanCLIOptions",
    "build_clean_options",
]
