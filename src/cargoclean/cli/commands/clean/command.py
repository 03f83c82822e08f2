# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command for recursive Cargo cleaning."""

from __future__ import annotations

from pathlib import Path

import typer

from ....errors import DirectoryAccessError
from ....walker import TreeWalker
from ...shared import CLIError, build_cli_logger
from .models import (
    CARGO_OPTION,
    CONFIG_OPTION,
    DEBUG_OPTION,
    DIRECTORY_ARGUMENT,
    EMOJI_OPTION,
    TIMEOUT_OPTION,
    build_clean_options,
)
from .services import build_cleaner, emit_run_summary, load_clean_config


def main(
    directory: DIRECTORY_ARGUMENT = Path("."),
    config_path: CONFIG_OPTION = None,
    cargo: CARGO_OPTION = None,
    timeout: TIMEOUT_OPTION = None,
    emoji: EMOJI_OPTION = True,
    debug: DEBUG_OPTION = False,
) -> None:
    """Recursively run 'cargo clean' in every directory containing a Cargo.toml.

    Workspace roots are cleaned as a unit; members of a workspace are not
    visited separately. Exits with status 1 when any project failed to clean.
    """

    options = build_clean_options(directory, config_path, cargo, timeout, emoji, debug)
    logger = build_cli_logger(emoji=options.emoji, debug=options.debug)
    try:
        config = load_clean_config(options, logger=logger)
    except CLIError as exc:
        raise typer.Exit(code=exc.exit_code) from exc

    cleaner = build_cleaner(config, use_emoji=options.emoji)
    try:
        summary = TreeWalker(cleaner).run(options.root)
    except DirectoryAccessError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=1) from exc

    emit_run_summary(summary, logger=logger)
    raise typer.Exit(code=summary.exit_code)


__all__ = ["main"]
